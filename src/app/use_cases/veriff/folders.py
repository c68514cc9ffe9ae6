"""Hierarquia de pastas das sessões no repositório de documentos."""

from __future__ import annotations

APPROVED_DECISION_CODE = 9001
STARTED_EVENT_CODE = 7001
SUBMITTED_EVENT_CODE = 7002

SUCCESSFUL_FOLDER = "Successful"
UNSUCCESSFUL_FOLDER = "Unsuccessful"
STARTED_FOLDER = "Started"
SUBMITTED_FOLDER = "Submitted"
VERIFICATION_EVENT_FOLDER = "VerificationEvent"

DECISION_EVENT_LEAF = "DecisionEvent"
VERIFICATION_EVENT_LEAF = "VerificationEvent"
PROOF_OF_ADDRESS_LEAF = "ProofOfAddress"


def join(*segments: str) -> str:
    return "/".join(segment.strip("/") for segment in segments if segment)


def decision_folder(code: int | None) -> str:
    return SUCCESSFUL_FOLDER if code == APPROVED_DECISION_CODE else UNSUCCESSFUL_FOLDER


def verification_event_folder(code: int | None) -> str:
    if code == STARTED_EVENT_CODE:
        return STARTED_FOLDER
    if code == SUBMITTED_EVENT_CODE:
        return SUBMITTED_FOLDER
    return VERIFICATION_EVENT_FOLDER


def session_folder(parent: str, person_name: str, session_id: str) -> str:
    """`{parent}/{Nome Sobrenome}_{sessionId}`."""
    return join(parent, f"{_clean(person_name)}_{session_id}")


def kyc_folder(root: str, person_name: str) -> str:
    """`{root}/{Nome Sobrenome}_KYC` (mídia de comprovante de endereço)."""
    return join(root, f"{_clean(person_name)}_KYC")


def media_folder(parent: str, item_id: str, leaf: str) -> str:
    """`{parent}/{attemptId ou addressId}/{leaf}`."""
    return join(parent, item_id, leaf)


def _clean(name: str) -> str:
    # "/" em nome criaria um nível extra de pasta
    return name.replace("/", "-").strip()
