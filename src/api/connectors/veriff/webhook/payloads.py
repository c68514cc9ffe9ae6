"""Extração de identificadores dos payloads de webhook da Veriff.

Formatos aceitos:
- decisão / evento de verificação: {"verification": {"id": ..., "code": ...}}
- comprovante de endereço: {"id": ..., "addressId": ...}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .receive import InvalidPayloadError


@dataclass(frozen=True, slots=True)
class SessionReference:
    """Identificadores extraídos de um webhook."""

    session_id: str
    code: int | None = None
    address_id: str | None = None


def extract_session_id(payload: dict[str, Any]) -> str:
    """Session id em `verification.id` ou, na falta, em `id`.

    Raises:
        InvalidPayloadError: Se nenhum dos dois estiver presente.
    """
    verification = payload.get("verification")
    if isinstance(verification, dict):
        session_id = verification.get("id")
        if isinstance(session_id, str) and session_id:
            return session_id

    session_id = payload.get("id")
    if isinstance(session_id, str) and session_id:
        return session_id

    raise InvalidPayloadError("missing_session_id")


def parse_verification_reference(payload: dict[str, Any]) -> SessionReference:
    """Referência de webhooks de decisão e de evento de verificação."""
    session_id = extract_session_id(payload)
    code: int | None = None
    verification = payload.get("verification")
    raw_code = verification.get("code") if isinstance(verification, dict) else payload.get("code")
    if isinstance(raw_code, int):
        code = raw_code
    elif isinstance(raw_code, str) and raw_code.isdigit():
        code = int(raw_code)
    return SessionReference(session_id=session_id, code=code)


def parse_address_reference(payload: dict[str, Any]) -> SessionReference:
    """Referência de webhooks de comprovante de endereço."""
    session_id = extract_session_id(payload)
    address_id = payload.get("addressId")
    return SessionReference(
        session_id=session_id,
        address_id=address_id if isinstance(address_id, str) and address_id else None,
    )
