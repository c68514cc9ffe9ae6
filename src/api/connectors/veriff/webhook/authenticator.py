"""Autenticação de webhooks da Veriff contra todas as credenciais do pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.connectors.veriff.signature import sign_payload, signatures_match

if TYPE_CHECKING:
    from api.connectors.veriff.credentials import CredentialPool


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da validação de assinatura."""

    valid: bool
    matched_index: int | None = None
    error: str | None = None


class WebhookAuthenticator:
    """Valida X-HMAC-SIGNATURE recalculando o HMAC com cada shared secret.

    A Veriff pode assinar com qualquer integração configurada, então o
    resultado não depende do par "ativo" do pool. Todos os pares são
    sempre verificados.
    """

    def __init__(self, credentials: CredentialPool) -> None:
        self._credentials = credentials

    def authenticate(self, signature: str | None, payload: Any) -> SignatureResult:
        if not signature or not signature.strip():
            return SignatureResult(valid=False, error="missing_signature")

        matched_index: int | None = None
        for index, pair in enumerate(self._credentials):
            expected = sign_payload(payload, pair.shared_secret)
            if signatures_match(expected, signature) and matched_index is None:
                matched_index = index

        if matched_index is None:
            return SignatureResult(valid=False, error="signature_mismatch")
        return SignatureResult(valid=True, matched_index=matched_index)

    def verify(self, signature: str | None, payload: Any) -> bool:
        """True se a assinatura confere com algum shared secret."""
        return self.authenticate(signature, payload).valid
