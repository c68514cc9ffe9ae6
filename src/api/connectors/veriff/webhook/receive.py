"""Parse e validação inicial do webhook (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .authenticator import SignatureResult, WebhookAuthenticator

SIGNATURE_HEADER = "x-hmac-signature"


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class MissingSignatureError(WebhookRequestError):
    """Header de assinatura ausente."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura não confere com nenhuma credencial."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


class InvalidPayloadError(WebhookRequestError):
    """Payload sem os campos que identificam a sessão."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    authenticator: WebhookAuthenticator,
) -> tuple[dict[str, object], SignatureResult]:
    """Valida assinatura sobre o corpo bruto e parseia o JSON.

    Args:
        raw_body: Corpo bruto do request (exatamente como assinado)
        headers: Headers recebidos
        authenticator: Autenticador ligado ao pool de credenciais

    Raises:
        MissingSignatureError: Sem header X-HMAC-SIGNATURE
        InvalidSignatureError: Assinatura inválida
        InvalidJsonError: JSON inválido ou não-objeto

    Returns:
        (payload dict, SignatureResult)
    """
    signature = _get_header(headers, SIGNATURE_HEADER)
    if not signature:
        raise MissingSignatureError("missing_signature")

    signature_result = authenticator.authenticate(signature, raw_body)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature_result


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None
