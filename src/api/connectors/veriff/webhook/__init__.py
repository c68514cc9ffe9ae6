"""Webhook Veriff: assinatura, parsing e extração da sessão."""

from .authenticator import SignatureResult, WebhookAuthenticator
from .payloads import (
    SessionReference,
    extract_session_id,
    parse_address_reference,
    parse_verification_reference,
)
from .receive import (
    SIGNATURE_HEADER,
    InvalidJsonError,
    InvalidPayloadError,
    InvalidSignatureError,
    MissingSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)

__all__ = [
    "SIGNATURE_HEADER",
    "InvalidJsonError",
    "InvalidPayloadError",
    "InvalidSignatureError",
    "MissingSignatureError",
    "SessionReference",
    "SignatureResult",
    "WebhookAuthenticator",
    "WebhookRequestError",
    "extract_session_id",
    "parse_address_reference",
    "parse_verification_reference",
    "parse_webhook_request",
]
