"""Conector Veriff - adapter de borda para a Station API.

Responsabilidades:
- Assinatura HMAC de chamadas e validação de webhooks
- Pool de credenciais com rotação em falha
- Cliente HTTP com failover entre credenciais
- Modelos de mídia/attempts
"""

from .credentials import CredentialPair, CredentialPool
from .errors import VeriffApiError, VeriffHttpError, parse_veriff_error
from .http_client import (
    AUTH_CLIENT_HEADER,
    SIGNATURE_HEADER,
    VeriffApiClient,
    create_veriff_client,
)
from .models import Attempt, MediaItem, MediaList, MediaStream
from .resources import RegistryCheck, ResourceKind, ResourcePath, extract_signing_identifier
from .signature import canonical_payload_bytes, sign_identifier, sign_payload

__all__ = [
    "AUTH_CLIENT_HEADER",
    "SIGNATURE_HEADER",
    "Attempt",
    "CredentialPair",
    "CredentialPool",
    "MediaItem",
    "MediaList",
    "MediaStream",
    "RegistryCheck",
    "ResourceKind",
    "ResourcePath",
    "VeriffApiClient",
    "VeriffApiError",
    "VeriffHttpError",
    "canonical_payload_bytes",
    "create_veriff_client",
    "extract_signing_identifier",
    "parse_veriff_error",
    "sign_identifier",
    "sign_payload",
]
