"""Assinatura HMAC-SHA256 usada pela Veriff nos dois sentidos.

- Saída: assina o identificador do recurso (session/attempt/media id).
- Entrada: a Veriff assina o corpo inteiro do webhook.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any


def canonical_payload_bytes(payload: Any) -> bytes:
    """Converte o payload para os bytes que foram assinados.

    bytes passam intactos; str vira UTF-8; estruturas são serializadas
    sem espaços, mantendo a ordem de chaves já existente.
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_signature(message: bytes, secret: str) -> str:
    """HMAC-SHA256 em hexadecimal minúsculo."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def sign_identifier(identifier: str, secret: str) -> str:
    """Assinatura do header X-HMAC-SIGNATURE para chamadas à Station API."""
    return compute_signature(identifier.encode("utf-8"), secret)


def sign_payload(payload: Any, secret: str) -> str:
    """Assinatura de um corpo de webhook (estruturado ou bruto)."""
    return compute_signature(canonical_payload_bytes(payload), secret)


def signatures_match(expected: str, received: str) -> bool:
    """Comparação em tempo constante, tolerante a caixa e espaços."""
    return hmac.compare_digest(expected.lower(), received.strip().lower())
