"""Caminhos de recursos da Station API e o identificador assinado de cada um.

A Veriff assina apenas o segmento que segue o prefixo do recurso
(`/sessions/{id}/...` → `{id}`), não o corpo nem a URL inteira.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import quote, urlencode


class ResourceKind(StrEnum):
    """Prefixos de recurso conhecidos."""

    SESSIONS = "sessions"
    ATTEMPTS = "attempts"
    MEDIA = "media"
    ADDRESS = "address"
    ADDRESS_MEDIA = "address-media"
    TRANSPORTATION_REGISTRY = "transportation-registry"


class RegistryCheck(StrEnum):
    """Registry checks por versão anexados à decisão da sessão."""

    INE = "ine-registry"
    CURP = "curp-registry"


# Alternativas mais longas primeiro (address-media antes de address)
_KIND_PATTERN = "|".join(
    re.escape(kind.value) for kind in sorted(ResourceKind, key=lambda k: len(k.value), reverse=True)
)
_IDENTIFIER_RE = re.compile(rf"/(?:{_KIND_PATTERN})/([^/?#]+)")


@dataclass(frozen=True, slots=True)
class ResourcePath:
    """Recurso da Station API: prefixo, identificador, sufixo e query."""

    kind: ResourceKind
    identifier: str
    suffix: str = ""
    query: tuple[tuple[str, str], ...] = ()

    @property
    def path(self) -> str:
        path = f"/{self.kind.value}/{quote(self.identifier, safe='')}"
        if self.suffix:
            path = f"{path}/{self.suffix.strip('/')}"
        if self.query:
            path = f"{path}?{urlencode(self.query, quote_via=quote)}"
        return path

    @property
    def signing_identifier(self) -> str:
        """Segmento assinado, extraído do caminho como a Veriff o recalcula."""
        return extract_signing_identifier(self.path)

    # Fábricas usadas pelo client
    @classmethod
    def session(cls, session_id: str, suffix: str) -> ResourcePath:
        return cls(ResourceKind.SESSIONS, session_id, suffix)

    @classmethod
    def registry_check(cls, session_id: str, check: RegistryCheck, version: str) -> ResourcePath:
        return cls(
            ResourceKind.SESSIONS,
            session_id,
            f"decision/{check.value}",
            (("version", version),),
        )

    @classmethod
    def attempt_media(cls, attempt_id: str) -> ResourcePath:
        return cls(ResourceKind.ATTEMPTS, attempt_id, "media")

    @classmethod
    def media(cls, media_id: str) -> ResourcePath:
        return cls(ResourceKind.MEDIA, media_id)

    @classmethod
    def address_media_list(cls, address_id: str) -> ResourcePath:
        return cls(ResourceKind.ADDRESS, address_id, "media")

    @classmethod
    def address_media(cls, media_id: str) -> ResourcePath:
        return cls(ResourceKind.ADDRESS_MEDIA, media_id)


def extract_signing_identifier(url: str) -> str:
    """Extrai o identificador assinável de uma URL/caminho arbitrário.

    Returns:
        O segmento após o primeiro prefixo conhecido, ou "" se nenhum casar.
    """
    match = _IDENTIFIER_RE.search(url)
    return match.group(1) if match else ""
