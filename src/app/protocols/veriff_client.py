"""Contrato do cliente da Station API usado pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from api.connectors.veriff.models import Attempt, MediaList, MediaStream


class VeriffClientProtocol(Protocol):
    """Operações por recurso; todas retornam None quando o dado não está disponível."""

    async def get_session_decision(self, session_id: str) -> dict[str, Any] | None: ...

    async def get_session_person(self, session_id: str) -> dict[str, Any] | None: ...

    async def get_session_media(self, session_id: str) -> MediaList | None: ...

    async def get_watchlist_screening(self, session_id: str) -> dict[str, Any] | None: ...

    async def get_ine_registry(self, session_id: str, version: str) -> dict[str, Any] | None: ...

    async def get_curp_registry(self, session_id: str, version: str) -> dict[str, Any] | None: ...

    async def get_session_attempts(self, session_id: str) -> list[Attempt] | None: ...

    async def get_attempt_media(self, attempt_id: str) -> MediaList | None: ...

    async def get_media(self, media_id: str) -> MediaStream | None: ...

    async def get_address_media(self, address_id: str) -> MediaList | None: ...

    async def get_address_media_by_id(self, media_id: str) -> MediaStream | None: ...
