"""Base dos handlers de webhook da Veriff.

Cada handler agrega os dados da sessão, cria a pasta da sessão no
repositório de documentos e grava os documentos JSON e a mídia dos
attempts. O handler não conhece HTTP: devolve um `HandlerResult` que a
rota traduz em status.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from app.services.session_aggregator import fetch_attempt_media
from app.use_cases.veriff import folders
from utils.errors import DocumentStoreError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Mapping

    from api.connectors.veriff.models import Attempt, MediaItem, MediaStream
    from api.connectors.veriff.webhook import SessionReference
    from app.protocols import DocumentStoreProtocol, VeriffClientProtocol
    from app.services.session_aggregator import SessionRecord

    MediaFetcher = Callable[[str], Awaitable[MediaStream | None]]

logger = logging.getLogger(__name__)

DEFAULT_ROOT_FOLDER = "KYC Details"
DEFAULT_MEDIA_CONCURRENCY = 4


class HandlerStatus(StrEnum):
    UPLOADED = "uploaded"
    NOT_FOUND = "not_found"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True, slots=True)
class HandlerResult:
    """Resultado do processamento de um webhook."""

    status: HandlerStatus
    session_id: str
    folder: str | None = None
    documents: int = 0
    media_files: int = 0

    @property
    def uploaded(self) -> bool:
        return self.status is HandlerStatus.UPLOADED


class WebhookHandler(ABC):
    """Comportamento comum aos três tipos de webhook."""

    event_name: str = "webhook"

    def __init__(
        self,
        client: VeriffClientProtocol,
        store: DocumentStoreProtocol,
        *,
        version: str,
        root_folder: str = DEFAULT_ROOT_FOLDER,
        media_concurrency: int = DEFAULT_MEDIA_CONCURRENCY,
    ) -> None:
        self._client = client
        self._store = store
        self._version = version
        self._root_folder = root_folder
        self._media_concurrency = max(1, media_concurrency)

    @abstractmethod
    async def execute(self, reference: SessionReference) -> HandlerResult:
        """Agrega a sessão e grava os documentos e a mídia."""

    # ── Pré-condições ─────────────────────────────────────────────────────

    def _check_record(self, record: SessionRecord) -> HandlerResult | None:
        """Retorna o resultado de descarte, ou None se a sessão pode ser gravada."""
        if record.is_empty:
            logger.info(
                "session_data_not_found",
                extra={"event": self.event_name, "session_id": record.session_id},
            )
            return HandlerResult(HandlerStatus.NOT_FOUND, record.session_id)
        if record.person_name is None:
            logger.info(
                "session_identity_missing",
                extra={"event": self.event_name, "session_id": record.session_id},
            )
            return HandlerResult(HandlerStatus.INSUFFICIENT_DATA, record.session_id)
        return None

    # ── Uploads ───────────────────────────────────────────────────────────

    async def upload_documents(self, folder: str, documents: Mapping[str, Any]) -> int:
        """Grava `{nome}.json` para cada documento; valores None são ignorados.

        Returns:
            Quantidade de documentos efetivamente gravados.
        """
        results = await _gather_settled(
            self._store.upload_json(folder, f"{name}.json", value)
            for name, value in documents.items()
        )
        return sum(1 for uploaded in results if uploaded)

    async def upload_media_items(
        self,
        items: Iterable[MediaItem],
        folder: str,
        fetch: MediaFetcher,
    ) -> int:
        """Baixa e grava cada mídia como `{context}.{subtipo}`.

        Até `media_concurrency` mídias em paralelo. Mídia indisponível,
        interrompida no download ou recusada na gravação é logada e pulada.

        Returns:
            Quantidade de arquivos gravados.
        """
        semaphore = asyncio.Semaphore(self._media_concurrency)

        async def _transfer(item: MediaItem) -> bool:
            async with semaphore:
                stream = await fetch(item.id)
                if stream is None:
                    logger.warning(
                        "media_unavailable",
                        extra={"event": self.event_name, "media_id": item.id},
                    )
                    return False
                try:
                    async with stream:
                        content = await stream.read()
                except httpx.HTTPError as exc:
                    logger.warning(
                        "media_download_failed",
                        extra={
                            "event": self.event_name,
                            "media_id": item.id,
                            "error_type": type(exc).__name__,
                        },
                    )
                    return False
                file_name = f"{item.context or item.id}.{stream.subtype}"
                try:
                    await self._store.upload_file(folder, file_name, content, stream.content_type)
                except DocumentStoreError as exc:
                    logger.warning(
                        "media_upload_failed",
                        extra={
                            "event": self.event_name,
                            "media_id": item.id,
                            "status_code": exc.status_code,
                        },
                    )
                    return False
                return True

        results = await _gather_settled(_transfer(item) for item in items)
        return sum(1 for uploaded in results if uploaded)

    async def upload_attempts_media(
        self,
        parent: str,
        attempts: Iterable[Attempt],
        leaf: str,
    ) -> int:
        """Segunda onda: mídia de cada attempt em `{parent}/{attemptId}/{leaf}`."""
        media_by_attempt = await fetch_attempt_media(self._client, attempts)
        uploaded = 0
        for attempt_id, outcome in media_by_attempt.items():
            media_list = outcome.value
            if media_list is None:
                continue
            folder = folders.media_folder(parent, attempt_id, leaf)
            await self._store.ensure_folder(folder)
            uploaded += await self.upload_media_items(
                media_list.items, folder, self._client.get_media
            )
        return uploaded

    def _log_uploaded(self, result: HandlerResult) -> None:
        logger.info(
            "session_uploaded",
            extra={
                "event": self.event_name,
                "session_id": result.session_id,
                "documents": result.documents,
                "media_files": result.media_files,
            },
        )


_T = TypeVar("_T")


async def _gather_settled(awaitables: Iterable[Awaitable[_T]]) -> list[_T]:
    """`gather` que só propaga o primeiro erro depois que todas as tarefas terminam."""
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results
