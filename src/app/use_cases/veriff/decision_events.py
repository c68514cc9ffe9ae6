"""Webhook de decisão: sessão concluída (aprovada ou não)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.services.session_aggregator import aggregate_session
from app.use_cases.veriff import folders
from app.use_cases.veriff.base import HandlerResult, HandlerStatus, WebhookHandler

if TYPE_CHECKING:
    from api.connectors.veriff.webhook import SessionReference


class DecisionEventHandler(WebhookHandler):
    """Grava a sessão em `{root}/{Successful|Unsuccessful}/{Nome}_{sessionId}`.

    Documentos: personInfo, mediaList, attempts, sessionDecision, ineData,
    curpData e watchlistScreening. Mídia dos attempts vai para
    `{pasta da sessão}/{attemptId}/DecisionEvent`.
    """

    event_name = "decision"

    async def execute(self, reference: SessionReference) -> HandlerResult:
        session_id = reference.session_id
        record = await aggregate_session(self._client, session_id, self._version)
        rejected = self._check_record(record)
        if rejected is not None:
            return rejected

        parent = folders.join(self._root_folder, folders.decision_folder(record.decision_code))
        session_folder = folders.session_folder(parent, record.person_name or "", session_id)
        await self._store.ensure_folder(session_folder)

        documents = await self.upload_documents(
            session_folder,
            {
                "personInfo": record.person.value,
                "mediaList": record.media_list.value,
                "attempts": record.attempts.value,
                "sessionDecision": record.decision.value,
                "ineData": record.ine_registry.value,
                "curpData": record.curp_registry.value,
                "watchlistScreening": record.watchlist.value,
            },
        )
        media_files = await self.upload_attempts_media(
            session_folder, record.attempt_list, folders.DECISION_EVENT_LEAF
        )

        result = HandlerResult(
            HandlerStatus.UPLOADED,
            session_id,
            folder=session_folder,
            documents=documents,
            media_files=media_files,
        )
        self._log_uploaded(result)
        return result
