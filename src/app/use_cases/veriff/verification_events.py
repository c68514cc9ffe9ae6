"""Webhook de evento de verificação (started, submitted, ...)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.services.session_aggregator import aggregate_session
from app.use_cases.veriff import folders
from app.use_cases.veriff.base import HandlerResult, HandlerStatus, WebhookHandler

if TYPE_CHECKING:
    from api.connectors.veriff.webhook import SessionReference


class VerificationEventHandler(WebhookHandler):
    """Grava a sessão em `{root}/{Started|Submitted|VerificationEvent}/{Nome}_{sessionId}`.

    A pasta do evento vem de `verification.code` (7001 started, 7002 submitted).
    """

    event_name = "verification_event"

    async def execute(self, reference: SessionReference) -> HandlerResult:
        session_id = reference.session_id
        record = await aggregate_session(self._client, session_id, self._version)
        rejected = self._check_record(record)
        if rejected is not None:
            return rejected

        parent = folders.join(
            self._root_folder, folders.verification_event_folder(reference.code)
        )
        session_folder = folders.session_folder(parent, record.person_name or "", session_id)
        await self._store.ensure_folder(session_folder)

        documents = await self.upload_documents(
            session_folder,
            {
                "personInfo": record.person.value,
                "mediaList": record.media_list.value,
                "attempts": record.attempts.value,
                "sessionDecision": record.decision.value,
                "watchlistScreening": record.watchlist.value,
            },
        )
        media_files = await self.upload_attempts_media(
            session_folder, record.attempt_list, folders.VERIFICATION_EVENT_LEAF
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
