"""Webhook de comprovante de endereço."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.services.session_aggregator import aggregate_session
from app.use_cases.veriff import folders
from app.use_cases.veriff.base import HandlerResult, HandlerStatus, WebhookHandler

if TYPE_CHECKING:
    from api.connectors.veriff.webhook import SessionReference

logger = logging.getLogger(__name__)


class ProofOfAddressHandler(WebhookHandler):
    """Documentos em `{root}/{Nome}_{sessionId}`; mídia em `{root}/{Nome}_KYC`.

    Layout da mídia:
        {root}/{Nome}_KYC/{addressId}/ProofOfAddress   mídia do endereço
        {root}/{Nome}_KYC/{attemptId}/ProofOfAddress   mídia dos attempts
    """

    event_name = "proof_of_address"

    async def execute(self, reference: SessionReference) -> HandlerResult:
        session_id = reference.session_id
        record = await aggregate_session(self._client, session_id, self._version)
        rejected = self._check_record(record)
        if rejected is not None:
            return rejected

        person_name = record.person_name or ""
        session_folder = folders.session_folder(self._root_folder, person_name, session_id)
        await self._store.ensure_folder(session_folder)

        documents = await self.upload_documents(
            session_folder,
            {
                "personInfo": record.person.value,
                "mediaList": record.media_list.value,
                "sessionDecision": record.decision.value,
                "watchlistScreening": record.watchlist.value,
            },
        )

        kyc_folder = folders.kyc_folder(self._root_folder, person_name)
        media_files = 0
        if reference.address_id:
            media_files += await self._upload_address_media(kyc_folder, reference.address_id)
        media_files += await self.upload_attempts_media(
            kyc_folder, record.attempt_list, folders.PROOF_OF_ADDRESS_LEAF
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

    async def _upload_address_media(self, kyc_folder: str, address_id: str) -> int:
        media_list = await self._client.get_address_media(address_id)
        if media_list is None:
            logger.warning("address_media_unavailable", extra={"address_id": address_id})
            return 0
        folder = folders.media_folder(kyc_folder, address_id, folders.PROOF_OF_ADDRESS_LEAF)
        await self._store.ensure_folder(folder)
        return await self.upload_media_items(
            media_list.items, folder, self._client.get_address_media_by_id
        )
