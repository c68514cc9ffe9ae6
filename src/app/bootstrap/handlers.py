"""Montagem dos handlers de webhook com as settings do processo."""

from __future__ import annotations

from typing import TYPE_CHECKING

from config.settings import get_sharepoint_settings, get_veriff_settings

if TYPE_CHECKING:
    from app.protocols import DocumentStoreProtocol, VeriffClientProtocol
    from app.use_cases.veriff import WebhookHandler


def build_webhook_handler(
    handler_cls: type[WebhookHandler],
    client: VeriffClientProtocol,
    store: DocumentStoreProtocol,
) -> WebhookHandler:
    """Instancia o handler com versão, pasta raiz e concorrência de mídia."""
    veriff_settings = get_veriff_settings()
    return handler_cls(
        client,
        store,
        version=veriff_settings.api_version,
        root_folder=get_sharepoint_settings().root_folder,
        media_concurrency=veriff_settings.media_concurrency,
    )
