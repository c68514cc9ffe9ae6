"""Factories de clientes externos: Veriff e SharePoint.

O cliente Veriff e o autenticador de webhook compartilham o mesmo pool de
credenciais e vivem o processo inteiro (criados no lifespan). O cliente
do SharePoint é criado por webhook e precisa de `prepare()` antes do uso.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.sharepoint import SharePointClient
from api.connectors.veriff import CredentialPool, create_veriff_client
from api.connectors.veriff.webhook import WebhookAuthenticator
from config.settings import get_sharepoint_settings, get_veriff_settings
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    import httpx

    from api.connectors.veriff import VeriffApiClient

logger = logging.getLogger(__name__)


def create_credential_pool() -> CredentialPool:
    """Pool com os pares configurados em VERIFF_API_KEYS.

    Raises:
        ConfigurationError: Se nenhum par estiver configurado.
    """
    settings = get_veriff_settings()
    if not settings.api_keys:
        raise ConfigurationError("VERIFF_API_KEYS não configurado")
    pool = CredentialPool.from_settings(settings.api_keys)
    logger.info("credential_pool_created", extra={"pool_size": len(pool)})
    return pool


def create_veriff_api_client(
    credentials: CredentialPool,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VeriffApiClient:
    """Cliente da Station API (um por processo)."""
    return create_veriff_client(get_veriff_settings(), credentials, transport=transport)


def create_webhook_authenticator(credentials: CredentialPool) -> WebhookAuthenticator:
    return WebhookAuthenticator(credentials)


def create_document_store(
    transport: httpx.AsyncBaseTransport | None = None,
) -> SharePointClient:
    """Cliente SharePoint ainda não preparado (sem IO)."""
    return SharePointClient(get_sharepoint_settings(), transport=transport)
