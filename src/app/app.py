"""Entrypoint do serviço de sincronização KYC.

Recebe os webhooks da Veriff e grava as sessões no SharePoint.

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.veriff.webhook_runtime import drain_processing_tasks
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import (
    create_credential_pool,
    create_veriff_api_client,
    create_webhook_authenticator,
)
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

DEFAULT_PORT = 8080


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (sem credenciais Veriff o processo não sobe)
    - Cria pool de credenciais, cliente Veriff e autenticador de webhook

    Shutdown:
    - Aguarda tasks de webhook pendentes
    - Fecha o cliente HTTP da Veriff
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    credentials = create_credential_pool()
    app.state.veriff_client = create_veriff_api_client(credentials)
    app.state.webhook_authenticator = create_webhook_authenticator(credentials)

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    await drain_processing_tasks(timeout_seconds=30.0)
    await app.state.veriff_client.aclose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    base = get_base_settings()
    fastapi_app = FastAPI(
        title="kyc-sync",
        description="Sincronização de sessões Veriff com o SharePoint",
        version="1.0.0",
        debug=base.debug,
        lifespan=lifespan,
        docs_url=None if base.is_production else "/docs",
        redoc_url=None,
    )
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": base.service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    logger.info("app_dev_server_starting", extra={"port": port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=port,
        reload=True,
    )


if __name__ == "__main__":
    main()
