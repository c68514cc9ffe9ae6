"""Router principal: health na raiz, webhooks da Veriff em /webhooks."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.veriff.router import router as veriff_router

WEBHOOKS_PREFIX = "/webhooks"


def create_api_router() -> APIRouter:
    """Monta o router com `/health`, `/ready` e `/webhooks/*`."""
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(veriff_router, prefix=WEBHOOKS_PREFIX, tags=["veriff"])
    return api_router
