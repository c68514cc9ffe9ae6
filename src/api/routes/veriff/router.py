"""Router principal da Veriff: agrega os endpoints de webhook."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.veriff.webhook import router as webhook_router

router = APIRouter()

router.include_router(webhook_router)
