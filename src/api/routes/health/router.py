"""Endpoints de health check."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings, get_sharepoint_settings, get_veriff_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    error: str | None = None
    details: dict[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error, **(self.details or {})}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: configuração carregada e cliente Veriff montado."""
    veriff_check = _check_veriff(request)
    sharepoint_check = _check_sharepoint()
    ready = veriff_check.status == "ok" and sharepoint_check.status in {"ok", "degraded"}

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "veriff": veriff_check.as_dict(),
            "sharepoint": sharepoint_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_veriff(request: Request) -> DependencyCheck:
    errors = get_veriff_settings().validate()
    if errors:
        return DependencyCheck(status="failed", error="invalid_configuration")
    client = getattr(request.app.state, "veriff_client", None)
    if client is None:
        return DependencyCheck(status="failed", error="client_not_initialized")
    return DependencyCheck(status="ok", details={"credentials": len(client.credentials)})


def _check_sharepoint() -> DependencyCheck:
    if not get_sharepoint_settings().validate():
        return DependencyCheck(status="ok")
    # Em development o processo sobe sem SharePoint; uploads falham com 500
    if get_base_settings().is_strict:
        return DependencyCheck(status="failed", error="invalid_configuration")
    logger.warning("readiness_sharepoint_not_configured")
    return DependencyCheck(status="degraded", error="invalid_configuration")
