"""Helpers de logging para a Station API (sem secrets, sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import VeriffApiError, VeriffHttpError

logger = logging.getLogger(__name__)


def log_veriff_error(
    api_error: VeriffApiError,
    path: str,
    credential_index: int,
    attempts_left: int,
) -> None:
    """Loga resposta de erro que levou à rotação de credencial.

    404 é esperado enquanto a sessão não tem o dado (decisão pendente, sem
    registry check): vai em INFO com evento próprio.
    """
    if api_error.is_not_found:
        level, event = logging.INFO, "veriff_resource_not_found"
    else:
        level, event = logging.WARNING, "veriff_request_failed"
    logger.log(
        level,
        event,
        extra={
            "path": path,
            "status_code": api_error.status_code,
            "error_code": api_error.code,
            "error_message": api_error.message,
            "credential_index": credential_index,
            "attempts_left": attempts_left,
        },
    )


def log_request_abandoned(path: str, credential_index: int, error: VeriffHttpError) -> None:
    """Loga falha que não justifica rotação (transporte, erro sem corpo, JSON inválido)."""
    cause = error.__cause__
    logger.error(
        "veriff_request_abandoned",
        extra={
            "path": path,
            "credential_index": credential_index,
            "reason": str(error),
            "status_code": error.status_code,
            "error_type": type(cause).__name__ if cause else None,
        },
    )


def log_credentials_exhausted(path: str, pool_size: int) -> None:
    logger.error(
        "veriff_credentials_exhausted",
        extra={"path": path, "pool_size": pool_size},
    )


def log_success(path: str, status_code: int, credential_index: int) -> None:
    logger.debug(
        "veriff_request_ok",
        extra={
            "path": path,
            "status_code": status_code,
            "credential_index": credential_index,
        },
    )
