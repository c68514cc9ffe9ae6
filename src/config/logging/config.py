"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Uma vez, no bootstrap
    configure_logging(level="INFO", service_name="kyc_sync", secrets=settings.shared_secrets)

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("veriff_request_ok", extra={"path": "/sessions/x/decision"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter
from config.settings.base import DEFAULT_SERVICE_NAME

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    secrets: Iterable[str] = (),
) -> None:
    """Configura logging JSON estruturado no root logger.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço injetado em cada record.
        correlation_id_getter: Função que retorna o correlation_id atual.
        secrets: Valores a mascarar em qualquer log emitido.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SecretRedactionFilter(secrets))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substitui handlers existentes para evitar duplicação
    root.handlers = [handler]

    # httpx loga URL completa em INFO; mantém só avisos
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (geralmente __name__)."""
    return logging.getLogger(name)


def log_degraded_outcome(
    logger: logging.Logger,
    field: str,
    reason: str | None = None,
    session_id: str | None = None,
) -> None:
    """Registra um campo da agregação que não pôde ser obtido.

    Args:
        logger: Logger instance.
        field: Campo do SessionRecord (ex: "decision").
        reason: Motivo resumido, sem PII.
        session_id: Sessão Veriff associada.
    """
    extra: dict[str, object] = {"degraded": True, "field": field}
    if reason:
        extra["reason"] = reason
    if session_id:
        extra["session_id"] = session_id

    logger.info("aggregation_field_unavailable", extra=extra)
