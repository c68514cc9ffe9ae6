"""Logging estruturado JSON.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="kyc_sync")
    logger = get_logger(__name__)
    logger.info("webhook_received", extra={"route": "decision"})

Campos presentes em todo log: timestamp, level, logger, message,
service, correlation_id.
"""

from config.logging.config import (
    VALID_LOG_LEVELS,
    configure_logging,
    get_logger,
    log_degraded_outcome,
)
from config.logging.filters import REDACTED, CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    "VALID_LOG_LEVELS",
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_degraded_outcome",
]
