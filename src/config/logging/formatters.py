"""Formatter JSON dos logs do serviço.

Todo registro sai com timestamp, nível, logger, mensagem, serviço e
correlation_id. Campos passados via `extra` entram como chaves extras.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de emissão dos campos fixos
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "service",
    "correlation_id",
)

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "timestamp": "2026-10-18 10:30:00,123",
            "level": "WARNING",
            "logger": "api.connectors.veriff.http_client",
            "message": "veriff_request_failed",
            "service": "kyc_sync",
            "correlation_id": "abc-123",
            "status_code": 401,
            "credential_index": 0
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
