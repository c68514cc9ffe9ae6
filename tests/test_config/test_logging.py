"""Testes para config.logging.

Cobre: configure_logging, log_degraded_outcome, CorrelationIdFilter,
SecretRedactionFilter e o formatter JSON.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REDACTED,
    REQUIRED_LOG_FIELDS,
    VALID_LOG_LEVELS,
    CorrelationIdFilter,
    SecretRedactionFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_degraded_outcome,
)


def _record(msg: str = "event", args: tuple = (), name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [("INFO", logging.INFO), ("debug", logging.DEBUG), ("Warning", logging.WARNING)],
    )
    def test_sets_root_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_single_handler_with_both_filters(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(secrets=["s1"])

        assert len(root.handlers) == 1
        filters = root.handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SecretRedactionFilter) for f in filters)

    def test_httpx_logger_is_quieted(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_valid_levels(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS

    def test_get_logger_uses_module_name(self) -> None:
        assert get_logger("api.connectors.veriff") is logging.getLogger("api.connectors.veriff")


class TestLogDegradedOutcome:
    def test_logs_field_with_fixed_event(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_degraded_outcome(logger, "decision")

        logger.info.assert_called_once()
        assert logger.info.call_args[0][0] == "aggregation_field_unavailable"
        assert logger.info.call_args[1]["extra"] == {"degraded": True, "field": "decision"}

    def test_includes_reason_and_session(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_degraded_outcome(logger, "person", reason="unavailable", session_id="sess-1")

        extra = logger.info.call_args[1]["extra"]
        assert extra["reason"] == "unavailable"
        assert extra["session_id"] == "sess-1"


class TestCorrelationIdFilter:
    def test_adds_correlation_id_and_service(self) -> None:
        record = _record()

        assert CorrelationIdFilter("kyc_sync", lambda: "corr-123").filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "kyc_sync"

    def test_keeps_explicit_correlation_id(self) -> None:
        record = _record()
        record.correlation_id = "from-task"

        CorrelationIdFilter("kyc_sync", lambda: "from-context").filter(record)

        assert record.correlation_id == "from-task"

    def test_without_getter_uses_empty_string(self) -> None:
        record = _record()

        CorrelationIdFilter("kyc_sync").filter(record)

        assert record.correlation_id == ""


class TestSecretRedactionFilter:
    def test_masks_secret_in_message(self) -> None:
        record = _record("signing with %s", ("top-secret",))

        SecretRedactionFilter(["top-secret"]).filter(record)

        assert record.getMessage() == f"signing with {REDACTED}"

    def test_masks_secret_in_extra_fields(self) -> None:
        record = _record("veriff_request_failed")
        record.detail = "key=top-secret"
        record.headers = {"x-hmac-signature": "abc", "secret": "top-secret"}
        record.attempts = ["top-secret", 1]

        SecretRedactionFilter(["top-secret"]).filter(record)

        assert record.detail == "key=***"
        assert record.headers == {"x-hmac-signature": "abc", "secret": "***"}
        assert record.attempts == ["***", 1]

    def test_longer_secret_masked_first(self) -> None:
        record = _record("value abcdef")

        SecretRedactionFilter(["abc", "abcdef"]).filter(record)

        assert record.getMessage() == "value ***"

    def test_without_secrets_record_is_untouched(self) -> None:
        record = _record("plain %s", ("text",))

        assert SecretRedactionFilter(["", ""]).filter(record) is True
        assert record.args == ("text",)


class TestJsonFormatter:
    def test_field_order_and_renames(self) -> None:
        assert REQUIRED_LOG_FIELDS[:4] == ("asctime", "levelname", "name", "message")
        assert FIELD_RENAME_MAP == {
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
        }

    def test_formats_record_as_json(self) -> None:
        record = _record("session_uploaded", name="app.use_cases.veriff.base")
        record.correlation_id = "abc-123"
        record.service = "kyc_sync"
        record.session_id = "sess-1"

        output = json.loads(create_json_formatter().format(record))

        assert output["message"] == "session_uploaded"
        assert output["level"] == "INFO"
        assert output["logger"] == "app.use_cases.veriff.base"
        assert output["service"] == "kyc_sync"
        assert output["correlation_id"] == "abc-123"
        assert output["session_id"] == "sess-1"
        assert "timestamp" in output

    def test_secret_never_reaches_output(self) -> None:
        configure_logging(level="INFO", service_name="kyc_sync", secrets=["s3cr3t"])
        handler = logging.getLogger().handlers[0]
        record = _record("using %s", ("s3cr3t",))
        record.detail = "s3cr3t"

        for filter_ in handler.filters:
            filter_.filter(record)
        output = handler.format(record)

        assert "s3cr3t" not in output
