"""Testes para messaging_api.config.logging.

Cobre: configure_logging, get_logger, set_library_log_level,
CorrelationIdFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging

import pytest

from messaging_api.config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    set_library_log_level,
)
from messaging_api.common.correlation import reset_correlation_id, set_correlation_id
from messaging_api.config.logging.config import (
    DEFAULT_SERVICE_NAME,
    LIBRARY_LOGGER_NAME,
    VALID_LOG_LEVELS,
)
from messaging_api.config.logging.filters import provider_from_logger_name
from messaging_api.config.logging.formatters import API_LOG_DEFAULTS


def _record(msg: str = "message", name: str = "messaging_api.test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger(LIBRARY_LOGGER_NAME).setLevel(logging.NOTSET)


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_is_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_correlation_filter(self) -> None:
        configure_logging(correlation_id_getter=lambda: "cid")
        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "messaging_api"


class TestLibraryLogLevel:
    def test_sets_only_library_logger(self) -> None:
        set_library_log_level("debug")
        assert logging.getLogger(LIBRARY_LOGGER_NAME).level == logging.DEBUG

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError):
            set_library_log_level("loud")


def test_get_logger_returns_same_instance() -> None:
    assert get_logger("same.module") is get_logger("same.module")
    assert get_logger("same.module").name == "same.module"


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()

        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"

        filter_.filter(record)

        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        record = _record()
        CorrelationIdFilter("service_name", None).filter(record)
        assert record.correlation_id == ""

    def test_filter_reads_webhook_correlation_context_by_default(self) -> None:
        token = set_correlation_id("webhook-42")
        try:
            record = _record()
            CorrelationIdFilter("svc").filter(record)
        finally:
            reset_correlation_id(token)

        assert record.correlation_id == "webhook-42"

    def test_filter_derives_provider_from_connector_logger(self) -> None:
        record = _record(name="messaging_api.connectors.viber.client")

        CorrelationIdFilter("svc").filter(record)

        assert record.provider == "viber"

    def test_filter_keeps_explicit_provider(self) -> None:
        record = _record(name="messaging_api.infra.http")
        record.provider = "wechat"

        CorrelationIdFilter("svc").filter(record)

        assert record.provider == "wechat"

    def test_provider_from_logger_name(self) -> None:
        assert provider_from_logger_name("messaging_api.connectors.line.base") == "line"
        assert provider_from_logger_name("messaging_api.routes.webhooks") is None


class TestJsonFormatter:
    def test_output_has_required_fields_renamed(self) -> None:
        formatter = create_json_formatter()
        record = _record("provider_api_error")
        CorrelationIdFilter("svc", lambda: "cid").filter(record)
        record.provider = "line"

        data = json.loads(formatter.format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "messaging_api.test"
        assert data["message"] == "provider_api_error"
        assert data["correlation_id"] == "cid"
        assert data["service"] == "svc"
        assert data["provider"] == "line"

    def test_api_fields_default_to_null(self) -> None:
        formatter = create_json_formatter()
        record = _record("webhook_received")
        CorrelationIdFilter("svc", lambda: "cid").filter(record)

        data = json.loads(formatter.format(record))

        assert data["provider"] is None
        assert data["endpoint"] is None
        assert data["status_code"] is None

    def test_extra_overrides_api_defaults(self) -> None:
        formatter = create_json_formatter()
        record = _record("provider_api_error")
        CorrelationIdFilter("svc", lambda: "cid").filter(record)
        record.endpoint = "message/push"
        record.status_code = 400

        data = json.loads(formatter.format(record))

        assert data["endpoint"] == "message/push"
        assert data["status_code"] == 400

    def test_constants(self) -> None:
        assert "correlation_id" in REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}
        assert set(API_LOG_DEFAULTS) == {"provider", "endpoint", "status_code"}
