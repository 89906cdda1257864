"""Tests for structured logging setup."""

from __future__ import annotations

from tradedesk import __version__
from tradedesk.core.logging import add_service_context, configure_logging


class TestServiceContext:
    def test_adds_service_fields(self):
        event = add_service_context(None, "info", {"event": "work_order_submitted"})

        assert event["service"] == "tradedesk"
        assert event["version"] == __version__
        assert event["environment"] == "development"

    def test_keeps_explicit_values(self):
        event = add_service_context(None, "info", {"event": "x", "environment": "staging"})

        assert event["environment"] == "staging"

    def test_configure_json_logs(self, monkeypatch):
        import structlog

        from tradedesk.config import reset_config

        monkeypatch.setenv("JSON_LOGS", "true")
        reset_config()

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert add_service_context in processors
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
