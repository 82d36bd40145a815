"""Testes de logging estruturado, correlation id e latência."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from alfie_assistant.observability import timing
from alfie_assistant.observability.correlation import (
    correlation_scope,
    get_correlation_id,
    get_session_id,
    session_scope,
)
from alfie_assistant.observability.logging import (
    REDACTED,
    CorrelationIdFilter,
    configure_logging,
    log_fallback,
)
from alfie_assistant.observability.timing import timed


class TestCorrelationScope:
    """ContextVar por turno."""

    def test_scope_sets_and_restores(self) -> None:
        assert get_correlation_id() == ""
        with correlation_scope("abc-123") as cid:
            assert cid == "abc-123"
            assert get_correlation_id() == "abc-123"
        assert get_correlation_id() == ""

    def test_scope_generates_id(self) -> None:
        with correlation_scope() as cid:
            assert len(cid) == 36
            assert get_correlation_id() == cid

    def test_filter_injects_fields(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        with correlation_scope("cid-1"):
            assert CorrelationIdFilter("alfie_assistant").filter(record)

        assert record.correlation_id == "cid-1"
        assert record.service == "alfie_assistant"

    def test_session_scope_truncates_and_restores(self) -> None:
        with session_scope("0123456789abcdef") as sid:
            assert sid == "01234567..."
            assert get_session_id() == sid
        assert get_session_id() is None

    def test_filter_injects_session_and_keeps_explicit_values(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        record.correlation_id = "explicit"
        with correlation_scope("cid-2"), session_scope("sess-abcdefgh-1"):
            CorrelationIdFilter("alfie_assistant").filter(record)

        assert record.correlation_id == "explicit"
        assert record.session_id == "sess-abc..."

    def test_filter_redacts_user_text(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        record.prompt = "Une tasse de thé sur une table"
        record.jobs_api_token = "secret"
        record.action = "recap"

        CorrelationIdFilter("alfie_assistant").filter(record)

        assert record.prompt == REDACTED
        assert record.jobs_api_token == REDACTED
        assert record.action == "recap"


class TestConfigureLogging:
    """Formato JSON com campos padrão."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        root = logging.getLogger()
        previous_handlers, previous_level = root.handlers[:], root.level
        try:
            configure_logging("INFO", "alfie_assistant")
            with correlation_scope("cid-json"), session_scope("sess-json-0001"):
                logging.getLogger("alfie.test").info(
                    "turn_handled", extra={"action": "recap", "text": "bonjour"}
                )
            payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        finally:
            root.handlers = previous_handlers
            root.setLevel(previous_level)

        assert payload["message"] == "turn_handled"
        assert payload["level"] == "INFO"
        assert payload["correlation_id"] == "cid-json"
        assert payload["service"] == "alfie_assistant"
        assert payload["action"] == "recap"
        assert payload["session_id"] == "sess-jso..."
        assert payload["text"] == REDACTED


class TestFallbackAndTiming:
    """Helpers de observabilidade."""

    def test_log_fallback(self, caplog) -> None:
        logger = logging.getLogger("test")
        with caplog.at_level(logging.INFO):
            log_fallback(logger, "brief_validation", reason="BriefValidationError", elapsed_ms=1.5)

        record = caplog.records[-1]
        assert "Fallback applied for brief_validation" in record.message
        assert record.fallback_used is True
        assert record.reason == "BriefValidationError"
        assert record.elapsed_ms == 1.5

    def test_timed_logs_even_on_error(self, caplog) -> None:
        with caplog.at_level(logging.INFO), pytest.raises(ValueError):
            with timed("job_dispatch"):
                raise ValueError("boom")

        record = [r for r in caplog.records if r.message == "component_latency"][-1]
        assert record.component == "job_dispatch"
        assert record.elapsed_ms >= 0

    def test_timed_records_fields_and_error_outcome(self, caplog) -> None:
        with caplog.at_level(logging.INFO), pytest.raises(TimeoutError):
            with timed("asset_search", order_id="order-1..."):
                raise TimeoutError()

        record = [r for r in caplog.records if r.message == "component_latency"][-1]
        assert record.order_id == "order-1..."
        assert record.outcome == "error"
        assert record.error == "TimeoutError"

    def test_timed_warns_when_slow(self, caplog) -> None:
        with patch.object(timing, "time") as fake_time:
            fake_time.perf_counter.side_effect = [10.0, 16.0]
            with caplog.at_level(logging.INFO):
                with timed("job_dispatch", slow_ms=5000.0):
                    pass

        record = [r for r in caplog.records if r.message == "component_latency"][-1]
        assert record.levelno == logging.WARNING
        assert record.elapsed_ms == 6000.0
        assert record.outcome == "ok"
