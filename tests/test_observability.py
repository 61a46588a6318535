"""Tests for logging setup and tracing helpers."""

import json
import logging

import pytest

from observability.logging import (
    ContextFilter,
    JsonFormatter,
    TextFormatter,
    reset_request_context,
    set_request_context,
    setup_logging,
)
from observability.tracing import setup_tracing, trace_function, trace_operation


def make_record(message: str, level: int = logging.INFO) -> logging.LogRecord:
    record = logging.LogRecord("prism.test", level, __file__, 10, message, None, None)
    ContextFilter().filter(record)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)


class TestFormatters:

    def test_json_includes_request_id(self):
        token = set_request_context("abc123")
        try:
            data = json.loads(JsonFormatter().format(make_record("Fetched article | title=Cat")))
        finally:
            reset_request_context(token)

        assert data["message"] == "Fetched article | title=Cat"
        assert data["request_id"] == "abc123"
        assert data["level"] == "INFO"

    def test_json_warning_has_source(self):
        data = json.loads(JsonFormatter().format(make_record("slow", logging.WARNING)))
        assert data["source"]["line"] == 10

    def test_secrets_are_redacted(self):
        text = TextFormatter().format(make_record("Model failed | error=Bearer sk-or-secret"))
        assert "sk-or-secret" not in text
        assert "[REDACTED]" in text

    def test_default_request_id(self):
        assert "[-]" in TextFormatter().format(make_record("idle"))


class TestSetupLogging:

    def test_file_logging(self, config, restore_root_logger):
        assert setup_logging(config) is True
        logging.getLogger("prism.test").info("Request stage | stage=done")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "Request stage | stage=done" in (config.log_dir / "prism.log").read_text()

    def test_unwritable_directory_falls_back_to_console(self, config, tmp_path, restore_root_logger):
        blocker = tmp_path / "file"
        blocker.write_text("")
        config.log_dir = blocker / "log"

        assert setup_logging(config) is False


class TestTracing:

    def test_disabled_operation_collects_attributes(self):
        setup_tracing(enabled=False)
        with trace_operation("pipeline.clustering", {"articles": 2}) as attrs:
            attrs["clusters"] = 1
        assert attrs == {"clusters": 1}

    @pytest.mark.asyncio
    async def test_trace_function_wraps_coroutines(self):
        @trace_function("double")
        async def double(x):
            return x * 2

        assert await double(2) == 4

    def test_trace_function_wraps_plain_functions(self):
        @trace_function()
        def triple(x):
            return x * 3

        assert triple(2) == 6
        assert triple.__name__ == "triple"
