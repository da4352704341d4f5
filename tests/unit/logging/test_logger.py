# tests/unit/logging/test_logger.py — v2
"""Tests for logging/logger.py — logger factory, formatters and rotation."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from specscout.logging.context import (
    clear_context,
    set_batch_context,
    set_group_context,
    set_path_context,
)
from specscout.logging.logger import (
    JsonFormatter,
    TextFormatter,
    create_rotating_handler,
    parse_size,
    setup_logging,
)


def _record(msg: str = "Hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_batch_context("b1")
        set_group_context(2)
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {"batch_id": "b1", "group": 2}

    def test_format_with_extra_data(self):
        record = _record()
        record.data = {"files": 3}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"files": 3}


class TestTextFormatter:
    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_includes_batch_and_group(self):
        set_batch_context("b42")
        set_group_context(3)
        output = TextFormatter().format(_record())
        assert "[b42]" in output
        assert "(group 3)" in output

    def test_includes_path(self):
        set_path_context("specs/openapi.yaml")
        output = TextFormatter().format(_record())
        assert "<specs/openapi.yaml>" in output


class TestParseSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("10MB", 10 * 1024**2), ("512kb", 512 * 1024), ("1 GB", 1024**3)],
    )
    def test_valid(self, value, expected):
        assert parse_size(value) == expected

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size("ten megs")


class TestSetupLogging:
    def teardown_method(self):
        root = logging.getLogger("specscout")
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.setLevel(logging.NOTSET)

    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("specscout")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("specscout")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_does_not_duplicate(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("specscout").handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "specscout.log"
        setup_logging(log_file=log_file, rotation="1MB", retention=3)
        handlers = logging.getLogger("specscout").handlers
        file_handlers = [h for h in handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == 3
        assert file_handlers[0].maxBytes == 1024**2
        file_handlers[0].close()


class TestCreateRotatingHandler:
    def test_creates_parent_dir(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "a" / "b.log", rotation="5KB")
        assert (tmp_path / "a").is_dir()
        assert handler.maxBytes == 5 * 1024
        handler.close()
