# tests/unit/tracking/test_call_logger.py — v2
"""Tests for tracking/call_logger.py."""

from __future__ import annotations

import json

import pytest

from specscout.llm.models import LLMResponse
from specscout.tracking.call_logger import CallLogger


def _resp() -> LLMResponse:
    return LLMResponse(
        content="{}", input_tokens=100, output_tokens=50,
        model="gpt-4o-mini", provider="openai", latency_ms=500,
    )


class TestCallLogger:
    def test_record(self):
        logger = CallLogger()
        record = logger.record("specs/api.yaml", _resp(), 0.00015)
        assert record.path == "specs/api.yaml"
        assert record.total_tokens == 150
        assert record.status == "success"
        assert record.estimated_cost_usd == 0.00015

    def test_failed_status(self):
        logger = CallLogger()
        assert logger.record("a.yaml", _resp(), 0.0, status="failed").status == "failed"

    def test_multiple_records(self):
        logger = CallLogger()
        logger.record("a.yaml", _resp(), 0.1)
        logger.record("b.yaml", _resp(), 0.1)
        assert logger.total_calls == 2
        assert logger.total_tokens == 300
        assert logger.total_cost_usd == pytest.approx(0.2)

    def test_failed_calls(self):
        logger = CallLogger()
        logger.record("a.yaml", _resp(), 0.1)
        logger.record("b.yaml", _resp(), 0.1, status="failed")
        assert logger.failed_calls == 1

    def test_records_is_a_copy(self):
        logger = CallLogger()
        logger.record("a.yaml", _resp(), 0.1)
        logger.records.clear()
        assert logger.total_calls == 1

    def test_save(self, tmp_path):
        logger = CallLogger()
        logger.record("a.yaml", _resp(), 0.1)
        out = tmp_path / "logs" / "calls.jsonl"
        logger.save(out)
        lines = out.read_text().strip().split("\n")
        assert len(lines) == 1
        assert json.loads(lines[0])["path"] == "a.yaml"
