# tests/unit/tracking/test_cost_calculator.py — v2
"""Tests for tracking/cost_calculator.py."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from specscout.llm.models import LLMResponse
from specscout.tracking.cost_calculator import (
    compute_call_cost,
    compute_token_cost,
    compute_total_cost,
)
from specscout.tracking.models import LLMCallRecord


class TestComputeTokenCost:
    def test_flat_rate(self):
        assert compute_token_cost(2000, 0.15) == pytest.approx(0.0003)

    def test_default_rate(self):
        assert compute_token_cost(1_000_000) == pytest.approx(1.0)

    def test_zero_tokens(self):
        assert compute_token_cost(0, 5.0) == 0.0


class TestComputeCallCost:
    def test_uses_total_tokens(self):
        resp = LLMResponse(
            content="{}", input_tokens=1500, output_tokens=500,
            model="m", provider="p", latency_ms=1,
        )
        assert compute_call_cost(resp, 1.0) == pytest.approx(0.002)


class TestComputeTotalCost:
    def test_sums_records(self):
        records = [
            LLMCallRecord(
                call_id=str(i), timestamp=datetime.now(timezone.utc), path="a",
                provider="p", model="m", input_tokens=1, output_tokens=1,
                total_tokens=2, latency_ms=1, status="success",
                estimated_cost_usd=0.25,
            )
            for i in range(4)
        ]
        assert compute_total_cost(records) == pytest.approx(1.0)

    def test_empty(self):
        assert compute_total_cost([]) == 0
