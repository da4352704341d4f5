# tests/unit/llm/test_models.py — v2
"""Tests for llm/models.py — LLM interface types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from specscout.llm.models import LLMResponse, Message


class TestMessage:
    def test_all_roles(self):
        for role in ["user", "assistant", "system"]:
            m = Message(role=role, content="test")
            assert m.role == role

    def test_invalid_role(self):
        with pytest.raises(ValidationError):
            Message(role="tool", content="x")


class TestLLMResponse:
    def test_total_tokens(self):
        r = LLMResponse(
            content="{}", input_tokens=900, output_tokens=100,
            model="gpt-4o-mini", provider="openai", latency_ms=120,
        )
        assert r.total_tokens == 1000
        assert r.raw_response is None
