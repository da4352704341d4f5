# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides a scriptable mock LLM client, a controllable clock, and factories
for detectors wired with in-memory cache and budget. No external
dependencies: all I/O is mocked.
"""

from __future__ import annotations

import asyncio
import json
import re
from typing import Any

import pytest

from specscout.cache.memory_store import MemoryCacheStore
from specscout.core.models import ClassificationRequest
from specscout.detection.detector import SpecDetector
from specscout.detection.oracle import OracleClient
from specscout.llm.base_client import BaseLLMClient
from specscout.llm.models import LLMResponse, Message
from specscout.tracking.budget import BudgetTracker

_PATH_RE = re.compile(r"^FILEPATH: (.*)$", re.MULTILINE)


def spec_json(
    is_spec: bool = True,
    spec_type: str = "openapi-3.x",
    confidence: int = 9,
    reasoning: str = "Has openapi version and paths",
    endpoints: int | None = 12,
) -> str:
    """Well-formed oracle answer."""
    return json.dumps({
        "isApiSpec": is_spec,
        "specType": spec_type,
        "confidence": confidence,
        "reasoning": reasoning,
        "endpoints": endpoints,
    })


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =====================================================================
#  MOCK LLM CLIENT
# =====================================================================


class MockLLMClient(BaseLLMClient):
    """Scriptable LLM client.

    Answers per file path (parsed from the prompt), with optional per-path
    delays and failures. Tracks calls and peak concurrency.
    """

    def __init__(
        self,
        default_response: str | None = None,
        input_tokens: int = 900,
        output_tokens: int = 100,
    ) -> None:
        self._default_response = default_response or spec_json()
        self.responses: dict[str, str] = {}
        self.delays: dict[str, float] = {}
        self.failures: dict[str, Exception] = {}
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens
        self.calls: list[dict[str, Any]] = []
        self.completed: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.on_call = None  # optional callable(path)

    @property
    def called_paths(self) -> list[str]:
        return [c["path"] for c in self.calls]

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.1,
        json_output: bool = False,
    ) -> LLMResponse:
        prompt = messages[-1].content
        match = _PATH_RE.search(prompt)
        path = match.group(1) if match else ""
        self.calls.append({
            "path": path, "prompt": prompt, "system": system,
            "max_tokens": max_tokens, "temperature": temperature,
            "json_output": json_output,
        })
        if self.on_call is not None:
            self.on_call(path)

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(path, 0))
            if path in self.failures:
                raise self.failures[path]
        finally:
            self.in_flight -= 1

        self.completed.append(path)
        return LLMResponse(
            content=self.responses.get(path, self._default_response),
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            model="mock-model",
            provider="mock",
            latency_ms=5,
        )

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def model_name(self) -> str:
        return "mock-model"


# === FIXTURES ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_llm() -> MockLLMClient:
    return MockLLMClient()


@pytest.fixture
def make_detector(mock_llm: MockLLMClient, clock: FakeClock):
    """Factory for detectors sharing the mock client and fake clock.

    Each call costs exactly $1.00 by default (1000 tokens at $1000 per 1M).
    """

    def _make(
        daily_budget: float = 1000.0,
        group_size: int = 10,
        group_delay_s: float = 0.0,
        ttl_s: float = 86_400,
        timeout_s: float = 5.0,
        price_per_1m_tokens: float = 1000.0,
        llm: BaseLLMClient | None = None,
    ) -> SpecDetector:
        budget = BudgetTracker(daily_ceiling=daily_budget)
        oracle = OracleClient(
            llm or mock_llm,
            budget,
            timeout_s=timeout_s,
            price_per_1m_tokens=price_per_1m_tokens,
        )
        return SpecDetector(
            oracle=oracle,
            cache=MemoryCacheStore(ttl_s=ttl_s, clock=clock),
            budget=budget,
            group_size=group_size,
            group_delay_s=group_delay_s,
        )

    return _make


def make_requests(n: int, prefix: str = "specs/api") -> list[ClassificationRequest]:
    return [
        ClassificationRequest(
            path=f"{prefix}_{i:02d}.yaml",
            content=f"openapi: 3.0.0\ninfo:\n  title: API {i}\npaths: {{}}\n",
        )
        for i in range(n)
    ]


@pytest.fixture
def three_requests() -> list[ClassificationRequest]:
    return make_requests(3)
