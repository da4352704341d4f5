# src/detection/oracle.py — v1
"""Oracle client: one LLM classification call per file.

Truncates content, asks the model for a JSON classification, parses it
strictly and charges the call's estimated cost to the budget tracker.
"""

from __future__ import annotations

import asyncio
import logging

from specscout.core.errors import OracleError
from specscout.core.models import ClassificationResult
from specscout.detection.prompt import (
    DEFAULT_MAX_CONTENT_LENGTH,
    SYSTEM_PROMPT,
    build_messages,
)
from specscout.detection.response_parser import ResponseParseError, parse_classification
from specscout.llm.base_client import BaseLLMClient
from specscout.llm.models import LLMResponse, Message
from specscout.tracking.budget import BudgetTracker
from specscout.tracking.call_logger import CallLogger
from specscout.tracking.cost_calculator import DEFAULT_PRICE_PER_1M_TOKENS, compute_call_cost

logger = logging.getLogger(__name__)


class OracleClient:
    """Classifies a single file through an LLM provider."""

    def __init__(
        self,
        llm_client: BaseLLMClient,
        budget: BudgetTracker,
        call_logger: CallLogger | None = None,
        max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
        max_tokens: int = 1000,
        temperature: float = 0.1,
        timeout_s: float = 10.0,
        price_per_1m_tokens: float = DEFAULT_PRICE_PER_1M_TOKENS,
    ) -> None:
        self._llm = llm_client
        self._budget = budget
        self._call_logger = call_logger or CallLogger()
        self._max_content_length = max_content_length
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout_s = timeout_s
        self._price_per_1m_tokens = price_per_1m_tokens

    @property
    def call_logger(self) -> CallLogger:
        return self._call_logger

    async def classify(self, path: str, content: str) -> ClassificationResult:
        """Classify one file.

        Raises:
            OracleError: On timeout, transport failure or an unusable answer.
        """
        messages = build_messages(path, content, self._max_content_length)

        logger.debug("LLM analyzing: %s", path)
        response = await self._call(path, messages)

        cost = compute_call_cost(response, self._price_per_1m_tokens)
        # Answered calls are charged whether or not the answer parses.
        self._budget.record_spend(cost)

        try:
            result = parse_classification(response.content)
        except ResponseParseError as e:
            self._call_logger.record(path, response, cost, status="failed")
            raise OracleError(path, f"Unusable LLM response: {e}") from e

        self._call_logger.record(path, response, cost)
        logger.info(
            "Analysis result for %s: %s (confidence %d/10, %d ms, $%.6f)",
            path,
            "API SPEC" if result.is_api_spec else "NOT SPEC",
            result.confidence,
            response.latency_ms,
            cost,
        )
        return result

    async def _call(self, path: str, messages: list[Message]) -> LLMResponse:
        try:
            return await asyncio.wait_for(
                self._llm.complete(
                    messages,
                    system=SYSTEM_PROMPT,
                    max_tokens=self._max_tokens,
                    temperature=self._temperature,
                    json_output=True,
                ),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise OracleError(path, f"Timed out after {self._timeout_s:.1f}s") from e
        except Exception as e:
            raise OracleError(path, f"{type(e).__name__}: {e}") from e
