# src/llm/adapters/anthropic_adapter.py — v3
"""Anthropic Claude adapter implementing BaseLLMClient.

The Messages API has no JSON mode: with ``json_output`` the assistant turn
is prefilled with ``{`` and the brace is re-attached to the returned text.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from specscout.llm.base_client import BaseLLMClient
from specscout.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)

_JSON_PREFILL = "{"


class AnthropicAdapter(BaseLLMClient):
    """Claude models through the Messages API."""

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        timeout_s: float | None = None,
        **kwargs: Any,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._timeout_s = timeout_s
        self.__client = None  # created on first call

    @property
    def _client(self):
        if self.__client is None:
            import anthropic

            options: dict[str, Any] = {"api_key": self._api_key or ""}
            if self._timeout_s is not None:
                options["timeout"] = self._timeout_s
            self.__client = anthropic.AsyncAnthropic(**options)
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.1,
        json_output: bool = False,
    ) -> LLMResponse:
        """Single Messages API call; system text goes in the top-level field."""
        turns = [
            {"role": m.role, "content": m.content}
            for m in messages
            if m.role != "system"
        ]
        if json_output:
            turns.append({"role": "assistant", "content": _JSON_PREFILL})

        request: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": turns,
        }
        if system:
            request["system"] = system

        started = time.monotonic()
        response = await self._client.messages.create(**request)
        latency_ms = int((time.monotonic() - started) * 1000)

        if getattr(response, "stop_reason", None) == "max_tokens":
            logger.warning(
                "Anthropic response hit max_tokens=%d; output may be truncated",
                max_tokens,
            )

        text = _first_text_block(response)
        if json_output:
            text = _JSON_PREFILL + text

        return LLMResponse(
            content=text,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=response.model,
            provider="anthropic",
            latency_ms=latency_ms,
            raw_response=response,
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model


def _first_text_block(response: Any) -> str:
    for block in response.content:
        if getattr(block, "type", None) == "text":
            return block.text
    return ""
