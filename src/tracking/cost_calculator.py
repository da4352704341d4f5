# src/tracking/cost_calculator.py — v2
"""Cost calculation from oracle token usage.

The estimate uses a single flat rate per 1M tokens (input and output
alike), configured via LLM_PRICE_PER_1M_TOKENS.
"""

from __future__ import annotations

from specscout.llm.models import LLMResponse
from specscout.tracking.models import LLMCallRecord

DEFAULT_PRICE_PER_1M_TOKENS = 1.0


def compute_token_cost(
    total_tokens: int, price_per_1m_tokens: float = DEFAULT_PRICE_PER_1M_TOKENS
) -> float:
    """Estimated USD cost for a token count."""
    if total_tokens <= 0:
        return 0.0
    return total_tokens * price_per_1m_tokens / 1_000_000


def compute_call_cost(
    response: LLMResponse, price_per_1m_tokens: float = DEFAULT_PRICE_PER_1M_TOKENS
) -> float:
    """Compute estimated cost for a single oracle response in USD."""
    return compute_token_cost(response.total_tokens, price_per_1m_tokens)


def compute_total_cost(records: list[LLMCallRecord]) -> float:
    """Total estimated cost across call records."""
    return sum(r.estimated_cost_usd for r in records)
