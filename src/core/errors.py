# src/core/errors.py — v1
"""Per-item classification errors.

Both are recovered inside the batch orchestrator and turned into fallback
results; only single-file callers see them raised.
"""

from __future__ import annotations


class BudgetExhausted(Exception):
    """A classification was needed but the daily LLM budget is spent."""

    def __init__(self, spent: float, ceiling: float) -> None:
        self.spent = spent
        self.ceiling = ceiling
        super().__init__(
            f"Daily LLM budget exceeded (spent ${spent:.4f} of ${ceiling:.2f})"
        )


class OracleError(Exception):
    """The oracle call for one file failed or returned an unusable answer."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"LLM analysis failed for {path}: {reason}")
