# src/tracking/budget.py — v1
"""Daily LLM spend tracking against a configured ceiling.

The tracker is a pure gate: it never raises on overspend. A call that
pushes spend past the ceiling is allowed to land; the next ``has_budget``
check then fails closed. Resetting at day boundaries is left to the
embedding system via ``reset_daily_budget``.
"""

from __future__ import annotations

import logging
import threading

from specscout.tracking.models import BudgetState

logger = logging.getLogger(__name__)


class BudgetTracker:
    """Accumulates spend (USD) for the current tracking period."""

    def __init__(self, daily_ceiling: float) -> None:
        if daily_ceiling <= 0:
            raise ValueError("daily_ceiling must be > 0")
        self._daily_ceiling = daily_ceiling
        self._spent_today = 0.0
        self._lock = threading.Lock()

    @property
    def daily_ceiling(self) -> float:
        return self._daily_ceiling

    @property
    def spent_today(self) -> float:
        with self._lock:
            return self._spent_today

    @property
    def remaining(self) -> float:
        """Budget left before the ceiling (never negative)."""
        with self._lock:
            return max(0.0, self._daily_ceiling - self._spent_today)

    def has_budget(self) -> bool:
        """True while spend is strictly below the ceiling."""
        with self._lock:
            return self._spent_today < self._daily_ceiling

    def record_spend(self, amount: float) -> None:
        """Add ``amount`` to today's spend (no clamp at the ceiling)."""
        if amount < 0:
            raise ValueError(f"Spend amount must be >= 0, got {amount}")
        with self._lock:
            was_within = self._spent_today < self._daily_ceiling
            self._spent_today += amount
            crossed = was_within and self._spent_today >= self._daily_ceiling
            spent = self._spent_today
        if crossed:
            logger.warning(
                "Daily LLM budget reached: $%.4f spent of $%.2f",
                spent, self._daily_ceiling,
            )

    def reset_daily_budget(self) -> None:
        """Start a new tracking period with zero spend."""
        with self._lock:
            previous = self._spent_today
            self._spent_today = 0.0
        logger.info("Daily LLM budget reset (previous spend $%.4f)", previous)

    def snapshot(self) -> BudgetState:
        """Point-in-time copy of the budget state."""
        with self._lock:
            return BudgetState(
                spent_today=self._spent_today,
                daily_ceiling=self._daily_ceiling,
            )
