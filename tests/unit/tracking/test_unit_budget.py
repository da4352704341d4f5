# tests/unit/tracking/test_unit_budget.py — v1
"""Tests for tracking/budget.py."""

from __future__ import annotations

import threading

import pytest

from specscout.tracking.budget import BudgetTracker


class TestBudgetTracker:
    def test_initial_state(self):
        budget = BudgetTracker(daily_ceiling=10.0)
        assert budget.spent_today == 0.0
        assert budget.remaining == 10.0
        assert budget.has_budget()

    def test_rejects_non_positive_ceiling(self):
        with pytest.raises(ValueError):
            BudgetTracker(daily_ceiling=0)

    def test_has_budget_is_strict(self):
        budget = BudgetTracker(daily_ceiling=1.0)
        budget.record_spend(0.75)
        assert budget.has_budget()
        budget.record_spend(0.25)
        assert not budget.has_budget()

    def test_spend_not_clamped(self):
        budget = BudgetTracker(daily_ceiling=1.0)
        budget.record_spend(0.9)
        budget.record_spend(0.5)
        assert budget.spent_today == pytest.approx(1.4)
        assert budget.remaining == 0.0
        assert budget.snapshot().exhausted

    def test_negative_spend_rejected(self):
        with pytest.raises(ValueError):
            BudgetTracker(daily_ceiling=1.0).record_spend(-0.1)

    def test_reset(self):
        budget = BudgetTracker(daily_ceiling=1.0)
        budget.record_spend(2.0)
        budget.reset_daily_budget()
        assert budget.spent_today == 0.0
        assert budget.has_budget()

    def test_crossing_logs_warning_once(self, caplog):
        budget = BudgetTracker(daily_ceiling=1.0)
        with caplog.at_level("WARNING", logger="specscout.tracking.budget"):
            budget.record_spend(0.6)
            budget.record_spend(0.6)
            budget.record_spend(0.6)
        warnings = [r for r in caplog.records if r.name == "specscout.tracking.budget"]
        assert len(warnings) == 1

    def test_concurrent_spend_is_not_lost(self):
        budget = BudgetTracker(daily_ceiling=1_000_000.0)

        def _spend() -> None:
            for _ in range(1000):
                budget.record_spend(1.0)

        threads = [threading.Thread(target=_spend) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert budget.spent_today == 8000.0
