# src/tracking/metrics.py — v2
"""Cumulative detection metrics built from per-batch results.

Specs and confidence are counted from fresh oracle answers only, so a file
served again from cache is not detected twice. ``oracle_calls`` counts
calls issued (answered or not), matching BatchSummary; ``answered_calls``
counts the calls the provider answered, which are the ones charged.
"""

from __future__ import annotations

from specscout.core.models import ClassificationResult
from specscout.tracking.call_logger import CallLogger
from specscout.tracking.models import BatchSummary, DetectionMetrics


class MetricsCollector:
    """Aggregates batch outcomes into DetectionMetrics."""

    def __init__(self, call_logger: CallLogger, confidence_threshold: int = 7) -> None:
        self._call_logger = call_logger
        self._threshold = confidence_threshold
        self._files = 0
        self._specs = 0
        self._fallbacks = 0
        self._cache_hits = 0
        self._oracle_calls = 0
        self._confidence_sum = 0
        self._scored = 0
        self._processing_ms = 0

    def observe_batch(
        self, summary: BatchSummary, oracle_results: list[ClassificationResult]
    ) -> None:
        """Fold one batch into the running totals.

        Args:
            summary: The batch's summary.
            oracle_results: Results the oracle answered during this batch
                (cache hits and fallbacks excluded).
        """
        self._files += summary.total
        self._cache_hits += summary.cache_hits
        self._fallbacks += summary.fallbacks
        self._oracle_calls += summary.oracle_calls
        self._processing_ms += int(summary.duration_seconds * 1000)
        for r in oracle_results:
            self._confidence_sum += r.confidence
            self._scored += 1
            if r.is_confirmed(self._threshold):
                self._specs += 1

    def snapshot(self) -> DetectionMetrics:
        total_cost = self._call_logger.total_cost_usd
        return DetectionMetrics(
            total_files_analyzed=self._files,
            specs_detected=self._specs,
            average_confidence=(
                round(self._confidence_sum / self._scored, 2) if self._scored else 0.0
            ),
            cost_per_detection=total_cost / self._specs if self._specs else 0.0,
            processing_time_ms=self._processing_ms,
            fallback_usage=self._fallbacks,
            cache_hits=self._cache_hits,
            oracle_calls=self._oracle_calls,
            answered_calls=self._call_logger.total_calls,
            total_cost_usd=total_cost,
        )
