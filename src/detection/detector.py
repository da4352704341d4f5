# src/detection/detector.py — v2
"""Batch orchestrator for LLM-based API specification detection.

Usage:
    detector = SpecDetector.from_settings(load_settings())
    results = await detector.classify_batch(requests)

Workflow per batch:
    1. Partition requests into fixed-size groups (order preserved)
    2. Run each group's members concurrently; groups run one after another
    3. Per member: fingerprint → cache → budget gate → oracle → cache write
    4. Pause between groups to smooth the request rate
    5. Return results index-aligned with the input, plus a BatchSummary

Per-item failures (budget exhausted, oracle errors, cancellation) become
fallback results; they never abort the batch.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Iterator, Literal, Sequence, TypeVar, cast

from specscout.cache.base_cache_store import BaseCacheStore
from specscout.cache.fingerprint import compute_fingerprint
from specscout.config.settings import Settings
from specscout.core.errors import BudgetExhausted, OracleError
from specscout.core.models import (
    ClassificationRequest,
    ClassificationResult,
    fallback_result,
)
from specscout.detection.oracle import OracleClient
from specscout.llm.base_client import BaseLLMClient
from specscout.logging.context import (
    batch_context,
    set_group_context,
    set_path_context,
)
from specscout.tracking.budget import BudgetTracker
from specscout.tracking.metrics import MetricsCollector
from specscout.tracking.models import BatchSummary, DetectionMetrics

logger = logging.getLogger(__name__)

DEFAULT_GROUP_SIZE = 10
DEFAULT_GROUP_DELAY_S = 1.0
DEFAULT_CONFIDENCE_THRESHOLD = 7

BUDGET_EXCEEDED_REASON = "Daily LLM budget exceeded"
CANCELLED_REASON = "Classification cancelled"

T = TypeVar("T")

RequestLike = ClassificationRequest | tuple[str, str]


@dataclass(frozen=True)
class _ItemOutcome:
    result: ClassificationResult
    source: Literal["cache", "oracle", "budget", "error", "cancelled"]


def partition(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    if size < 1:
        raise ValueError("size must be >= 1")
    for start in range(0, len(items), size):
        yield items[start : start + size]


class SpecDetector:
    """Cost-governed, cached, batch classifier of API specification files.

    Owns the cache and budget tracker for its lifetime; the caller owns
    the detector instance.
    """

    def __init__(
        self,
        oracle: OracleClient,
        cache: BaseCacheStore,
        budget: BudgetTracker,
        group_size: int = DEFAULT_GROUP_SIZE,
        group_delay_s: float = DEFAULT_GROUP_DELAY_S,
        confidence_threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
    ) -> None:
        if group_size < 1:
            raise ValueError("group_size must be >= 1")
        if group_delay_s < 0:
            raise ValueError("group_delay_s must be >= 0")
        self._oracle = oracle
        self._cache = cache
        self._budget = budget
        self._group_size = group_size
        self._group_delay_s = group_delay_s
        self._threshold = confidence_threshold
        self._metrics = MetricsCollector(oracle.call_logger, confidence_threshold)
        self.last_summary: BatchSummary | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        llm_client: BaseLLMClient | None = None,
        cache: BaseCacheStore | None = None,
    ) -> SpecDetector:
        """Build a detector from configuration.

        Raises:
            ConfigurationError: If no client is given and the provider's API
                key is not configured.
        """
        from specscout.cache.cache_factory import create_cache_store
        from specscout.llm.client_factory import create_client_from_settings

        settings = settings or Settings()
        if llm_client is None:
            llm_client = create_client_from_settings(settings)

        budget = BudgetTracker(daily_ceiling=settings.llm_daily_budget)
        oracle = OracleClient(
            llm_client,
            budget,
            max_content_length=settings.max_content_length,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
            timeout_s=settings.llm_timeout_s,
            price_per_1m_tokens=settings.llm_price_per_1m_tokens,
        )
        logger.info(
            "Spec detector ready: provider=%s, model=%s, daily_budget=$%.2f",
            llm_client.provider_name, llm_client.model_name, settings.llm_daily_budget,
        )
        return cls(
            oracle=oracle,
            cache=cache or create_cache_store(settings),
            budget=budget,
            group_size=settings.batch_group_size,
            group_delay_s=settings.batch_group_delay_s,
            confidence_threshold=settings.confidence_threshold,
        )

    @property
    def budget(self) -> BudgetTracker:
        return self._budget

    @property
    def cache(self) -> BaseCacheStore:
        return self._cache

    @property
    def confidence_threshold(self) -> int:
        return self._threshold

    def reset_daily_budget(self) -> None:
        """Start a new spend period; meant to be called by a day-boundary scheduler."""
        self._budget.reset_daily_budget()

    def get_metrics(self) -> DetectionMetrics:
        """Cumulative metrics across all batches run by this detector."""
        return self._metrics.snapshot()

    async def classify_file(self, path: str, content: str) -> ClassificationResult:
        """Classify a single file without fallback substitution.

        Raises:
            BudgetExhausted: Cache miss while the daily budget is spent.
            OracleError: The oracle call failed or its answer was unusable.
        """
        key = compute_fingerprint(path, content)
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", path)
            return cached

        if not self._budget.has_budget():
            state = self._budget.snapshot()
            raise BudgetExhausted(state.spent_today, state.daily_ceiling)

        result = await self._oracle.classify(path, content)
        await self._cache.put(key, result)
        return result

    async def classify_batch(
        self,
        requests: Sequence[RequestLike],
        cancel_event: asyncio.Event | None = None,
    ) -> list[ClassificationResult]:
        """Classify files in groups, returning one result per request in input order.

        Args:
            requests: Files to classify, as ClassificationRequest or
                (path, content) pairs.
            cancel_event: When set, no further oracle calls are issued;
                cache hits are still served and remaining misses fall back.

        Returns:
            Results index-aligned with ``requests``.
        """
        items = [_coerce_request(r) for r in requests]
        t0 = time.perf_counter()

        if not items:
            self.last_summary = BatchSummary(
                total=0, specs_detected=0, cache_hits=0, oracle_calls=0,
                fallbacks=0, budget_exhausted=False, groups=0, duration_seconds=0.0,
            )
            return []

        batch_id = uuid.uuid4().hex[:12]
        with batch_context(batch_id):
            results, outcomes, n_groups = await self._run_groups(items, cancel_event)

        summary = self._summarize(results, outcomes, n_groups, time.perf_counter() - t0)
        self.last_summary = summary
        self._metrics.observe_batch(
            summary, [o.result for o in outcomes if o.source == "oracle"]
        )

        budget_fallbacks = sum(1 for o in outcomes if o.source == "budget")
        if budget_fallbacks:
            state = self._budget.snapshot()
            logger.warning(
                "Daily LLM budget exceeded ($%.4f of $%.2f): %d of %d files "
                "fell back without LLM analysis",
                state.spent_today, state.daily_ceiling, budget_fallbacks, len(items),
            )

        logger.info(
            "Batch analysis complete: %d/%d API specs detected "
            "(%d cache hits, %d LLM calls, %d fallbacks, %.2fs)",
            summary.specs_detected, summary.total, summary.cache_hits,
            summary.oracle_calls, summary.fallbacks, summary.duration_seconds,
        )
        return results

    # --- Internal helpers ---

    async def _run_groups(
        self,
        items: list[ClassificationRequest],
        cancel_event: asyncio.Event | None,
    ) -> tuple[list[ClassificationResult], list[_ItemOutcome], int]:
        groups = list(partition(items, self._group_size))
        outcomes: list[_ItemOutcome | None] = [None] * len(items)

        logger.info(
            "Starting batch analysis of %d files in %d groups", len(items), len(groups)
        )

        offset = 0
        for index, group in enumerate(groups):
            set_group_context(index + 1)
            logger.debug(
                "Processing group %d/%d (%d files)", index + 1, len(groups), len(group)
            )

            group_outcomes = await asyncio.gather(
                *(self._classify_item(req, cancel_event) for req in group)
            )
            # gather preserves argument order, so each outcome lands in its input slot
            for i, outcome in enumerate(group_outcomes):
                outcomes[offset + i] = outcome
            offset += len(group)

            is_last = index == len(groups) - 1
            if not is_last and not _is_set(cancel_event):
                await self._pause(cancel_event)

        final = cast("list[_ItemOutcome]", outcomes)
        return [o.result for o in final], final, len(groups)

    async def _classify_item(
        self,
        request: ClassificationRequest,
        cancel_event: asyncio.Event | None,
    ) -> _ItemOutcome:
        path = request.path
        set_path_context(path)

        key = compute_fingerprint(path, request.content)
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", path)
            return _ItemOutcome(cached, "cache")

        if _is_set(cancel_event):
            return _ItemOutcome(fallback_result(CANCELLED_REASON), "cancelled")

        if not self._budget.has_budget():
            return _ItemOutcome(fallback_result(BUDGET_EXCEEDED_REASON), "budget")

        try:
            result = await self._oracle.classify(path, request.content)
        except OracleError as e:
            logger.warning("LLM analysis failed for %s: %s", path, e.reason)
            return _ItemOutcome(
                fallback_result(f"LLM analysis failed: {e.reason}"), "error"
            )

        await self._cache.put(key, result)
        return _ItemOutcome(result, "oracle")

    async def _pause(self, cancel_event: asyncio.Event | None) -> None:
        """Inter-group delay, cut short if cancellation is requested."""
        if self._group_delay_s <= 0:
            return
        logger.debug("Rate limiting: waiting %.1fs before next group", self._group_delay_s)
        if cancel_event is None:
            await asyncio.sleep(self._group_delay_s)
            return
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self._group_delay_s)
        except asyncio.TimeoutError:
            pass

    def _summarize(
        self,
        results: list[ClassificationResult],
        outcomes: list[_ItemOutcome],
        n_groups: int,
        duration: float,
    ) -> BatchSummary:
        return BatchSummary(
            total=len(results),
            specs_detected=sum(1 for r in results if r.is_confirmed(self._threshold)),
            cache_hits=sum(1 for o in outcomes if o.source == "cache"),
            oracle_calls=sum(1 for o in outcomes if o.source in ("oracle", "error")),
            fallbacks=sum(1 for r in results if r.is_fallback),
            budget_exhausted=any(o.source == "budget" for o in outcomes),
            cancelled=any(o.source == "cancelled" for o in outcomes),
            groups=n_groups,
            duration_seconds=round(duration, 3),
        )


def _is_set(event: asyncio.Event | None) -> bool:
    return event is not None and event.is_set()


def _coerce_request(item: RequestLike) -> ClassificationRequest:
    if isinstance(item, ClassificationRequest):
        return item
    path, content = item
    return ClassificationRequest(path=path, content=content)
