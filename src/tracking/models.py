# src/tracking/models.py — v2
"""Tracking domain models: LLMCallRecord, BudgetState, BatchSummary, DetectionMetrics."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class LLMCallRecord(BaseModel):
    """Individual oracle call log entry."""

    call_id: str
    timestamp: datetime
    path: str
    provider: str
    model: str
    input_tokens: int
    output_tokens: int
    total_tokens: int
    latency_ms: int
    status: Literal["success", "failed"]
    estimated_cost_usd: float = 0.0


class BudgetState(BaseModel):
    """Snapshot of spend against the daily ceiling."""

    spent_today: float
    daily_ceiling: float

    @property
    def exhausted(self) -> bool:
        return self.spent_today >= self.daily_ceiling


class BatchSummary(BaseModel):
    """Advisory summary of one classify_batch run."""

    total: int
    specs_detected: int
    cache_hits: int
    oracle_calls: int  # issued, including timeouts and transport failures
    fallbacks: int
    budget_exhausted: bool
    cancelled: bool = False
    groups: int
    duration_seconds: float


class DetectionMetrics(BaseModel):
    """Cumulative detector metrics across all batches."""

    total_files_analyzed: int = 0
    specs_detected: int = 0
    average_confidence: float = 0.0
    cost_per_detection: float = 0.0
    processing_time_ms: int = 0
    fallback_usage: int = 0
    cache_hits: int = 0
    oracle_calls: int = 0
    answered_calls: int = 0
    total_cost_usd: float = 0.0
