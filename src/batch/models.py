# src/batch/models.py — v3
"""Batch scan models: ScanResult, DetectionComparison."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from specscout.core.models import ClassificationResult, SpecInfo


class ScanResult(BaseModel):
    """Outcome of scanning one directory for API specifications."""

    scan_root: str
    method: Literal["llm", "pattern"]
    candidates: list[str] = Field(default_factory=list)
    results: list[ClassificationResult] = Field(default_factory=list)
    specs: list[SpecInfo] = Field(default_factory=list)
    duration_seconds: float = 0.0


class DetectionComparison(BaseModel):
    """LLM and pattern detection run side by side on one directory."""

    scan_root: str
    llm: ScanResult
    pattern: ScanResult
    additional_specs_found: int
    llm_only: list[str] = Field(default_factory=list)
    pattern_only: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0
