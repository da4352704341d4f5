# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types: requests, results and detected spec
metadata are all imported from core.models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SpecType = Literal["openapi-3.x", "swagger-2.x", "asyncapi", "graphql", "unknown"]

SPEC_TYPES: tuple[str, ...] = (
    "openapi-3.x",
    "swagger-2.x",
    "asyncapi",
    "graphql",
    "unknown",
)


# === CLASSIFICATION ===


class ClassificationRequest(BaseModel):
    """A single file submitted for classification."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str


class ClassificationResult(BaseModel):
    """Outcome of classifying one file.

    Confidence 1-10 comes from the oracle; 0 is reserved for fallback
    results produced when the oracle could not be consulted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_api_spec: bool = Field(alias="isApiSpec")
    spec_type: SpecType = Field(alias="specType")
    confidence: int = Field(ge=0, le=10)
    reasoning: str
    estimated_endpoint_count: int | None = Field(
        default=None, alias="estimatedEndpointCount"
    )

    @property
    def is_fallback(self) -> bool:
        """True for substituted results (oracle not consulted or unusable)."""
        return self.confidence == 0

    def is_confirmed(self, threshold: int) -> bool:
        """True if classified as a spec at or above the confidence threshold."""
        return self.is_api_spec and self.confidence >= threshold


def fallback_result(reason: str) -> ClassificationResult:
    """Safe default classification used when the oracle cannot answer."""
    return ClassificationResult(
        is_api_spec=False,
        spec_type="unknown",
        confidence=0,
        reasoning=reason,
        estimated_endpoint_count=0,
    )


# === DETECTED SPECS ===


class SpecInfo(BaseModel):
    """Metadata for a file confirmed to be an API specification."""

    file_path: str
    api_name: str
    version: str | None = None
    spec_type: SpecType | None = None
    confidence: int | None = None
    size: int | None = None
