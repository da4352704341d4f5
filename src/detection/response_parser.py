# src/detection/response_parser.py — v1
"""Strict parsing of oracle answers into ClassificationResult.

A well-formed low-confidence answer and an unusable answer are different
things: the former is returned as a result, the latter raises
ResponseParseError with a diagnostic instead of degrading to a default.
"""

from __future__ import annotations

import json
import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from specscout.core.models import ClassificationResult, SpecType

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class ResponseParseError(ValueError):
    """Oracle answer is not a valid classification object."""


class OraclePayload(BaseModel):
    """Exact wire shape expected from the oracle."""

    model_config = ConfigDict(strict=True, extra="ignore")

    isApiSpec: bool  # noqa: N815
    specType: SpecType  # noqa: N815
    confidence: int = Field(ge=1, le=10)
    reasoning: str
    endpoints: Annotated[int, Field(ge=0)] | None

    def to_result(self) -> ClassificationResult:
        return ClassificationResult(
            is_api_spec=self.isApiSpec,
            spec_type=self.specType,
            confidence=self.confidence,
            reasoning=self.reasoning,
            estimated_endpoint_count=self.endpoints,
        )


def extract_json_content(text: str) -> str:
    """Extract JSON from a markdown code block if present."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_classification(text: str) -> ClassificationResult:
    """Parse an oracle answer.

    Every field must be present and correctly typed; extra fields are
    ignored.

    Raises:
        ResponseParseError: On empty, non-JSON, non-object or invalid answers.
    """
    content = extract_json_content(text or "")
    if not content:
        raise ResponseParseError("Empty response")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Invalid JSON: {e.msg} at position {e.pos}") from e

    if not isinstance(data, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    try:
        payload = OraclePayload.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise ResponseParseError(f"Invalid classification: {problems}") from e

    return payload.to_result()
