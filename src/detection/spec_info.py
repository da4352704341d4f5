# src/detection/spec_info.py — v1
"""Spec metadata extraction and pattern-based detection.

``extract_confirmed_specs`` turns classification results into SpecInfo
records. ``PatternDetector`` is the no-LLM path used when LLM detection is
disabled: it only recognises structurally valid OpenAPI/Swagger documents.
"""

from __future__ import annotations

import json
import logging
from pathlib import PurePosixPath
from typing import Any, Sequence

import yaml

from specscout.core.models import ClassificationRequest, ClassificationResult, SpecInfo

logger = logging.getLogger(__name__)

# Well-known spec filenames checked by the pattern-based detector.
COMMON_SPEC_FILENAMES: frozenset[str] = frozenset({
    "openapi.yaml",
    "openapi.yml",
    "openapi.json",
    "swagger.yaml",
    "swagger.yml",
    "swagger.json",
    "api.yaml",
    "api.yml",
})


class SpecParseError(ValueError):
    """Spec content is neither valid JSON nor valid YAML."""


def parse_spec_document(content: str, path: str) -> Any:
    """Parse spec content as JSON (``.json``) or YAML (everything else).

    YAML is a superset of JSON, so JSON content under a YAML extension parses
    too.

    Raises:
        SpecParseError: If the content cannot be parsed.
    """
    try:
        if path.lower().endswith(".json"):
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecParseError(f"Failed to parse spec content of {path}: {e}") from e


def is_valid_openapi_document(doc: Any) -> bool:
    """True for an OpenAPI 3.x or Swagger 2.x document with info and paths."""
    if not isinstance(doc, dict):
        return False
    has_version = bool(doc.get("openapi") or doc.get("swagger"))
    return has_version and bool(doc.get("info")) and "paths" in doc


def detect_document_type(doc: Any) -> str:
    """Spec type inferred from the document's version marker."""
    if not isinstance(doc, dict):
        return "unknown"
    if str(doc.get("openapi", "")).startswith("3"):
        return "openapi-3.x"
    if str(doc.get("swagger", "")).startswith("2"):
        return "swagger-2.x"
    if doc.get("asyncapi"):
        return "asyncapi"
    return "unknown"


def build_spec_info(
    request: ClassificationRequest,
    result: ClassificationResult | None = None,
) -> SpecInfo:
    """Build SpecInfo from a confirmed file, reading title/version when parseable."""
    doc: Any = None
    try:
        doc = parse_spec_document(request.content, request.path)
    except SpecParseError as e:
        logger.warning("Could not parse confirmed spec %s: %s", request.path, e)

    info = doc.get("info") if isinstance(doc, dict) else None
    title = info.get("title") if isinstance(info, dict) else None
    version = info.get("version") if isinstance(info, dict) else None

    if result is not None:
        spec_type = result.spec_type
        confidence = result.confidence
    else:
        spec_type = detect_document_type(doc)
        confidence = None

    return SpecInfo(
        file_path=request.path,
        api_name=str(title) if title else f"API from {request.path}",
        version=str(version) if version is not None else None,
        spec_type=spec_type,
        confidence=confidence,
        size=len(request.content.encode("utf-8")),
    )


def extract_confirmed_specs(
    requests: Sequence[ClassificationRequest],
    results: Sequence[ClassificationResult],
    threshold: int = 7,
) -> list[SpecInfo]:
    """Pair requests with their results and keep confirmed specs.

    Requests and results are matched by position.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    if len(requests) != len(results):
        raise ValueError(
            f"Got {len(results)} results for {len(requests)} requests"
        )

    specs: list[SpecInfo] = []
    for request, result in zip(requests, results):
        if not result.is_confirmed(threshold):
            continue
        spec = build_spec_info(request, result)
        specs.append(spec)
        logger.info(
            "Confirmed API spec: %s - %s (confidence: %d/10)",
            spec.file_path, spec.api_name, result.confidence,
        )
    return specs


class PatternDetector:
    """Detects specs by filename and document structure, without an LLM."""

    def __init__(self, filenames: frozenset[str] = COMMON_SPEC_FILENAMES) -> None:
        self._filenames = filenames

    def matches_filename(self, path: str) -> bool:
        return PurePosixPath(path.replace("\\", "/")).name.lower() in self._filenames

    def detect(self, requests: Sequence[ClassificationRequest]) -> list[SpecInfo]:
        """Return SpecInfo for well-known filenames holding a valid OpenAPI document."""
        specs: list[SpecInfo] = []
        for request in requests:
            if not self.matches_filename(request.path):
                continue
            try:
                doc = parse_spec_document(request.content, request.path)
            except SpecParseError:
                logger.debug("Skipping unparseable candidate %s", request.path)
                continue
            if is_valid_openapi_document(doc):
                specs.append(build_spec_info(request))

        logger.info("Pattern-based detection found %d specs", len(specs))
        return specs
