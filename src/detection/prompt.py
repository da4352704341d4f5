# src/detection/prompt.py — v1
"""Prompt construction for API specification classification."""

from __future__ import annotations

from specscout.core.models import SPEC_TYPES
from specscout.llm.models import Message

DEFAULT_MAX_CONTENT_LENGTH = 3000

SYSTEM_PROMPT = (
    "You are an expert at identifying API specifications. "
    "Respond only with valid JSON."
)

_SPEC_TYPE_CHOICES = " | ".join(f'"{t}"' for t in SPEC_TYPES)

_USER_TEMPLATE = """Analyze this file to determine if it contains an API specification.

FILEPATH: {path}
CONTENT (first {limit} chars):
{content}

Return ONLY a JSON object with exactly these fields:
{{
  "isApiSpec": boolean,
  "specType": {spec_types},
  "confidence": integer from 1 to 10,
  "reasoning": "brief explanation",
  "endpoints": integer (estimated number of endpoints/operations, 0 if none)
}}

CRITERIA:
- Look for: openapi, swagger, asyncapi, paths, operations, channels, schemas, definitions, type Query/Mutation
- Ignore: configuration files, package manifests, documentation, examples
- Confidence 8-10: definitely an API spec
- Confidence 5-7: possibly an API spec
- Confidence 1-4: probably not an API spec

RESPOND WITH ONLY THE JSON OBJECT."""


def truncate_content(content: str, max_length: int = DEFAULT_MAX_CONTENT_LENGTH) -> str:
    """Return the fixed-length prefix sent to the oracle."""
    if max_length <= 0:
        raise ValueError("max_length must be > 0")
    return content[:max_length]


def build_messages(
    path: str, content: str, max_length: int = DEFAULT_MAX_CONTENT_LENGTH
) -> list[Message]:
    """Build the user message for one classification call."""
    text = _USER_TEMPLATE.format(
        path=path,
        limit=max_length,
        content=truncate_content(content, max_length),
        spec_types=_SPEC_TYPE_CHOICES,
    )
    return [Message(role="user", content=text)]
