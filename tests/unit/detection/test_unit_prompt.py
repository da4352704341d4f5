# tests/unit/detection/test_unit_prompt.py — v1
"""Tests for detection/prompt.py."""

from __future__ import annotations

import pytest

from specscout.core.models import SPEC_TYPES
from specscout.detection.prompt import build_messages, truncate_content


class TestTruncateContent:
    def test_short_content_unchanged(self):
        assert truncate_content("openapi: 3.0.0", 3000) == "openapi: 3.0.0"

    def test_prefix_kept(self):
        assert truncate_content("abcdef", 3) == "abc"

    def test_exact_length(self):
        assert truncate_content("abc", 3) == "abc"

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            truncate_content("abc", 0)


class TestBuildMessages:
    def test_single_user_message(self):
        messages = build_messages("specs/api.yaml", "openapi: 3.0.0")
        assert len(messages) == 1
        assert messages[0].role == "user"

    def test_contains_path_and_content(self):
        text = build_messages("specs/api.yaml", "openapi: 3.0.0")[0].content
        assert "FILEPATH: specs/api.yaml" in text
        assert "openapi: 3.0.0" in text

    def test_lists_every_spec_type(self):
        text = build_messages("a.json", "{}")[0].content
        for spec_type in SPEC_TYPES:
            assert f'"{spec_type}"' in text

    def test_names_required_fields(self):
        text = build_messages("a.json", "{}")[0].content
        for field in ("isApiSpec", "specType", "confidence", "reasoning", "endpoints"):
            assert f'"{field}"' in text

    def test_states_limit(self):
        text = build_messages("a.json", "x" * 50, max_length=10)[0].content
        assert "first 10 chars" in text
        assert "x" * 11 not in text
