# tests/unit/llm/test_unit_client_factory.py — v1
"""Tests for llm/client_factory.py."""

from __future__ import annotations

import pytest

from specscout.config.settings import ConfigurationError, Settings
from specscout.llm import client_factory
from specscout.llm.adapters.anthropic_adapter import AnthropicAdapter
from specscout.llm.adapters.openai_adapter import OpenAIAdapter
from specscout.llm.client_factory import (
    UnsupportedProviderError,
    create_client_from_settings,
    create_llm_client,
    register_provider,
)


class TestCreateLLMClient:
    def test_openai(self):
        client = create_llm_client("openai", "gpt-4o-mini")
        assert isinstance(client, OpenAIAdapter)
        assert client.provider_name == "openai"
        assert client.model_name == "gpt-4o-mini"

    def test_anthropic(self):
        client = create_llm_client("anthropic", "claude-haiku-4-5-20251001")
        assert isinstance(client, AnthropicAdapter)
        assert client.provider_name == "anthropic"

    def test_settings_supply_key_and_timeout(self):
        s = Settings(_env_file=None, openai_api_key="sk-test", llm_timeout=2500)
        client = create_llm_client("openai", "gpt-4o", s)
        assert client._api_key == "sk-test"
        assert client._timeout_s == 2.5

    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError, match="Available"):
            create_llm_client("mystery", "m")


class TestCreateClientFromSettings:
    def test_requires_key(self):
        s = Settings(_env_file=None, openai_api_key="")
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            create_client_from_settings(s)

    def test_selected_provider(self):
        s = Settings(
            _env_file=None, llm_provider="anthropic",
            llm_model="claude-haiku-4-5-20251001", anthropic_api_key="sk-ant",
        )
        client = create_client_from_settings(s)
        assert isinstance(client, AnthropicAdapter)
        assert client.model_name == "claude-haiku-4-5-20251001"


class TestRegisterProvider:
    def test_custom_provider(self, monkeypatch):
        monkeypatch.setattr(
            client_factory, "_PROVIDER_REGISTRY", dict(client_factory._PROVIDER_REGISTRY)
        )
        register_provider("custom", "specscout.llm.adapters.openai_adapter.OpenAIAdapter")
        assert isinstance(create_llm_client("custom", "m"), OpenAIAdapter)
