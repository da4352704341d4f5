# src/llm/client_factory.py — v3
"""Factory: instantiate LLM client from provider name.

Called by the detector to create the oracle's client from settings.
"""

from __future__ import annotations

import importlib
import logging

from specscout.config.settings import ConfigurationError, Settings
from specscout.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "specscout.llm.adapters.openai_adapter.OpenAIAdapter",
    "anthropic": "specscout.llm.adapters.anthropic_adapter.AnthropicAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the correct adapter from provider name.

    Args:
        provider: Provider identifier (openai, anthropic).
        model: Model name (e.g. gpt-4o-mini).
        settings: Application settings (for API keys and timeout).
        **kwargs: Additional provider-specific arguments.

    Returns:
        Configured BaseLLMClient instance.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    init_kwargs["model"] = model

    if settings is not None:
        init_kwargs.setdefault("api_key", settings.api_key_for(provider))
        init_kwargs.setdefault("timeout_s", settings.llm_timeout_s)

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return adapter_cls(**init_kwargs)


def create_client_from_settings(settings: Settings) -> BaseLLMClient:
    """Create the configured oracle client.

    Raises:
        ConfigurationError: If the provider's API key is absent or the
            provider is unknown.
    """
    settings.require_api_key()
    try:
        return create_llm_client(settings.llm_provider, settings.llm_model, settings)
    except UnsupportedProviderError as e:
        raise ConfigurationError(str(e)) from e


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter.

    Args:
        name: Provider identifier.
        class_path: Fully qualified class path implementing BaseLLMClient.
    """
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
