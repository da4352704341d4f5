# src/config/settings.py — v2
"""Typed configuration loaded from environment / .env via pydantic-settings.

Single source of truth for all deployment-specific settings: oracle
provider and model, spending ceiling, cache lifetime, batching, candidate
scanning and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is missing or internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM ORACLE ===
    llm_enabled: bool = True
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_max_tokens: int = 1000
    llm_temperature: float = 0.1
    llm_timeout: int = 10_000  # milliseconds

    # Provider API keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # === Cost control ===
    llm_daily_budget: float = 10.00
    llm_price_per_1m_tokens: float = 1.0
    max_content_length: int = 3000

    # === Cache ===
    llm_cache_ttl: int = 86_400  # seconds
    cache_backend: Literal["memory", "json"] = "memory"
    cache_root: Path = Path("~/.specscout/cache")

    # === Batching ===
    batch_group_size: int = 10
    batch_group_delay_s: float = 1.0
    confidence_threshold: int = 7

    # === Candidate scan ===
    scan_extensions: str = ".yaml,.yml,.json"
    scan_min_size: int = 100
    scan_max_size: int = 100_000
    scan_max_files: int = 50
    scan_recursive: bool = True

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("llm_provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:  # noqa: N805
        return v.strip().lower()

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.llm_daily_budget <= 0:
            errors.append("LLM_DAILY_BUDGET must be > 0")

        if self.llm_cache_ttl <= 0:
            errors.append("LLM_CACHE_TTL must be > 0")

        if self.llm_timeout <= 0:
            errors.append("LLM_TIMEOUT must be > 0")

        if self.max_content_length <= 0:
            errors.append("MAX_CONTENT_LENGTH must be > 0")

        if self.batch_group_size < 1:
            errors.append("BATCH_GROUP_SIZE must be >= 1")

        if self.batch_group_delay_s < 0:
            errors.append("BATCH_GROUP_DELAY_S must be >= 0")

        if not 1 <= self.confidence_threshold <= 10:
            errors.append("CONFIDENCE_THRESHOLD must be between 1 and 10")

        if self.scan_min_size >= self.scan_max_size:
            errors.append("SCAN_MIN_SIZE must be < SCAN_MAX_SIZE")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def scan_extensions_list(self) -> list[str]:
        """Parse comma-separated scan extensions (normalized to '.ext')."""
        exts = []
        for ext in self.scan_extensions.split(","):
            ext = ext.strip().lower()
            if not ext:
                continue
            exts.append(ext if ext.startswith(".") else f".{ext}")
        return exts

    @property
    def llm_timeout_s(self) -> float:
        """Per-call oracle timeout in seconds."""
        return self.llm_timeout / 1000

    def api_key_for(self, provider: str) -> str:
        """Return the configured API key for a provider ("" if unknown)."""
        return getattr(self, f"{provider}_api_key", "")

    def require_api_key(self) -> str:
        """Return the selected provider's API key.

        Raises:
            ConfigurationError: If the key is not configured.
        """
        key = self.api_key_for(self.llm_provider)
        if not key:
            raise ConfigurationError(
                f"{self.llm_provider.upper()}_API_KEY environment variable is required"
            )
        return key


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment / .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
