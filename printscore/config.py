"""PrintScore configuration module.

Loads environment variables with type validation using pydantic-settings.
The scoring core itself takes no configuration; these settings drive the
HTTP surface and the choice of scoring strategy.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

STRATEGIES = {"deterministic", "vision"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Claude API (optional vision strategy) ──
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key for the vision scoring strategy",
    )
    vision_model: str = Field(
        default="claude-haiku-4-5-20251001",
        description="Claude model used when scoring_strategy is 'vision'",
    )

    # ── Scoring ──
    scoring_strategy: str = Field(
        default="deterministic",
        description="Scorer to use: 'deterministic' or 'vision'",
    )

    # ── HTTP ──
    max_upload_mb: int = Field(
        default=50,
        description="Reject uploads larger than this many megabytes",
        ge=1,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )
    host: str = Field(default="127.0.0.1", description="Bind address for the API server")
    port: int = Field(default=8040, description="Port for the API server", ge=1, le=65535)

    # ── General ──
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            raise ValueError(f"log_level must be one of {valid}, got '{v}'")
        return upper

    @field_validator("scoring_strategy")
    @classmethod
    def validate_scoring_strategy(cls, v: str) -> str:
        """Ensure the strategy name is known."""
        lower = v.lower()
        if lower not in STRATEGIES:
            raise ValueError(f"scoring_strategy must be one of {STRATEGIES}, got '{v}'")
        return lower

    @property
    def max_upload_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.max_upload_mb * 1024 * 1024

    def has_anthropic_key(self) -> bool:
        """Check if Anthropic API key is configured."""
        return bool(self.anthropic_api_key and self.anthropic_api_key != "sk-ant-...")


def get_settings(**overrides: str) -> Settings:
    """Create a Settings instance with optional overrides.

    Args:
        **overrides: Key-value pairs to override env/defaults.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If any value fails validation.
    """
    return Settings(**overrides)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for CLI and server entry points."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
