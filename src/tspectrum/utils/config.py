# Copyright 2025 KTTC AI (https://github.com/kttc-ai)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration management for tspectrum.

Handles API keys, model settings, and other configuration using Pydantic Settings.
Supports environment variables and .env files.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tspectrum.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings.

    Loads configuration from environment variables or .env file.
    All settings can be overridden via environment variables with TSPECTRUM_ prefix.

    Example .env file:
        TSPECTRUM_OPENAI_API_KEY=sk-...
        TSPECTRUM_ANTHROPIC_API_KEY=sk-ant-...
        TSPECTRUM_GOOGLE_API_KEY=AIza...
        TSPECTRUM_JUDGE_MODE=batch

    Example usage:
        >>> settings = Settings()
        >>> print(settings.daily_quota_limit)
        5
    """

    # Provider API Keys
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key (chat adapters and the spectrum judge)",
        json_schema_extra={"env": "TSPECTRUM_OPENAI_API_KEY"},
    )

    anthropic_api_key: str | None = Field(
        default=None,
        description="Anthropic API key",
        json_schema_extra={"env": "TSPECTRUM_ANTHROPIC_API_KEY"},
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google API key (Gemini and Cloud Translation)",
        json_schema_extra={"env": "TSPECTRUM_GOOGLE_API_KEY"},
    )

    # Models
    openai_paid_model: str = Field(
        default="gpt-4o",
        description="OpenAI model used for the paid tier",
        json_schema_extra={"env": "TSPECTRUM_OPENAI_PAID_MODEL"},
    )

    openai_free_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model used for the free tier",
        json_schema_extra={"env": "TSPECTRUM_OPENAI_FREE_MODEL"},
    )

    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model name",
        json_schema_extra={"env": "TSPECTRUM_GEMINI_MODEL"},
    )

    anthropic_model: str = Field(
        default="claude-sonnet-4-5-20250929",
        description="Anthropic model name",
        json_schema_extra={"env": "TSPECTRUM_ANTHROPIC_MODEL"},
    )

    judge_model: str = Field(
        default="gpt-4o",
        description="Model used by the spectrum judge",
        json_schema_extra={"env": "TSPECTRUM_JUDGE_MODEL"},
    )

    judge_mode: Literal["batch", "per_attempt"] = Field(
        default="batch",
        description="Spectrum judging mode: one batched call, or one call per attempt",
        json_schema_extra={"env": "TSPECTRUM_JUDGE_MODE"},
    )

    # Language pair
    language_a: str = Field(default="Korean", description="Display name of language A")
    language_a_code: str = Field(default="ko", description="ISO code of language A")
    language_b: str = Field(default="English", description="Display name of language B")
    language_b_code: str = Field(default="en", description="ISO code of language B")

    # Request Settings
    request_timeout: float = Field(
        default=30.0,
        description="Transport timeout for provider and judge requests (seconds)",
        gt=0,
        json_schema_extra={"env": "TSPECTRUM_REQUEST_TIMEOUT"},
    )

    # Limits
    daily_quota_limit: int = Field(
        default=5,
        description="Daily request ceiling for anonymous and free-tier callers",
        gt=0,
        json_schema_extra={"env": "TSPECTRUM_DAILY_QUOTA_LIMIT"},
    )

    max_text_chars: int = Field(
        default=5000,
        description="Maximum characters of source text per request",
        gt=0,
        json_schema_extra={"env": "TSPECTRUM_MAX_TEXT_CHARS"},
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        json_schema_extra={"env": "TSPECTRUM_LOG_LEVEL"},
    )

    # Model configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TSPECTRUM_",
        case_sensitive=False,
        extra="ignore",
    )

    def get_provider_credentials(self, provider: str) -> dict[str, str]:
        """Get credentials for a provider.

        Args:
            provider: Provider name (openai, anthropic, google)

        Returns:
            Dictionary with provider credentials

        Raises:
            ConfigurationError: If credentials are not configured

        Example:
            >>> settings = Settings(openai_api_key="sk-test")
            >>> settings.get_provider_credentials("openai")
            {'api_key': 'sk-test'}
        """
        if provider == "openai":
            if not self.openai_api_key:
                raise ConfigurationError(
                    "OpenAI API key not configured. Set TSPECTRUM_OPENAI_API_KEY"
                )
            return {"api_key": self.openai_api_key}

        elif provider == "anthropic":
            if not self.anthropic_api_key:
                raise ConfigurationError(
                    "Anthropic API key not configured. Set TSPECTRUM_ANTHROPIC_API_KEY"
                )
            return {"api_key": self.anthropic_api_key}

        elif provider == "google":
            if not self.google_api_key:
                raise ConfigurationError(
                    "Google API key not configured. Set TSPECTRUM_GOOGLE_API_KEY"
                )
            return {"api_key": self.google_api_key}

        else:
            raise ConfigurationError(f"Unknown provider: {provider}")


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
