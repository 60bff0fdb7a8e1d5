"""Runtime settings for the Scholar Feed services."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scholarfeed.errors import ConfigurationError

__all__ = [
    "AppSettings",
    "DEFAULT_COHERE_BASE_URL",
    "DEFAULT_COHERE_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "ENV_VARS",
    "get_settings",
]

DEFAULT_COHERE_BASE_URL = "https://api.cohere.ai/compatibility/v1"
DEFAULT_COHERE_MODEL = "command-a-03-2025"
DEFAULT_OPENAI_MODEL = "gpt-4.1-nano"

#: Environment variable backing each settings field.
ENV_VARS = {
    "cohere_api_key": "COHERE_KEY",
    "cohere_model": "COHERE_MODEL_FINE_TUNED",
    "cohere_base_url": "COHERE_BASE_URL",
    "scrapingdog_api_key": "SCRAPINGDOG_KEY",
    "openai_api_key": "OPENAI_API_KEY",
    "openai_model": "OPENAI_MODEL",
    "openai_base_url": "OPENAI_BASE_URL",
    "results_per_page": "SCHOLAR_RESULTS_PER_PAGE",
    "language": "SCHOLAR_LANGUAGE",
}


class AppSettings(BaseModel):
    """Credentials and tuning values shared by the query, search and summary services."""

    model_config = ConfigDict(frozen=True)

    cohere_api_key: str | None = Field(default=None, description="Key for the query generation model")
    cohere_model: str = Field(
        default=DEFAULT_COHERE_MODEL,
        description="Identifier of the (fine-tuned) query generation model",
    )
    cohere_base_url: str = Field(
        default=DEFAULT_COHERE_BASE_URL,
        description="OpenAI-compatible endpoint serving the query generation model",
    )
    scrapingdog_api_key: str | None = Field(default=None, description="Key for the scholar search provider")
    openai_api_key: str | None = Field(default=None, description="Key for the summarisation model")
    openai_model: str = Field(default=DEFAULT_OPENAI_MODEL, description="Summarisation model name")
    openai_base_url: str | None = Field(default=None, description="Optional override of the OpenAI API URL")
    results_per_page: int = Field(default=20, ge=1, description="Search results requested per page")
    language: str = Field(default="en", description="Language code passed to the search provider")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppSettings":
        """Build settings from environment variables, ignoring blank values."""

        source = os.environ if environ is None else environ
        values = {}
        for field_name, env_name in ENV_VARS.items():
            raw = source.get(env_name)
            if raw is None or not raw.strip():
                continue
            values[field_name] = raw.strip()

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid environment configuration:\n{exc}") from exc

    def require(self, field_name: str) -> str:
        """Return the value of ``field_name`` or raise :class:`ConfigurationError`."""

        value = getattr(self, field_name)
        if not value:
            env_name = ENV_VARS.get(field_name, field_name.upper())
            raise ConfigurationError(
                f"{env_name} is not configured. Set it in the environment or in a .env file."
            )
        return value


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return the process-wide settings, loading them from the environment once."""

    return AppSettings.from_env()
