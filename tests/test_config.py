import pytest
from pydantic import ValidationError

from scholarfeed.config import DEFAULT_COHERE_MODEL, AppSettings
from scholarfeed.errors import ConfigurationError


def test_from_env_reads_known_variables() -> None:
    settings = AppSettings.from_env(
        {
            "COHERE_KEY": "cohere-key",
            "COHERE_MODEL_FINE_TUNED": "my-fine-tune",
            "SCRAPINGDOG_KEY": " dog-key ",
            "OPENAI_API_KEY": "openai-key",
            "SCHOLAR_RESULTS_PER_PAGE": "10",
        }
    )

    assert settings.cohere_api_key == "cohere-key"
    assert settings.cohere_model == "my-fine-tune"
    assert settings.scrapingdog_api_key == "dog-key"
    assert settings.openai_api_key == "openai-key"
    assert settings.results_per_page == 10
    assert settings.language == "en"


def test_from_env_ignores_blank_values() -> None:
    settings = AppSettings.from_env({"COHERE_KEY": "   ", "COHERE_MODEL_FINE_TUNED": ""})

    assert settings.cohere_api_key is None
    assert settings.cohere_model == DEFAULT_COHERE_MODEL


def test_from_env_rejects_invalid_values() -> None:
    with pytest.raises(ConfigurationError):
        AppSettings.from_env({"SCHOLAR_RESULTS_PER_PAGE": "many"})


def test_require_names_the_missing_variable() -> None:
    settings = AppSettings(openai_api_key="key")

    assert settings.require("openai_api_key") == "key"
    with pytest.raises(ConfigurationError, match="SCRAPINGDOG_KEY"):
        settings.require("scrapingdog_api_key")


def test_settings_are_immutable() -> None:
    settings = AppSettings()

    with pytest.raises(ValidationError):
        settings.cohere_api_key = "changed"  # type: ignore[misc]
