from __future__ import annotations

from types import SimpleNamespace

import pytest

from scholarfeed.config import AppSettings
from scholarfeed.errors import ConfigurationError, UpstreamEmptyError
from scholarfeed.services.query_generator import QUERY_TEMPERATURE, QueryGenerator, parse_queries


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_generator(completions: FakeCompletions) -> QueryGenerator:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    settings = AppSettings(cohere_api_key="test-key", cohere_model="fine-tuned-model")
    return QueryGenerator(settings, client=client)


def test_parse_queries_extracts_numbered_items() -> None:
    text = (
        "Here are five queries:\n"
        "1. Machine learning for climate modelling\n"
        "2.   **Deep learning weather prediction**  \n"
        "3. Carbon capture optimisation\n"
        "4. AI energy grid forecasting\n"
        "5. Climate risk neural networks"
    )

    queries = parse_queries(text)

    assert queries == [
        "Machine learning for climate modelling",
        "**Deep learning weather prediction**",
        "Carbon capture optimisation",
        "AI energy grid forecasting",
        "Climate risk neural networks",
    ]


def test_parse_queries_falls_back_to_lines_without_filler() -> None:
    text = "Based on your interests:\n\n  quantum error correction  \nHere you go\ntopological qubits\n"

    assert parse_queries(text) == ["quantum error correction", "topological qubits"]


def test_parse_queries_returns_whole_text_when_only_filler() -> None:
    assert parse_queries("  Here is a single idea about coral reefs  ") == [
        "Here is a single idea about coral reefs"
    ]


def test_parse_queries_rejects_empty_text() -> None:
    with pytest.raises(UpstreamEmptyError):
        parse_queries("  \n ")


def test_generate_queries_sends_interests_with_low_temperature() -> None:
    completions = FakeCompletions("1. AI climate models\n2. Neural weather forecasts")
    generator = make_generator(completions)

    result = generator.generate_queries(["AI", "climate"])

    assert result.queries == ["AI climate models", "Neural weather forecasts"]
    assert result.error is None
    call = completions.calls[0]
    assert call["model"] == "fine-tuned-model"
    assert call["temperature"] == QUERY_TEMPERATURE == 0.3
    assert "AI, climate" in call["messages"][-1]["content"]


def test_generate_queries_reports_upstream_failure() -> None:
    generator = make_generator(FakeCompletions(error=RuntimeError("service unavailable")))

    result = generator.generate_queries(["biology"])

    assert result.queries == []
    assert result.error == "service unavailable"


def test_generate_queries_reports_empty_reply() -> None:
    generator = make_generator(FakeCompletions(content=None))

    result = generator.generate_queries(["biology"])

    assert result.queries == []
    assert result.error


def test_generate_optimized_query_uses_first_query_or_interests() -> None:
    assert make_generator(FakeCompletions("1. first\n2. second")).generate_optimized_query(["a"]) == "first"

    failing = make_generator(FakeCompletions(error=RuntimeError("boom")))
    assert failing.generate_optimized_query(["biology", "genetics"]) == "biology genetics"


def test_generator_requires_api_key() -> None:
    with pytest.raises(ConfigurationError, match="COHERE_KEY"):
        QueryGenerator(AppSettings(), client=SimpleNamespace())


def test_parse_queries_ignores_numbers_without_list_spacing() -> None:
    assert parse_queries("2.5D imaging of tissue\n3D printing of bone scaffolds") == [
        "2.5D imaging of tissue",
        "3D printing of bone scaffolds",
    ]
