"""Tests for the HTTP surface in :mod:`scholarfeed.api.routes`."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from scholarfeed.api.app import create_app
from scholarfeed.config import AppSettings, get_settings
from scholarfeed.models import (
    ArticleView,
    PipelineOutcome,
    QueryGenerationResult,
    SearchDetails,
    SearchResponse,
    SearchResult,
    SummaryResult,
)

CONFIGURED = AppSettings(cohere_api_key="cohere", scrapingdog_api_key="dog", openai_api_key="openai")


@pytest.fixture
def client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: CONFIGURED
    return TestClient(app)


@pytest.fixture
def unconfigured_client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: AppSettings()
    return TestClient(app)


def test_index_page_is_served(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "Scholar Feed" in response.text
    assert "/api/article" in response.text


@pytest.mark.parametrize("body", [{}, {"interests": []}, {"interests": ["  "]}])
def test_queries_require_interests(client: TestClient, body: dict) -> None:
    response = client.post("/api/queries", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Interests must be a non-empty array"}


def test_queries_reject_non_list_interests(client: TestClient) -> None:
    response = client.post("/api/queries", json={"interests": "AI"})

    assert response.status_code == 400
    assert response.json()["error"]


def test_queries_return_generated_queries(client: TestClient) -> None:
    with patch("scholarfeed.api.routes.QueryGenerator") as generator_cls:
        generator_cls.return_value.generate_queries.return_value = QueryGenerationResult(
            queries=["AI climate models"]
        )
        response = client.post("/api/queries", json={"interests": ["AI", " climate "]})

    assert response.status_code == 200
    assert response.json() == {"queries": ["AI climate models"]}
    generator_cls.assert_called_once_with(CONFIGURED)
    generator_cls.return_value.generate_queries.assert_called_once_with(["AI", "climate"])


def test_queries_report_missing_configuration(unconfigured_client: TestClient) -> None:
    response = unconfigured_client.post("/api/queries", json={"interests": ["AI"]})

    assert response.status_code == 500
    assert "COHERE_KEY" in response.json()["error"]


def test_search_requires_query(client: TestClient) -> None:
    response = client.get("/api/search")

    assert response.status_code == 400
    assert response.json() == {"error": "Query parameter is required"}


def test_search_rejects_negative_page(client: TestClient) -> None:
    response = client.get("/api/search", params={"query": "reefs", "page": -1})

    assert response.status_code == 400


def test_search_returns_camel_case_payload(client: TestClient) -> None:
    result = SearchResponse(
        search_details=SearchDetails(query="reefs", number_of_results="About 2 results"),
        results=[SearchResult(title="Reef decline", title_link="https://x.org/1", id="r1")],
    )

    with patch("scholarfeed.api.routes.ScholarSearch") as search_cls:
        search_cls.return_value.search.return_value = result
        response = client.get("/api/search", params={"query": "reefs", "page": 2})

    assert response.status_code == 200
    payload = response.json()
    assert payload["searchDetails"] == {"query": "reefs", "numberOfResults": "About 2 results"}
    assert payload["results"][0]["titleLink"] == "https://x.org/1"
    assert "error" not in payload
    search_cls.return_value.search.assert_called_once_with("reefs", 2)


def test_search_by_interests_selects_advanced_query(client: TestClient) -> None:
    empty = SearchResponse.failed("a AND b", "no key")

    with patch("scholarfeed.api.routes.ScholarSearch") as search_cls:
        search_cls.return_value.search_with_advanced_query.return_value = empty
        response = client.post("/api/search", json={"interests": ["a", "b"], "page": 1, "advanced": True})

    assert response.status_code == 200
    assert response.json()["error"] == "no key"
    search_cls.return_value.search_with_advanced_query.assert_called_once_with(["a", "b"], 1)
    search_cls.return_value.search_by_interests.assert_not_called()


def test_search_by_interests_requires_interests(client: TestClient) -> None:
    response = client.post("/api/search", json={"page": 0})

    assert response.status_code == 400


def test_summarize_requires_text(client: TestClient) -> None:
    response = client.post("/api/summarize", json={"text": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Text must be a non-empty string"}


def test_summarize_returns_summary(client: TestClient) -> None:
    with patch("scholarfeed.api.routes.Summarizer") as summarizer_cls:
        summarizer_cls.return_value.summarize.return_value = SummaryResult(title="Bees", summary="Bees matter.")
        response = client.post("/api/summarize", json={"text": "title: Bees\nPollination"})

    assert response.status_code == 200
    assert response.json() == {"title": "Bees", "summary": "Bees matter."}


def test_summarize_reports_missing_configuration(unconfigured_client: TestClient) -> None:
    response = unconfigured_client.post("/api/summarize", json={"text": "title: Bees"})

    assert response.status_code == 500
    assert "OPENAI_API_KEY" in response.json()["error"]


def test_article_runs_pipeline(client: TestClient) -> None:
    view = ArticleView(
        title="Learning weather",
        summary="Models learn the weather.",
        link="https://papers.example/3",
        original_title="Learning weather",
        query="deep learning weather",
    )

    with patch("scholarfeed.api.routes.ArticlePipeline.from_settings") as from_settings:
        from_settings.return_value.run.return_value = view
        response = client.post("/api/article", json={"interests": ["AI", "climate"]})

    assert response.status_code == 200
    assert response.json() == {
        "title": "Learning weather",
        "summary": "Models learn the weather.",
        "link": "https://papers.example/3",
        "originalTitle": "Learning weather",
        "outcome": PipelineOutcome.SUCCESS.value,
        "query": "deep learning weather",
    }
    from_settings.return_value.run.assert_called_once_with(["AI", "climate"])


def test_search_by_interests_joins_interests_by_default(client: TestClient) -> None:
    result = SearchResponse(
        search_details=SearchDetails(query="biology genetics", number_of_results="About 1 results"),
        results=[SearchResult(title="Gene regulation")],
    )

    with patch("scholarfeed.api.routes.ScholarSearch") as search_cls:
        search_cls.return_value.search_by_interests.return_value = result
        response = client.post("/api/search", json={"interests": ["biology", "genetics"]})

    assert response.status_code == 200
    assert response.json()["results"][0]["title"] == "Gene regulation"
    search_cls.return_value.search_by_interests.assert_called_once_with(["biology", "genetics"], 0)
    search_cls.return_value.search_with_advanced_query.assert_not_called()


@pytest.mark.parametrize("body", [{}, {"interests": []}, {"interests": [" "]}])
def test_article_requires_interests(client: TestClient, body: dict) -> None:
    response = client.post("/api/article", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Interests must be a non-empty array"}


def test_article_reports_missing_configuration_as_article() -> None:
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: AppSettings(
        scrapingdog_api_key="dog", openai_api_key="openai"
    )

    response = TestClient(app).post("/api/article", json={"interests": ["AI"]})

    assert response.status_code == 200
    payload = response.json()
    assert payload["outcome"] == PipelineOutcome.CONFIGURATION_ERROR.value
    assert payload["title"] == "Scholar Feed Is Not Configured"
    assert "COHERE_KEY" in payload["summary"]


def test_index_page_shows_server_error_messages(client: TestClient) -> None:
    response = client.get("/")

    assert "error.message ||" in response.text
