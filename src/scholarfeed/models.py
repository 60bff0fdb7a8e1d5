"""Domain models used across the application."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "ArticleView",
    "PipelineOutcome",
    "QueryGenerationResult",
    "SearchDetails",
    "SearchResponse",
    "SearchResult",
    "SummaryResult",
]


class WireModel(BaseModel):
    """Base for payloads exchanged with the browser, serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class QueryGenerationResult(WireModel):
    """Search queries produced for a set of interests."""

    queries: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class SearchResult(WireModel):
    """A single scholar search hit.

    Provider metadata such as citation counts or related-page links is kept as
    opaque passthrough data; fields the model does not know are preserved too.
    """

    model_config = ConfigDict(extra="allow")

    title: str
    title_link: Optional[str] = None
    displayed_link: Optional[str] = None
    snippet: Optional[str] = None
    id: Optional[str] = None
    inline_links: Optional[Dict[str, Any]] = None
    resources: Optional[List[Dict[str, Any]]] = None


class SearchDetails(WireModel):
    query: str
    number_of_results: str = "0 results"


class SearchResponse(WireModel):
    """Ranked results for one query, in provider order."""

    search_details: SearchDetails
    results: List[SearchResult] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, query: str, error: str) -> "SearchResponse":
        """Return the empty response reported when a search could not be performed."""

        return cls(
            search_details=SearchDetails(query=query, number_of_results="0 results"),
            results=[],
            error=error,
        )


class SummaryResult(WireModel):
    title: str
    summary: str
    error: Optional[str] = None


class PipelineOutcome(str, Enum):
    """Terminal state reached by a pipeline run."""

    SUCCESS = "success"
    NO_QUERIES = "no-queries"
    NO_RESULTS = "no-results"
    MALFORMED_RESULTS = "malformed-results"
    SELECTION_ERROR = "selection-error"
    SUMMARIZE_FAILED = "summarize-failed"
    GENERIC_ERROR = "generic-error"
    CONFIGURATION_ERROR = "configuration-error"


class ArticleView(WireModel):
    """Article shown to the reader at the end of a pipeline run."""

    title: str
    summary: str
    link: Optional[str] = None
    original_title: Optional[str] = None
    outcome: PipelineOutcome = PipelineOutcome.SUCCESS
    query: Optional[str] = None
