"""Turn a set of interests into one summarised scholarly article."""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional, Sequence, TypeVar

from scholarfeed.config import AppSettings
from scholarfeed.models import ArticleView, PipelineOutcome, SearchResult
from scholarfeed.services.query_generator import QueryGenerator
from scholarfeed.services.search import ScholarSearch
from scholarfeed.services.summarizer import Summarizer

__all__ = ["ArticlePipeline", "clean_query"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_SUMMARY = "No summary available."


def clean_query(query: str) -> str:
    """Remove markdown emphasis the query model sometimes wraps around queries."""

    return query.replace("**", "").strip()


class ArticlePipeline:
    """Run query generation, search and summarisation in sequence.

    ``choice`` picks one element from a non-empty sequence; it defaults to
    :func:`random.choice` and is replaced by a deterministic function in tests.
    """

    def __init__(
        self,
        query_generator: QueryGenerator,
        search: ScholarSearch,
        summarizer: Summarizer,
        *,
        choice: Callable[[Sequence[T]], T] = random.choice,
    ) -> None:
        self._query_generator = query_generator
        self._search = search
        self._summarizer = summarizer
        self._choice = choice

    @classmethod
    def from_settings(cls, settings: AppSettings, **kwargs) -> "ArticlePipeline":
        return cls(QueryGenerator(settings), ScholarSearch(settings), Summarizer(settings), **kwargs)

    def run(self, interests: Sequence[str]) -> ArticleView:
        """Produce the article to show for ``interests``.

        Every stage failure ends the run with an explanatory :class:`ArticleView`;
        only an empty ``interests`` sequence raises.
        """

        if not interests:
            raise ValueError("At least one interest is required")

        try:
            return self._run(interests)
        except Exception:  # noqa: BLE001 - any failure is shown as a generic message
            logger.exception("Error in article generation for %s", ", ".join(interests))
            return ArticleView(
                title="Error Generating Article",
                summary="An error occurred while generating the article. Please try again later.",
                outcome=PipelineOutcome.GENERIC_ERROR,
            )

    def _run(self, interests: Sequence[str]) -> ArticleView:
        generated = self._query_generator.generate_queries(interests)
        if not generated.queries:
            logger.info("No queries generated for %s: %s", ", ".join(interests), generated.error)
            return ArticleView(
                title="No Queries Generated",
                summary=(
                    "We couldn't generate any queries based on your interests. "
                    "Please try with different interests."
                ),
                outcome=PipelineOutcome.NO_QUERIES,
            )

        query = clean_query(self._choice(generated.queries))

        response = self._search.search(query)
        searched_query = response.search_details.query or query
        results = response.results
        if not results:
            return ArticleView(
                title=f"No Results Found for: {searched_query}",
                summary=(
                    f'We couldn\'t find any scholarly articles for the query: "{searched_query}". '
                    "Please try with different interests."
                ),
                outcome=PipelineOutcome.NO_RESULTS,
                query=searched_query,
            )

        if not isinstance(results, (list, tuple)):
            logger.warning("Search results for %r are not a list: %r", searched_query, results)
            return ArticleView(
                title=f"Invalid Results Format for: {searched_query}",
                summary="The search results were not in the expected format. Please try again.",
                outcome=PipelineOutcome.MALFORMED_RESULTS,
                query=searched_query,
            )

        selected: Optional[SearchResult] = self._choice(results)
        original_title = (getattr(selected, "title", None) or "").strip()
        if not original_title:
            logger.warning("Selected search result has no title: %r", selected)
            return ArticleView(
                title="Error Processing Results",
                summary=(
                    "We encountered an error while processing the search results. "
                    "Please try again."
                ),
                outcome=PipelineOutcome.SELECTION_ERROR,
                query=searched_query,
            )

        article_text = f"title: {original_title}\n{selected.snippet or ''}"
        try:
            summary = self._summarizer.summarize(article_text)
        except Exception:  # noqa: BLE001 - the summary stage has its own terminal message
            logger.exception("Summarization failed for %r", original_title)
            return ArticleView(
                title="Error Summarizing Article",
                summary="The article could not be summarized. Please try again later.",
                link=selected.title_link,
                original_title=original_title,
                outcome=PipelineOutcome.SUMMARIZE_FAILED,
                query=searched_query,
            )

        return ArticleView(
            title=summary.title or original_title,
            summary=summary.summary or NO_SUMMARY,
            link=selected.title_link,
            original_title=original_title,
            outcome=PipelineOutcome.SUMMARIZE_FAILED if summary.error else PipelineOutcome.SUCCESS,
            query=searched_query,
        )
