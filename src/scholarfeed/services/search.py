"""Google Scholar search through the ScrapingDog API."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Sequence

import requests
from pydantic import ValidationError

from scholarfeed.config import AppSettings
from scholarfeed.errors import (
    ConfigurationError,
    ScholarFeedError,
    TransportError,
    UpstreamMalformedError,
)
from scholarfeed.models import SearchDetails, SearchResponse, SearchResult

__all__ = ["ScholarSearch", "broaden_query", "build_advanced_query"]

logger = logging.getLogger(__name__)

SCRAPINGDOG_SCHOLAR_URL = "https://api.scrapingdog.com/google_scholar/"
SEARCH_REQUEST_TIMEOUT = (10, 60)
MAX_BROADENED_KEYWORDS = 3
MIN_KEYWORD_LENGTH = 4

_QUOTES_RE = re.compile(r"['\"]")


def broaden_query(query: str) -> str:
    """Return a looser version of ``query`` built from its first few long words.

    Quotes are removed and only words longer than three characters are kept.
    An empty string means no word qualified.
    """

    words = _QUOTES_RE.sub("", query).split()
    keywords = [word for word in words if len(word) >= MIN_KEYWORD_LENGTH]
    return " ".join(keywords[:MAX_BROADENED_KEYWORDS])


def build_advanced_query(interests: Sequence[str]) -> str:
    """Combine interests with boolean operators.

    The first two interests are required (``AND``); any further interests are
    alternatives (``OR``) joined onto them.
    """

    if not interests:
        raise ValueError("At least one interest is required to build a query")
    if len(interests) == 1:
        return interests[0]
    if len(interests) == 2:
        return f"{interests[0]} AND {interests[1]}"

    primary = " AND ".join(interests[:2])
    secondary = " OR ".join(interests[2:])
    return f"({primary}) AND ({secondary})"


class ScholarSearch:
    """Search scholarly articles and broaden the query once when nothing is found."""

    def __init__(self, settings: AppSettings, session: requests.Session | None = None) -> None:
        self._api_key = settings.scrapingdog_api_key
        self._results_per_page = settings.results_per_page
        self._language = settings.language
        self._session = session or requests.Session()

    def search(self, query: str, page: int = 0) -> SearchResponse:
        """Return results for ``query``; never raises, failures are reported in ``error``."""

        return self._search(query, page, allow_broadening=True)

    def search_by_interests(self, interests: Sequence[str], page: int = 0) -> SearchResponse:
        return self.search(" ".join(interests), page)

    def search_with_advanced_query(self, interests: Sequence[str], page: int = 0) -> SearchResponse:
        return self.search(build_advanced_query(interests), page)

    def _search(self, query: str, page: int, *, allow_broadening: bool) -> SearchResponse:
        try:
            payload = self._fetch(query, page)
            raw_results = payload.get("scholar_results")
            results = self._parse_results(raw_results)
        except ScholarFeedError as exc:
            logger.warning("Scholar search for %r failed: %s", query, exc)
            return SearchResponse.failed(query, str(exc))

        if allow_broadening and raw_results is not None and not raw_results:
            broadened = broaden_query(query)
            if broadened and broadened != query:
                logger.info("No results for %r, retrying with broader query %r", query, broadened)
                return self._search(broadened, page, allow_broadening=False)

        return SearchResponse(
            search_details=self._parse_details(payload.get("search_details"), query, len(results)),
            results=results,
        )

    def _fetch(self, query: str, page: int) -> dict[str, Any]:
        if not self._api_key:
            raise ConfigurationError(
                "SCRAPINGDOG_KEY is not configured. Set it in the environment or in a .env file."
            )

        params = {
            "api_key": self._api_key,
            "query": query,
            "language": self._language,
            "page": page,
            "results": self._results_per_page,
        }

        logger.info("Searching Google Scholar for %r (page %d)", query, page)
        try:
            response = self._session.get(
                SCRAPINGDOG_SCHOLAR_URL, params=params, timeout=SEARCH_REQUEST_TIMEOUT
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise TransportError(f"Scholar search request failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"Scholar search returned an invalid body: {exc}") from exc

        if not isinstance(payload, dict):
            raise UpstreamMalformedError("Scholar search returned an unexpected payload.")
        return payload

    @staticmethod
    def _parse_results(raw_results: Any) -> List[SearchResult]:
        if raw_results is None:
            return []
        if not isinstance(raw_results, list):
            raise UpstreamMalformedError("Scholar search results were not a list.")

        results: List[SearchResult] = []
        for entry in raw_results:
            if not isinstance(entry, dict) or not str(entry.get("title") or "").strip():
                logger.warning("Skipping scholar result without a title: %r", entry)
                continue
            try:
                results.append(SearchResult.model_validate(entry))
            except ValidationError as exc:
                logger.warning("Skipping malformed scholar result: %s", exc)
        return results

    @staticmethod
    def _parse_details(raw_details: Any, query: str, result_count: int) -> SearchDetails:
        details = raw_details if isinstance(raw_details, dict) else {}
        return SearchDetails(
            query=str(details.get("query") or query),
            number_of_results=str(details.get("number_of_results") or f"{result_count} results"),
        )
