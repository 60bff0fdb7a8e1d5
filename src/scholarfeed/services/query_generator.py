"""Generate Google Scholar search queries from reader interests."""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from openai import OpenAI

from scholarfeed.config import AppSettings
from scholarfeed.errors import UpstreamEmptyError
from scholarfeed.models import QueryGenerationResult

__all__ = ["QueryGenerator", "parse_queries"]

logger = logging.getLogger(__name__)

QUERY_TEMPERATURE = 0.3

QUERY_PREAMBLE = (
    "You are a helpful assistant that takes in user interests and returns 5 google scholar "
    "search queries based on the interests. You do not need to use all of the interests the "
    "user provides."
)

_NUMBERED_ITEM_RE = re.compile(r"^\s*\d+\.[ \t]+(\S[^\n]*)", re.MULTILINE)
_FILLER_PREFIXES = ("Here", "Based")


def parse_queries(raw_text: str) -> List[str]:
    """Split the model's reply into individual queries.

    A numbered list wins when present. Otherwise every non-empty line is a
    query, except conversational lead-ins ("Here are...", "Based on...").
    As a last resort the whole reply is a single query.
    """

    text = (raw_text or "").strip()
    if not text:
        raise UpstreamEmptyError("The query generation model returned an empty response.")

    numbered = [item.strip() for item in _NUMBERED_ITEM_RE.findall(text)]
    numbered = [item for item in numbered if item]
    if numbered:
        return numbered

    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line and not line.startswith(_FILLER_PREFIXES)]
    if lines:
        return lines

    return [text]


class QueryGenerator:
    """Ask a text generation model for scholarly search queries."""

    def __init__(self, settings: AppSettings, client: OpenAI | None = None) -> None:
        api_key = settings.require("cohere_api_key")
        self._model = settings.cohere_model
        self._client = client or OpenAI(api_key=api_key, base_url=settings.cohere_base_url)

    def generate_queries(self, interests: Sequence[str]) -> QueryGenerationResult:
        """Return up to five queries for ``interests``; failures are reported in ``error``."""

        interests_text = ", ".join(interests)
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": QUERY_PREAMBLE},
                    {
                        "role": "user",
                        "content": (
                            "Generate 5 Google Scholar search queries based on these interests: "
                            + interests_text
                        ),
                    },
                ],
                temperature=QUERY_TEMPERATURE,
            )
            raw_text = response.choices[0].message.content or ""
            queries = parse_queries(raw_text)
        except Exception as exc:  # noqa: BLE001 - any upstream failure becomes an error payload
            logger.exception("Error generating search queries for %s", interests_text)
            return QueryGenerationResult(queries=[], error=str(exc) or exc.__class__.__name__)

        logger.info("Generated %d search queries for %s", len(queries), interests_text)
        return QueryGenerationResult(queries=queries)

    def generate_optimized_query(self, interests: Sequence[str]) -> str:
        """Return the first generated query, or the interests joined by spaces."""

        result = self.generate_queries(interests)
        if result.queries:
            return result.queries[0]
        return " ".join(interests)
