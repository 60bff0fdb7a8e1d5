"""Plain-language summaries of scholarly search results."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Optional, Tuple

from openai import OpenAI

from scholarfeed.config import AppSettings
from scholarfeed.errors import UpstreamMalformedError
from scholarfeed.models import SummaryResult

__all__ = [
    "DEFAULT_TITLE",
    "SUMMARY_EXTRACTORS",
    "Summarizer",
    "default_summary",
    "extract_summary_text",
    "split_title",
]

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Scholarly Article"
ERROR_TITLE = "Error Summarizing Article"
ERROR_SUMMARY = "There was an error generating the summary."
MAX_ARTICLE_CHARS = 8000
SUMMARY_TEMPERATURE = 1
SUMMARY_MAX_OUTPUT_TOKENS = 2048

SUMMARY_INSTRUCTIONS = (
    "Summarize a scholarly article based on its snippet or abstract.\n"
    "Make it straightforward and easy to understand, and use information you know too. "
    "Do not start with \"this scholarly article\"; write it like a daily fact or a short "
    "news item. Keep it formal but simple."
)

_TITLE_RE = re.compile(r"title:[ \t]*([^\n]*)", re.IGNORECASE)


def split_title(article_text: str) -> Tuple[str, str]:
    """Separate a ``title:`` line from the rest of ``article_text``.

    Returns ``(title, body)``. Without a usable marker the title is
    :data:`DEFAULT_TITLE` and the body is the stripped input.
    """

    match = _TITLE_RE.search(article_text)
    if match is None or not match.group(1).strip():
        return DEFAULT_TITLE, article_text.strip()

    title = match.group(1).strip()
    body = (article_text[: match.start()] + article_text[match.end() :]).strip()
    return title, body


def default_summary(title: str) -> str:
    return (
        f"The article discusses {title}. Unfortunately, not enough context was available "
        "to generate a detailed summary."
    )


def _field(source: Any, name: str) -> Any:
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def _from_output_text(response: Any) -> Optional[str]:
    value = _field(response, "output_text")
    return value if isinstance(value, str) else None


def _from_output_items(response: Any) -> Optional[str]:
    output = _field(response, "output")
    if not isinstance(output, list):
        return None

    for item in output:
        content = _field(item, "content")
        if not isinstance(content, list):
            continue
        for part in content:
            text = _field(part, "text")
            if _field(part, "type") == "output_text" and isinstance(text, str) and text.strip():
                return text
    return None


def _from_text_field(response: Any) -> Optional[str]:
    # The Responses API also has a ``text`` config object; only a plain string counts.
    value = _field(response, "text")
    return value if isinstance(value, str) else None


def _from_choices(response: Any) -> Optional[str]:
    choices = _field(response, "choices")
    if not isinstance(choices, list) or not choices:
        return None
    content = _field(_field(choices[0], "message"), "content")
    return content if isinstance(content, str) else None


#: Tried in order; the first one yielding non-blank text wins.
SUMMARY_EXTRACTORS: Tuple[Callable[[Any], Optional[str]], ...] = (
    _from_output_text,
    _from_output_items,
    _from_text_field,
    _from_choices,
)


def extract_summary_text(
    response: Any,
    extractors: Iterable[Callable[[Any], Optional[str]]] = SUMMARY_EXTRACTORS,
) -> str:
    """Return the first non-blank text found by ``extractors`` in ``response``."""

    for extractor in extractors:
        text = extractor(response)
        if text and text.strip():
            return text.strip()
    raise UpstreamMalformedError("No summary text found in the model response.")


def _looks_like_object(text: str) -> bool:
    return text.startswith("{") and text.endswith("}")


class Summarizer:
    """Summarise a title and snippet with the OpenAI Responses API."""

    def __init__(self, settings: AppSettings, client: OpenAI | None = None) -> None:
        api_key = settings.require("openai_api_key")
        self._model = settings.openai_model
        self._client = client or OpenAI(api_key=api_key, base_url=settings.openai_base_url)

    def summarize(self, article_text: str) -> SummaryResult:
        """Summarise ``article_text``; the result always carries a title and a summary."""

        title, content = split_title(article_text)
        if len(content) > MAX_ARTICLE_CHARS:
            content = content[:MAX_ARTICLE_CHARS] + "..."

        logger.info("Summarizing article: %s", title)
        try:
            response = self._client.responses.create(
                model=self._model,
                input=[
                    {
                        "role": "system",
                        "content": [{"type": "input_text", "text": SUMMARY_INSTRUCTIONS}],
                    },
                    {
                        "role": "user",
                        "content": [{"type": "input_text", "text": f"title: {title}\n{content}"}],
                    },
                ],
                text={"format": {"type": "text"}},
                temperature=SUMMARY_TEMPERATURE,
                max_output_tokens=SUMMARY_MAX_OUTPUT_TOKENS,
                top_p=1,
            )
        except Exception as exc:  # noqa: BLE001 - network and auth failures become an error payload
            logger.exception("Error summarizing article %s", title)
            return SummaryResult(
                title=ERROR_TITLE,
                summary=ERROR_SUMMARY,
                error=str(exc) or exc.__class__.__name__,
            )

        try:
            summary = extract_summary_text(response)
        except UpstreamMalformedError as exc:
            logger.warning("Unrecognised summary response for %s: %s", title, exc)
            summary = ""

        if not summary or _looks_like_object(summary):
            summary = default_summary(title)

        return SummaryResult(title=title, summary=summary)
