"""Service layer entry points for Scholar Feed."""

from __future__ import annotations

from .pipeline import ArticlePipeline  # noqa: F401
from .query_generator import QueryGenerator  # noqa: F401
from .search import ScholarSearch  # noqa: F401
from .summarizer import Summarizer  # noqa: F401

__all__ = ["ArticlePipeline", "QueryGenerator", "ScholarSearch", "Summarizer"]
