"""API routes exposing query generation, scholar search and summarisation."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from scholarfeed.config import AppSettings, get_settings
from scholarfeed.errors import ConfigurationError
from scholarfeed.models import (
    ArticleView,
    PipelineOutcome,
    QueryGenerationResult,
    SearchResponse,
    SummaryResult,
)
from scholarfeed.services.pipeline import ArticlePipeline
from scholarfeed.services.query_generator import QueryGenerator
from scholarfeed.services.search import ScholarSearch
from scholarfeed.services.summarizer import Summarizer

logger = logging.getLogger(__name__)

router = APIRouter()

INTERESTS_ERROR = "Interests must be a non-empty array"


class InterestsRequest(BaseModel):
    interests: List[str] | None = None


class SearchRequest(InterestsRequest):
    page: int = Field(default=0, ge=0)
    advanced: bool = False


class SummarizeRequest(BaseModel):
    text: str | None = None


def _require_interests(interests: List[str] | None) -> List[str]:
    """Return the non-blank interests, or reject the request with a 400."""

    cleaned = [interest.strip() for interest in interests or [] if interest and interest.strip()]
    if not cleaned:
        raise HTTPException(status_code=400, detail=INTERESTS_ERROR)
    return cleaned


def _configuration_failure(exc: ConfigurationError) -> HTTPException:
    logger.error("Service is not configured: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))


@router.post(
    "/queries",
    response_model=QueryGenerationResult,
    response_model_exclude_none=True,
)
async def generate_queries(
    payload: InterestsRequest,
    settings: AppSettings = Depends(get_settings),
) -> QueryGenerationResult:
    """Generate scholar search queries for the supplied interests."""

    interests = _require_interests(payload.interests)

    try:
        generator = QueryGenerator(settings)
    except ConfigurationError as exc:
        raise _configuration_failure(exc) from exc

    try:
        return await run_in_threadpool(generator.generate_queries, interests)
    except Exception as exc:  # pragma: no cover - the generator reports its own failures
        logger.exception("Query generation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search_query(
    query: str | None = Query(default=None),
    page: int = Query(default=0, ge=0),
    settings: AppSettings = Depends(get_settings),
) -> SearchResponse:
    """Search Google Scholar for a single query string."""

    if not query or not query.strip():
        raise HTTPException(status_code=400, detail="Query parameter is required")

    search = ScholarSearch(settings)
    try:
        return await run_in_threadpool(search.search, query.strip(), page)
    except Exception as exc:  # pragma: no cover - the search client reports its own failures
        logger.exception("Scholar search failed for %r", query)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search_interests(
    payload: SearchRequest,
    settings: AppSettings = Depends(get_settings),
) -> SearchResponse:
    """Search Google Scholar using the interests directly as the query."""

    interests = _require_interests(payload.interests)

    search = ScholarSearch(settings)
    method = search.search_with_advanced_query if payload.advanced else search.search_by_interests
    try:
        return await run_in_threadpool(method, interests, payload.page)
    except Exception as exc:  # pragma: no cover - the search client reports its own failures
        logger.exception("Scholar search failed for %s", interests)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/summarize", response_model=SummaryResult, response_model_exclude_none=True)
async def summarize_article(
    payload: SummarizeRequest,
    settings: AppSettings = Depends(get_settings),
) -> SummaryResult:
    """Summarise a ``title: ...`` prefixed article snippet."""

    if not payload.text or not payload.text.strip():
        raise HTTPException(status_code=400, detail="Text must be a non-empty string")

    try:
        summarizer = Summarizer(settings)
    except ConfigurationError as exc:
        raise _configuration_failure(exc) from exc

    try:
        return await run_in_threadpool(summarizer.summarize, payload.text)
    except Exception as exc:  # pragma: no cover - the summarizer reports its own failures
        logger.exception("Summarisation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/article", response_model=ArticleView, response_model_exclude_none=True)
async def generate_article(
    payload: InterestsRequest,
    settings: AppSettings = Depends(get_settings),
) -> ArticleView:
    """Run the whole pipeline and return one summarised article."""

    interests = _require_interests(payload.interests)

    try:
        pipeline = ArticlePipeline.from_settings(settings)
    except ConfigurationError as exc:
        logger.error("Service is not configured: %s", exc)
        return ArticleView(
            title="Scholar Feed Is Not Configured",
            summary=str(exc),
            outcome=PipelineOutcome.CONFIGURATION_ERROR,
        )

    return await run_in_threadpool(pipeline.run, interests)
