"""
News API endpoints (declarative style).

Fixed paths (`/stream`, `/search`, ...) are registered before `/{article_id}`
so they are never captured by the id route.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse
from sse_starlette import EventSourceResponse

from core import settings
from users import service as user_service

from . import service, streams
from .schemas import Article, CreateArticleRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/news")


@router.get("")
async def get_all_news() -> list[Article]:
    logger.info("GET /api/news")
    return service.list_news()


@router.get("/category/{category}")
async def get_news_by_category(category: str) -> list[Article]:
    logger.info("GET /api/news/category/%s", category)
    return service.news_by_category(category)


@router.get("/stream")
async def get_news_stream(request: Request) -> EventSourceResponse:
    """
    Server-sent events, one per generated article.

    Connect with EventSource API:
      const es = new EventSource('/api/news/stream')
      es.onmessage = (e) => { const article = JSON.parse(e.data) }
    """
    logger.info("GET /api/news/stream")
    return EventSourceResponse(streams.article_events(request), ping=settings.sse_ping_s())


@router.get("/stream-backpressure")
async def get_news_stream_backpressure(request: Request) -> EventSourceResponse:
    logger.info("GET /api/news/stream-backpressure")
    return EventSourceResponse(streams.backpressure_events(request), ping=settings.sse_ping_s())


@router.get("/personalized/{user_id}")
async def get_personalized_news(user_id: int) -> list[Article]:
    logger.info("GET /api/news/personalized/%s", user_id)
    preferences = user_service.get_preferences(user_id)
    return service.personalized_news(preferences)


@router.get("/search")
async def search_news(keyword: str = Query(...)) -> list[Article]:
    logger.info("GET /api/news/search keyword=%s", keyword)
    return service.search_news(keyword)


@router.get("/popular")
async def get_popular_news(limit: int = Query(default=service.DEFAULT_POPULAR_LIMIT)) -> list[Article]:
    logger.info("GET /api/news/popular limit=%s", limit)
    return service.popular_news(limit)


@router.get("/slow")
async def get_slow_news() -> StreamingResponse:
    """
    All articles, each released after a fixed delay. Demo only.
    """
    logger.info("GET /api/news/slow")
    return StreamingResponse(streams.slow_json_array(), media_type="application/json")


@router.post("")
async def create_news(request: CreateArticleRequest) -> Article:
    logger.info("POST /api/news title=%s", request.title)
    return service.create_news(request)


@router.get("/{article_id}")
async def get_news_by_id(article_id: int) -> Article:
    logger.info("GET /api/news/%s", article_id)
    return service.get_news(article_id)
