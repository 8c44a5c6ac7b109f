"""
Request handlers for the functional news routes.

Each handler is a plain `Request -> Response` coroutine; the route table that
binds them to paths lives in `routes.py`. Path and body parsing is done here
rather than by FastAPI's parameter injection.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from sse_starlette import EventSourceResponse
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from core import settings

from . import service, streams
from .schemas import CreateArticleRequest

logger = logging.getLogger(__name__)


def _json(payload: object, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(jsonable_encoder(payload), status_code=status_code)


def _article_id(request: Request) -> int:
    raw = request.path_params["article_id"]
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Article id must be an integer: {raw}",
        ) from None


async def list_news(request: Request) -> Response:
    logger.info("handler_list_news")
    return _json(service.list_news())


async def get_news(request: Request) -> Response:
    article_id = _article_id(request)
    logger.info("handler_get_news id=%s", article_id)
    return _json(service.get_news(article_id))


async def create_news(request: Request) -> Response:
    logger.info("handler_create_news")
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Body must be JSON.") from None
    try:
        payload = CreateArticleRequest.model_validate(body)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.errors(include_url=False, include_context=False),
        ) from None
    return _json(service.create_news(payload))


async def news_stream(request: Request) -> Response:
    logger.info("handler_news_stream")
    return EventSourceResponse(streams.article_events(request), ping=settings.sse_ping_s())


async def news_by_category(request: Request) -> Response:
    category = request.path_params["category"]
    logger.info("handler_news_by_category category=%s", category)
    return _json(service.news_by_category(category))
