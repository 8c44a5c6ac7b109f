"""
Functional route table for `/functional/news`.

A reduced mirror of `router.py`: same service calls, but wired as explicit
(path, handler, methods) entries instead of decorated path operations.
"""

from __future__ import annotations

from fastapi import APIRouter
from starlette.routing import Route

from . import handlers

PREFIX = "/functional/news"

routes = [
    Route(PREFIX, handlers.list_news, methods=["GET"]),
    Route(PREFIX, handlers.create_news, methods=["POST"]),
    Route(f"{PREFIX}/stream", handlers.news_stream, methods=["GET"]),
    Route(f"{PREFIX}/category/{{category}}", handlers.news_by_category, methods=["GET"]),
    Route(f"{PREFIX}/{{article_id}}", handlers.get_news, methods=["GET"]),
]

router = APIRouter(routes=routes)
