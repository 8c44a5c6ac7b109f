"""
Streaming response bodies for the news endpoints.

Each function here is a per-connection async generator. Cleanup (unsubscribe,
producer cancellation) lives in `finally` so it also runs when the client
disconnects and the server cancels the generator.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Protocol

from sse_starlette import ServerSentEvent

from core import settings
from core.broadcast import DropOldestQueue

from . import generator, service
from .schemas import Article

logger = logging.getLogger(__name__)

POLL_TIMEOUT_S = 1.0


class Disconnectable(Protocol):
    async def is_disconnected(self) -> bool: ...


def to_event(article: Article) -> ServerSentEvent:
    return ServerSentEvent(data=article.model_dump_json(), id=str(article.id))


async def _drain(request: Disconnectable, queue: DropOldestQueue) -> AsyncIterator[ServerSentEvent]:
    while True:
        if await request.is_disconnected():
            break
        try:
            article = await asyncio.wait_for(queue.get(), timeout=POLL_TIMEOUT_S)
        except asyncio.TimeoutError:
            continue
        yield to_event(article)


async def article_events(request: Disconnectable) -> AsyncIterator[ServerSentEvent]:
    """
    Live feed of generated articles for one client.
    """
    queue = generator.subscribe(settings.stream_buffer_size())
    logger.info("news_stream_opened")
    try:
        async for event in _drain(request, queue):
            yield event
    finally:
        generator.unsubscribe(queue)
        logger.info("news_stream_closed dropped=%s", queue.dropped)


async def _produce_test_articles(queue: DropOldestQueue, interval_s: float) -> None:
    sequence = 0
    while True:
        await asyncio.sleep(interval_s)
        sequence += 1
        if not queue.offer(service.backpressure_article(sequence)):
            logger.debug("backpressure_dropped sequence=%s dropped_total=%s", sequence, queue.dropped)


async def backpressure_events(request: Disconnectable) -> AsyncIterator[ServerSentEvent]:
    """
    High-frequency synthetic feed behind a small drop-oldest buffer.
    """
    queue = DropOldestQueue(settings.backpressure_buffer_size())
    producer = asyncio.create_task(
        _produce_test_articles(queue, settings.backpressure_interval_s()),
        name="backpressure-producer",
    )
    logger.info("backpressure_stream_opened buffer=%s", queue.maxsize)
    try:
        async for event in _drain(request, queue):
            logger.debug("backpressure_event id=%s", event.id)
            yield event
    finally:
        producer.cancel()
        try:
            await producer
        except asyncio.CancelledError:
            pass
        logger.info("backpressure_stream_closed dropped=%s", queue.dropped)


async def slow_json_array(delay_s: float | None = None) -> AsyncIterator[str]:
    """
    All articles as a JSON array, one element per `delay_s`.
    """
    delay = delay_s if delay_s is not None else settings.slow_delay_s()
    yield "["
    for index, article in enumerate(service.list_news()):
        await asyncio.sleep(delay)
        logger.debug("news_slow_item id=%s", article.id)
        yield ("," if index else "") + article.model_dump_json()
    yield "]"
