"""
Periodic article generator.

At most one background task per process: every `NEWS_STREAM_INTERVAL_S`
seconds it synthesizes an article, stores it, and publishes it to every
stream subscriber. The task runs only while at least one subscriber is
registered through `subscribe()`; the last `unsubscribe()` cancels it.
"""

from __future__ import annotations

import asyncio
import logging
import random

from core import settings
from core.broadcast import Broadcaster, DropOldestQueue

from . import service
from .schemas import Article

logger = logging.getLogger(__name__)

article_broadcaster: Broadcaster[Article] = Broadcaster("news")

_task: asyncio.Task | None = None


def tick(rng: random.Random | None = None) -> Article:
    """
    One generator step: create, store, publish.
    """
    article = service.publish_random_article(rng)
    reached = article_broadcaster.publish(article)
    logger.debug("news_published id=%s subscribers=%s", article.id, reached)
    return article


async def run(interval_s: float | None = None) -> None:
    interval = interval_s if interval_s is not None else settings.stream_interval_s()
    logger.info("news_generator_started interval_s=%s", interval)
    try:
        while True:
            await asyncio.sleep(interval)
            try:
                tick()
            except Exception:
                # Keep producing after a failed tick.
                logger.exception("news_generator_tick_failed")
    finally:
        logger.info("news_generator_stopped")


def start(interval_s: float | None = None) -> asyncio.Task:
    return asyncio.create_task(run(interval_s), name="news-generator")


async def stop(task: asyncio.Task | None) -> None:
    if task is None:
        return None
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


def is_running() -> bool:
    return _task is not None and not _task.done()


def subscribe(maxsize: int) -> DropOldestQueue:
    """
    Register a stream subscriber, starting the generator for the first one.
    """
    global _task
    queue = article_broadcaster.subscribe(maxsize)
    if is_running():
        return queue
    if not settings.generator_enabled():
        logger.info("news_generator_disabled")
        return queue
    _task = start()
    return queue


def unsubscribe(queue: DropOldestQueue) -> None:
    """
    Drop a stream subscriber, cancelling the generator after the last one.
    """
    global _task
    article_broadcaster.unsubscribe(queue)
    if article_broadcaster.subscriber_count > 0 or _task is None:
        return None
    _task.cancel()
    _task = None


async def shutdown() -> None:
    global _task
    task, _task = _task, None
    await stop(task)
