from __future__ import annotations

import asyncio
import json
import random

import pytest

from news import generator, repository, service, streams


pytestmark = pytest.mark.usefixtures("seeded_stores")


class FakeRequest:
    """Reports a disconnect after `polls` checks."""

    def __init__(self, polls: int) -> None:
        self._polls = polls

    async def is_disconnected(self) -> bool:
        self._polls -= 1
        return self._polls < 0


def test_tick_stores_and_publishes():
    async def scenario():
        queue = generator.article_broadcaster.subscribe(5)
        try:
            article = generator.tick(random.Random(1))
            return article, queue.get_nowait()
        finally:
            generator.article_broadcaster.unsubscribe(queue)

    article, published = asyncio.run(scenario())

    assert published == article
    assert repository.get_article(article.id) == article


def test_article_events_yield_published_articles_then_unsubscribe(monkeypatch):
    monkeypatch.setenv("NEWS_GENERATOR_ENABLED", "false")

    async def scenario():
        events = []
        request = FakeRequest(polls=3)
        stream = streams.article_events(request)

        async def publish_soon():
            # Wait until the stream has registered its buffer.
            while generator.article_broadcaster.subscriber_count == 0:
                await asyncio.sleep(0)
            generator.tick()
            generator.tick()

        publisher = asyncio.create_task(publish_soon())
        async for event in stream:
            events.append(event)
        await publisher
        return events

    events = asyncio.run(scenario())

    assert len(events) == 2
    payload = json.loads(events[0].data)
    assert str(payload["id"]) == events[0].id
    assert repository.get_article(payload["id"]) is not None
    assert generator.article_broadcaster.subscriber_count == 0


def test_backpressure_events_are_sequential_test_articles(monkeypatch):
    monkeypatch.setenv("NEWS_BACKPRESSURE_INTERVAL_S", "0.001")
    monkeypatch.setenv("NEWS_BACKPRESSURE_BUFFER_SIZE", "4")

    async def scenario():
        events = []
        async for event in streams.backpressure_events(FakeRequest(polls=5)):
            events.append(event)
        return events

    events = asyncio.run(scenario())

    ids = [int(e.id) for e in events]
    assert len(ids) == 5
    assert ids == sorted(ids)
    # Test articles never reach the store.
    assert sorted(a.id for a in repository.list_articles()) == [1, 2, 3, 4, 5]


def test_slow_json_array_emits_every_article():
    async def scenario():
        return "".join([chunk async for chunk in streams.slow_json_array(delay_s=0)])

    body = asyncio.run(scenario())

    assert [a["id"] for a in json.loads(body)] == [a.id for a in service.list_news()]


def test_generator_task_inserts_until_stopped():
    async def scenario():
        task = generator.start(interval_s=0.01)
        await asyncio.sleep(0.1)
        await generator.stop(task)
        return task

    task = asyncio.run(scenario())

    assert task.cancelled()
    assert len(repository.list_articles()) > 5


def test_generator_runs_only_while_subscribed(monkeypatch):
    monkeypatch.setenv("NEWS_GENERATOR_ENABLED", "true")
    monkeypatch.setenv("NEWS_STREAM_INTERVAL_S", "0.01")

    async def scenario():
        await asyncio.sleep(0.05)
        idle_count = len(repository.list_articles())

        first = generator.subscribe(50)
        second = generator.subscribe(50)
        running_with_two = generator.is_running()
        await asyncio.sleep(0.1)

        generator.unsubscribe(first)
        running_with_one = generator.is_running()
        generator.unsubscribe(second)
        running_with_none = generator.is_running()

        stopped_count = len(repository.list_articles())
        await asyncio.sleep(0.05)
        return idle_count, running_with_two, running_with_one, running_with_none, stopped_count, second.qsize()

    idle_count, with_two, with_one, with_none, stopped_count, delivered = asyncio.run(scenario())

    assert idle_count == 5
    assert with_two and with_one
    assert not with_none
    assert stopped_count > 5
    assert delivered > 0
    assert len(repository.list_articles()) == stopped_count


def test_generator_disabled_does_not_start_on_subscribe(monkeypatch):
    monkeypatch.setenv("NEWS_GENERATOR_ENABLED", "false")

    async def scenario():
        queue = generator.subscribe(5)
        running = generator.is_running()
        generator.unsubscribe(queue)
        return running

    assert asyncio.run(scenario()) is False
