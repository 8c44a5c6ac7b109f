from __future__ import annotations

import asyncio

import pytest

from core.broadcast import Broadcaster, DropOldestQueue


def test_drop_oldest_queue_evicts_head_when_full():
    async def scenario():
        queue = DropOldestQueue(3)
        results = [queue.offer(i) for i in range(5)]
        drained = [queue.get_nowait() for _ in range(queue.qsize())]
        return results, drained, queue.dropped

    results, drained, dropped = asyncio.run(scenario())

    assert results == [True, True, True, False, False]
    assert drained == [2, 3, 4]
    assert dropped == 2


def test_drop_oldest_queue_rejects_non_positive_size():
    with pytest.raises(ValueError):
        DropOldestQueue(0)


def test_broadcaster_fans_out_and_unsubscribes():
    async def scenario():
        broadcaster: Broadcaster[str] = Broadcaster("test")
        first = broadcaster.subscribe(2)
        second = broadcaster.subscribe(2)

        reached = broadcaster.publish("a")
        broadcaster.unsubscribe(second)
        reached_after = broadcaster.publish("b")

        return reached, reached_after, first.qsize(), second.qsize(), broadcaster.subscriber_count

    reached, reached_after, first_size, second_size, count = asyncio.run(scenario())

    assert reached == 2
    assert reached_after == 1
    assert first_size == 2
    assert second_size == 1
    assert count == 1
