"""
Bounded buffers and fan-out for server-sent-event streams.

Overflow policy: drop-oldest. A slow consumer always sees the most recent
events; the evicted ones are counted and logged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DropOldestQueue(asyncio.Queue):
    def __init__(self, maxsize: int) -> None:
        if maxsize <= 0:
            raise ValueError("DropOldestQueue needs a positive maxsize.")
        super().__init__(maxsize=maxsize)
        self.dropped = 0

    def offer(self, item: object) -> bool:
        """
        Enqueue without waiting. Returns False when an older item had to be
        evicted to make room.
        """
        evicted = False
        if self.full():
            self.get_nowait()
            self.dropped += 1
            evicted = True
        self.put_nowait(item)
        return not evicted


class Broadcaster(Generic[T]):
    """Publishes every item to all subscriber queues."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._queues: set[DropOldestQueue] = set()

    def subscribe(self, maxsize: int) -> DropOldestQueue:
        queue: DropOldestQueue = DropOldestQueue(maxsize)
        self._queues.add(queue)
        logger.info("stream_subscribed broadcaster=%s subscribers=%s", self.name, len(self._queues))
        return queue

    def unsubscribe(self, queue: DropOldestQueue) -> None:
        self._queues.discard(queue)
        logger.info(
            "stream_unsubscribed broadcaster=%s subscribers=%s dropped=%s",
            self.name,
            len(self._queues),
            queue.dropped,
        )

    def publish(self, item: T) -> int:
        """
        Offer `item` to every subscriber. Returns the number of subscribers
        reached.
        """
        queues = list(self._queues)
        for queue in queues:
            if not queue.offer(item):
                logger.warning(
                    "stream_buffer_full broadcaster=%s dropped_total=%s",
                    self.name,
                    queue.dropped,
                )
        return len(queues)

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)
