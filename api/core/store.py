"""
In-memory keyed stores.

This module owns the process-wide stores. FastAPI initializes them on startup
and closes them on shutdown (see `api/main.py`).

Records are pydantic models. The store hands out deep copies on every read
and keeps its own copy on every write, so a caller can never mutate stored
state without going through `put()` / `update()`.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)

ARTICLES = "articles"
USERS = "users"

_stores: dict[str, "KeyedStore"] | None = None


class KeyedStore(Generic[T]):
    def __init__(self, name: str) -> None:
        self.name = name
        self._rows: dict[int, T] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """
        Allocate a new id: current time in milliseconds, bumped past the last
        id handed out so two allocations in the same millisecond never clash.
        """
        with self._lock:
            candidate = max(int(time.time() * 1000), self._last_id + 1)
            self._last_id = candidate
            return candidate

    def get(self, key: int) -> T | None:
        with self._lock:
            row = self._rows.get(key)
            return row.model_copy(deep=True) if row is not None else None

    def values(self) -> list[T]:
        with self._lock:
            return [row.model_copy(deep=True) for row in self._rows.values()]

    def put(self, key: int, row: T) -> T:
        with self._lock:
            self._rows[key] = row.model_copy(deep=True)
            # Seeded/explicit ids must not be re-issued by next_id().
            self._last_id = max(self._last_id, key)
            return row.model_copy(deep=True)

    def update(self, key: int, fn: Callable[[T], None]) -> T | None:
        """
        Apply `fn` to the stored record under the lock and return a copy of
        the result. Returns None when `key` is absent.
        """
        with self._lock:
            row = self._rows.get(key)
            if row is None:
                return None
            fn(row)
            return row.model_copy(deep=True)

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()
            self._last_id = 0


def init_stores() -> None:
    global _stores
    if _stores is not None:
        return None
    _stores = {
        ARTICLES: KeyedStore(ARTICLES),
        USERS: KeyedStore(USERS),
    }


def close_stores() -> None:
    global _stores
    if _stores is None:
        return None
    for store in _stores.values():
        store.clear()
    _stores = None


def get_store(name: str) -> KeyedStore:
    if _stores is None:
        raise RuntimeError("Stores are not initialized. Call init_stores() on startup.")
    try:
        return _stores[name]
    except KeyError:
        raise RuntimeError(f"Unknown store: {name}") from None
