"""
User store access.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core import store

from .schemas import User

SEED_USERS: list[dict] = [
    {
        "username": "techuser",
        "email": "tech@example.com",
        "preferred_categories": ["TECH", "SCIENCE"],
    },
    {
        "username": "sportsfan",
        "email": "sports@example.com",
        "preferred_categories": ["SPORTS"],
    },
    {
        "username": "newsaddict",
        "email": "news@example.com",
        "preferred_categories": ["POLITICS", "ENTERTAINMENT"],
    },
]


def users() -> store.KeyedStore:
    return store.get_store(store.USERS)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def seed() -> list[User]:
    now = datetime.now(timezone.utc)
    seeded: list[User] = []
    for index, data in enumerate(SEED_USERS):
        user = User(id=index + 1, created_at=now, last_active_at=now, **data)
        seeded.append(users().put(user.id, user))
    return seeded


def list_users() -> list[User]:
    return sorted(users().values(), key=lambda u: u.id)


def insert_user(user: User) -> User:
    return users().put(user.id, user)


def touch_last_active(user_id: int) -> User | None:
    def _touch(user: User) -> None:
        user.last_active_at = datetime.now(timezone.utc)

    return users().update(user_id, _touch)


def next_user_id() -> int:
    return users().next_id()
