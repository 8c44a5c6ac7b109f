"""
User business logic: lookups, creation, and category preferences.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status

from news.schemas import Category

from . import repository
from .schemas import CreateUserRequest, User

DEFAULT_PREFERENCES = [Category.TECH]

logger = logging.getLogger(__name__)


def seed_users() -> list[User]:
    seeded = repository.seed()
    logger.info("users_seeded count=%s", len(seeded))
    return seeded


def list_users() -> list[User]:
    logger.info("users_list")
    return repository.list_users()


def get_user(user_id: int) -> User:
    """
    Fetch one user and mark them active now.
    """
    user = repository.touch_last_active(user_id)
    if user is None:
        logger.info("user_not_found id=%s", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: {user_id}")
    logger.info("user_read id=%s username=%s", user.id, user.username)
    return user


def create_user(request: CreateUserRequest) -> User:
    now = datetime.now(timezone.utc)
    user = User(
        id=repository.next_user_id(),
        username=request.username.strip(),
        email=repository.normalize_email(request.email),
        preferred_categories=list(request.preferred_categories),
        created_at=now,
        last_active_at=now,
    )
    created = repository.insert_user(user)
    logger.info("user_created id=%s username=%s", created.id, created.username)
    return created


def get_preferences(user_id: int) -> list[Category]:
    """
    Preferred categories for `user_id`, or the default set when the user is
    unknown.
    """
    user = repository.touch_last_active(user_id)
    if user is None:
        logger.info("user_preferences_default id=%s", user_id)
        return list(DEFAULT_PREFERENCES)
    logger.info("user_preferences id=%s categories=%s", user_id, [c.value for c in user.preferred_categories])
    return list(user.preferred_categories)
