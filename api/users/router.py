"""
User API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from . import service
from .schemas import CreateUserRequest, PreferencesResponse, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users")


@router.get("")
async def list_users() -> list[User]:
    logger.info("GET /api/users")
    return service.list_users()


@router.post("")
async def create_user(request: CreateUserRequest) -> User:
    logger.info("POST /api/users username=%s", request.username)
    return service.create_user(request)


@router.get("/{user_id}")
async def get_user(user_id: int) -> User:
    logger.info("GET /api/users/%s", user_id)
    return service.get_user(user_id)


@router.get("/{user_id}/preferences")
async def get_preferences(user_id: int) -> PreferencesResponse:
    logger.info("GET /api/users/%s/preferences", user_id)
    return PreferencesResponse(user_id=user_id, preferred_categories=service.get_preferences(user_id))
