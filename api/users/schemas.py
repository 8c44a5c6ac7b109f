"""
User API schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from news.schemas import Category, parse_category


class User(BaseModel):
    id: int
    username: str
    email: str
    preferred_categories: list[Category] = Field(default_factory=list)
    created_at: datetime
    last_active_at: datetime


class CreateUserRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=320)
    preferred_categories: list[Category] = Field(default_factory=list)

    @field_validator("preferred_categories", mode="before")
    @classmethod
    def normalize_categories(cls, value: object) -> object:
        if isinstance(value, list):
            return [parse_category(v) for v in value]
        return value


class PreferencesResponse(BaseModel):
    user_id: int
    preferred_categories: list[Category]
