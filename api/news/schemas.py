"""
News API schemas (records and request bodies).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    TECH = "TECH"
    SPORTS = "SPORTS"
    POLITICS = "POLITICS"
    ENTERTAINMENT = "ENTERTAINMENT"
    SCIENCE = "SCIENCE"


def parse_category(value: object) -> object:
    # Categories are matched case-insensitively everywhere.
    if isinstance(value, str):
        return value.strip().upper()
    return value


class Article(BaseModel):
    id: int
    title: str
    content: str
    category: Category
    author: str
    published_at: datetime
    view_count: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, value: object) -> object:
        return parse_category(value)


class CreateArticleRequest(BaseModel):
    title: str
    content: str
    category: Category
    author: str
    tags: list[str] = Field(default_factory=list)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, value: object) -> object:
        return parse_category(value)
