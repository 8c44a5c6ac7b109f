"""
Article store access.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from core import store

from .schemas import Article, Category

SEED_ARTICLES: list[dict] = [
    {
        "title": "Mastering Reactive Web Services",
        "content": "A new paradigm for reactive programming.",
        "category": Category.TECH,
        "author": "Reporter Kim",
        "tags": ["reactive", "web"],
    },
    {
        "title": "World Cup Final Highlights",
        "content": "The most hard-fought match in history.",
        "category": Category.SPORTS,
        "author": "Reporter Lee",
        "tags": ["football"],
    },
    {
        "title": "New Policy Announced",
        "content": "The public's attention is focused on the announcement.",
        "category": Category.POLITICS,
        "author": "Reporter Park",
        "tags": ["policy"],
    },
    {
        "title": "Blockbuster Movie Opens",
        "content": "Critics are calling it the best film of the year.",
        "category": Category.ENTERTAINMENT,
        "author": "Reporter Choi",
        "tags": ["movies"],
    },
    {
        "title": "Groundbreaking Scientific Discovery",
        "content": "Research results tipped for a Nobel prize.",
        "category": Category.SCIENCE,
        "author": "Reporter Jung",
        "tags": ["research"],
    },
]


def articles() -> store.KeyedStore:
    return store.get_store(store.ARTICLES)


def seed(view_counts: list[int]) -> list[Article]:
    """
    Insert the sample articles with ids 1..N, one minute apart, oldest first.
    """
    now = datetime.now(timezone.utc)
    total = len(SEED_ARTICLES)
    seeded: list[Article] = []
    for index, (data, views) in enumerate(zip(SEED_ARTICLES, view_counts)):
        article = Article(
            id=index + 1,
            published_at=now - timedelta(minutes=total - index),
            view_count=views,
            **data,
        )
        seeded.append(articles().put(article.id, article))
    return seeded


def list_articles() -> list[Article]:
    return articles().values()


def get_article(article_id: int) -> Article | None:
    return articles().get(article_id)


def insert_article(article: Article) -> Article:
    return articles().put(article.id, article)


def increment_view_count(article_id: int) -> Article | None:
    def _bump(article: Article) -> None:
        article.view_count += 1

    return articles().update(article_id, _bump)


def next_article_id() -> int:
    return articles().next_id()
