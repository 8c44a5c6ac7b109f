"""
News business logic.

Scope:
- read queries over the article store (list, get, category, search, popular)
- personalized selection for a set of preferred categories
- article creation and random article synthesis (used by the generator)
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone

from fastapi import HTTPException, status

from . import repository
from .schemas import Article, Category, CreateArticleRequest, parse_category

DEFAULT_POPULAR_LIMIT = 5
PERSONALIZED_LIMIT = 10

AUTHORS = ["Reporter Kim", "Reporter Lee", "Reporter Park", "Reporter Choi", "Reporter Jung"]
SEED_MIN_VIEWS = 100
SEED_MAX_VIEWS = 999

logger = logging.getLogger(__name__)


def _by_published(articles: list[Article], *, newest_first: bool = False) -> list[Article]:
    return sorted(articles, key=lambda a: (a.published_at, a.id), reverse=newest_first)


def seed_articles(rng: random.Random | None = None) -> list[Article]:
    rng = rng or random.Random()
    view_counts = [rng.randint(SEED_MIN_VIEWS, SEED_MAX_VIEWS) for _ in repository.SEED_ARTICLES]
    seeded = repository.seed(view_counts)
    logger.info("news_seeded count=%s", len(seeded))
    return seeded


def list_news() -> list[Article]:
    logger.info("news_list")
    result = _by_published(repository.list_articles())
    for article in result:
        logger.debug("news_item id=%s title=%s", article.id, article.title)
    return result


def get_news(article_id: int) -> Article:
    """
    Fetch one article and count the read.
    """
    article = repository.increment_view_count(article_id)
    if article is None:
        logger.info("news_not_found id=%s", article_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Article not found: {article_id}")
    logger.info("news_read id=%s view_count=%s", article.id, article.view_count)
    return article


def news_by_category(category: str) -> list[Article]:
    wanted = parse_category(category)
    logger.info("news_by_category category=%s", wanted)
    return _by_published([a for a in repository.list_articles() if a.category.value == wanted])


def search_news(keyword: str) -> list[Article]:
    needle = (keyword or "").lower()
    logger.info("news_search keyword=%s", keyword)
    matches = [
        a
        for a in repository.list_articles()
        if needle in a.title.lower() or needle in a.content.lower()
    ]
    return _by_published(matches, newest_first=True)


def popular_news(limit: int = DEFAULT_POPULAR_LIMIT) -> list[Article]:
    limit = max(0, limit)
    logger.info("news_popular limit=%s", limit)
    ranked = sorted(repository.list_articles(), key=lambda a: (-a.view_count, a.id))
    result = ranked[:limit]
    for article in result:
        logger.debug("news_popular_item id=%s view_count=%s", article.id, article.view_count)
    return result


def personalized_news(preferred_categories: list[str]) -> list[Article]:
    wanted = {parse_category(c) for c in preferred_categories}
    logger.info("news_personalized categories=%s", sorted(wanted))
    return [a for a in list_news() if a.category.value in wanted][:PERSONALIZED_LIMIT]


def create_news(request: CreateArticleRequest) -> Article:
    article = Article(
        id=repository.next_article_id(),
        title=request.title,
        content=request.content,
        category=request.category,
        author=request.author,
        published_at=datetime.now(timezone.utc),
        view_count=0,
        tags=list(request.tags),
    )
    created = repository.insert_article(article)
    logger.info("news_created id=%s title=%s", created.id, created.title)
    return created


def random_article(rng: random.Random | None = None) -> Article:
    """
    Synthesize an article with a random category and author. Not stored.
    """
    rng = rng or random.Random()
    category = rng.choice(list(Category))
    author = rng.choice(AUTHORS)
    article_id = repository.next_article_id()
    return Article(
        id=article_id,
        title=f"[{category.value}] New update from {author} {article_id % 1000}",
        content=f"Detailed news in the {category.value} category. This story was written by {author}.",
        category=category,
        author=author,
        published_at=datetime.now(timezone.utc),
        view_count=0,
        tags=[category.value.lower()],
    )


def publish_random_article(rng: random.Random | None = None) -> Article:
    article = repository.insert_article(random_article(rng))
    logger.info("news_generated id=%s title=%s", article.id, article.title)
    return article


def backpressure_article(sequence: int) -> Article:
    """
    Throwaway article for the backpressure demo stream. Not stored.
    """
    return Article(
        id=sequence,
        title=f"Backpressure test article {sequence}",
        content=f"Synthetic article number {sequence} from the high-frequency demo stream.",
        category=Category.TECH,
        author="stream-generator",
        published_at=datetime.now(timezone.utc),
        view_count=0,
        tags=["backpressure"],
    )
