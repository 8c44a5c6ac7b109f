from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core import store
from news import service as news_service
from users import service as user_service


@pytest.fixture()
def seeded_stores():
    store.init_stores()
    news_service.seed_articles()
    user_service.seed_users()
    try:
        yield
    finally:
        store.close_stores()


@pytest.fixture()
def client(monkeypatch) -> TestClient:
    monkeypatch.setenv("NEWS_GENERATOR_ENABLED", "false")
    monkeypatch.setenv("NEWS_SLOW_DELAY_S", "0")

    import main

    with TestClient(main.app) as test_client:
        yield test_client
