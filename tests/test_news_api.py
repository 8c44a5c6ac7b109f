from __future__ import annotations

import time
from datetime import datetime, timezone


def test_list_news_returns_seeded_articles_in_published_order(client):
    response = client.get("/api/news")
    assert response.status_code == 200
    payload = response.json()
    assert sorted(a["id"] for a in payload) == [1, 2, 3, 4, 5]
    stamps = [a["published_at"] for a in payload]
    assert [datetime.fromisoformat(s) for s in stamps] == sorted(datetime.fromisoformat(s) for s in stamps)


def test_get_news_by_id_increments_views(client):
    first = client.get("/api/news/1").json()
    second = client.get("/api/news/1").json()
    assert second["view_count"] == first["view_count"] + 1


def test_get_news_unknown_id_is_404(client):
    response = client.get("/api/news/999999")
    assert response.status_code == 404
    assert "999999" in response.json()["detail"]


def test_get_news_non_numeric_id_is_rejected(client):
    assert client.get("/api/news/abc").status_code == 422


def test_category_route(client):
    response = client.get("/api/news/category/politics")
    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [3]


def test_search_route_is_case_insensitive(client):
    lower = client.get("/api/news/search", params={"keyword": "world"}).json()
    upper = client.get("/api/news/search", params={"keyword": "WORLD"}).json()
    assert [a["id"] for a in lower] == [a["id"] for a in upper] == [2]


def test_search_requires_keyword(client):
    assert client.get("/api/news/search").status_code == 422


def test_popular_route_limit_three(client):
    all_articles = client.get("/api/news").json()
    expected = sorted((a["view_count"] for a in all_articles), reverse=True)[:3]

    response = client.get("/api/news/popular", params={"limit": 3})

    assert response.status_code == 200
    payload = response.json()
    assert len(payload) == 3
    assert [a["view_count"] for a in payload] == expected


def test_popular_route_default_limit(client):
    assert len(client.get("/api/news/popular").json()) == 5


def test_create_news(client):
    started = datetime.now(timezone.utc)
    response = client.post(
        "/api/news",
        json={"title": "X", "content": "Y", "category": "TECH", "author": "Z"},
    )
    assert response.status_code == 200
    created = response.json()
    assert created["id"] not in {1, 2, 3, 4, 5}
    assert created["view_count"] == 0
    assert created["tags"] == []
    assert datetime.fromisoformat(created["published_at"]) >= started

    fetched = client.get(f"/api/news/{created['id']}").json()
    assert fetched["title"] == "X"


def test_create_news_rejects_unknown_category(client):
    response = client.post(
        "/api/news",
        json={"title": "X", "content": "Y", "category": "WEATHER", "author": "Z"},
    )
    assert response.status_code == 422


def test_personalized_uses_stored_preferences(client):
    response = client.get("/api/news/personalized/2")
    assert response.status_code == 200
    assert [a["category"] for a in response.json()] == ["SPORTS"]


def test_personalized_unknown_user_falls_back_to_tech(client):
    response = client.get("/api/news/personalized/404")
    assert response.status_code == 200
    assert [a["category"] for a in response.json()] == ["TECH"]


def test_slow_route_streams_a_json_array(client):
    response = client.get("/api/news/slow")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert [a["id"] for a in response.json()] == [a["id"] for a in client.get("/api/news").json()]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_store_does_not_grow_without_stream_subscribers(client, monkeypatch):
    monkeypatch.setenv("NEWS_GENERATOR_ENABLED", "true")
    monkeypatch.setenv("NEWS_STREAM_INTERVAL_S", "0.01")

    before = client.get("/api/news").json()
    time.sleep(0.3)
    after = client.get("/api/news").json()

    assert len(before) == len(after) == 5
