# portfolio_api/tests/test_github_stats_api.py
import asyncio

import pytest

from portfolio_api.main import app
from portfolio_api.repositories import GithubStatsRepository
from portfolio_api.schemas import GithubStats, TopLanguage
from portfolio_api.services.github_stats import (
    GitHubUnavailable, fetch_github_stats, refresh_in_background,
)
from portfolio_api.services.stats_cache import StatsCache

STORED = {
    "username": "octo",
    "repo_count": 3,
    "followers": 5,
    "contributions": 800,
    "top_languages": [{"name": "Go", "percentage": 100}],
    "recent_activity": [],
}


def test_cold_read_is_404_and_schedules_refresh(client, github, stats_cache):
    r = client.get("/github-stats")
    assert r.status_code == 404
    assert r.json()["success"] is False

    # the background refresh ran after the response
    assert github.calls["user"] == 1
    assert stats_cache.refreshing is False

    r = client.get("/github-stats")
    assert r.status_code == 200
    body = r.json()
    assert body["followers"] == 42
    assert body["repo_count"] == 12
    assert body["top_languages"] == [
        {"name": "Python", "percentage": 50},
        {"name": "Go", "percentage": 33},
        {"name": "Rust", "percentage": 17},
    ]
    assert body["recent_activity"][0] == {"date": "2024-05-02", "message": "Fix parser", "repo": "octo/repo-1"}
    # served from the cache slot, no second fetch
    assert github.calls["user"] == 1


def test_stale_read_returns_stored_row_then_refreshes(client, github, db):
    GithubStatsRepository(db).save(GithubStats(**STORED))

    r = client.get("/github-stats")
    assert r.status_code == 200
    assert r.json()["followers"] == 5

    assert github.calls["user"] == 1
    refreshed = client.get("/github-stats").json()
    assert refreshed["followers"] == 42
    # the REST API has no contribution count; the stored one survives
    assert refreshed["contributions"] == 800


def test_refresh_already_in_flight_is_not_duplicated(client, github, db, stats_cache):
    GithubStatsRepository(db).save(GithubStats(**STORED))
    assert stats_cache.begin_refresh()

    for _ in range(3):
        assert client.get("/github-stats").status_code == 200

    assert sum(github.calls.values()) == 0
    assert stats_cache.refreshing is True


def test_failed_background_refresh_keeps_serving_store(client, github, db, stats_cache):
    GithubStatsRepository(db).save(GithubStats(**STORED))
    github.failing = {"user", "repos", "events"}

    assert client.get("/github-stats").json()["followers"] == 5
    assert stats_cache.refreshing is False
    assert stats_cache.get_fresh() is None
    assert client.get("/github-stats").json()["followers"] == 5


def test_write_then_read_within_ttl_never_calls_github(client, github, auth_headers):
    assert client.put("/github-stats", json={"contributions": 1234}).status_code == 401

    r = client.put("/github-stats", json={"contributions": 1234}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["username"] == "octo"
    assert r.json()["contributions"] == 1234

    r = client.get("/github-stats")
    assert r.status_code == 200
    assert r.json()["contributions"] == 1234
    assert sum(github.calls.values()) == 0


def test_forced_refresh(client, github, auth_headers):
    assert client.get("/github-stats/refresh").status_code == 401

    r = client.get("/github-stats/refresh", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["followers"] == 42

    github.failing = {"user", "repos", "events"}
    r = client.get("/github-stats/refresh", headers=auth_headers)
    assert r.status_code == 500
    assert r.json()["error_code"] == "500"


def test_partial_failure_keeps_current_values(github):
    current = GithubStats(**STORED)
    github.failing = {"repos"}

    stats = asyncio.run(fetch_github_stats(github, current))

    assert stats.followers == 42
    assert stats.top_languages == [TopLanguage(name="Go", percentage=100)]
    assert stats.contributions == 800
    assert current.followers == 5


def test_total_failure_raises(github):
    github.failing = {"user", "repos", "events"}
    with pytest.raises(GitHubUnavailable):
        asyncio.run(fetch_github_stats(github))


def test_lost_refresh_claim_expires(client, github, db):
    clock = {"now": 1000.0}
    cache = StatsCache(ttl_seconds=3600, clock=lambda: clock["now"], claim_timeout=30)
    app.state.stats_cache = cache
    GithubStatsRepository(db).save(GithubStats(**STORED))

    # a claim whose task never ran (client went away before the background step)
    assert cache.begin_refresh()
    client.get("/github-stats")
    assert sum(github.calls.values()) == 0

    clock["now"] += 31
    assert client.get("/github-stats").json()["followers"] == 5
    assert github.calls["user"] == 1
    assert cache.refreshing is False
    assert client.get("/github-stats").json()["followers"] == 42


def test_session_factory_failure_releases_claim(github):
    cache = StatsCache(ttl_seconds=3600)
    assert cache.begin_refresh()

    def broken_factory():
        raise RuntimeError("pool exhausted")

    asyncio.run(refresh_in_background(github, broken_factory, cache))

    assert cache.refreshing is False
    assert sum(github.calls.values()) == 0
