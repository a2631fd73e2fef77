# portfolio_api/tests/test_github_profile.py
import asyncio
import threading
from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from portfolio_api.errors import DatabaseError
from portfolio_api.repositories import GithubProfileRepository
from portfolio_api.repositories.github import utcnow
from portfolio_api.schemas import GitHubProfile
from portfolio_api.services.github_profile import get_github_profile


def test_profile_is_aggregated_and_cached(client, github, db):
    r = client.get("/github/profile")
    assert r.status_code == 200
    profile = r.json()
    assert profile["username"] == "octo"
    assert profile["display_name"] == "Octo Cat"
    assert profile["organizations"][0]["html_url"] == "https://github.com/acme"
    assert len(profile["top_repositories"]) == len(github.repos)
    assert profile["recent_activity"][0]["repo_url"] == "https://github.com/octo/repo-1"

    assert client.get("/github/profile").json() == profile
    assert github.calls["user"] == 1


def test_optional_parts_default_to_empty(client, github):
    github.failing = {"orgs", "events"}

    r = client.get("/github/profile")
    assert r.status_code == 200
    assert r.json()["organizations"] == []
    assert r.json()["recent_activity"] == []
    assert r.json()["top_repositories"]


def test_user_lookup_failure_is_500(client, github):
    github.failing = {"user"}

    r = client.get("/github/profile")
    assert r.status_code == 500
    assert r.json()["message"] == "Internal server error: Failed to fetch GitHub profile data"


def test_stale_document_is_rebuilt(client, github, db):
    client.get("/github/profile")
    repo = GithubProfileRepository(db)
    stored = repo.load_fresh(3600)
    repo.store(stored, now=utcnow() - timedelta(hours=2))
    assert repo.load_fresh(3600) is None

    github.user["followers"] = 100
    assert client.get("/github/profile").json()["followers"] == 100
    assert github.calls["user"] == 2


def test_store_failure_rolls_back(db, monkeypatch):
    repo = GithubProfileRepository(db)

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    rolled_back = []
    real_rollback = db.rollback
    monkeypatch.setattr(db, "commit", failing_commit)
    monkeypatch.setattr(db, "rollback", lambda: rolled_back.append(True) or real_rollback())

    with pytest.raises(DatabaseError):
        repo.store(GitHubProfile(username="octo", display_name="Octo"))
    assert rolled_back == [True]

    monkeypatch.undo()
    assert repo.load_fresh(3600) is None


def test_repository_work_runs_off_the_event_loop(github):
    threads = []

    class RecordingRepository:
        def load_fresh(self, max_age_seconds):
            threads.append(threading.get_ident())
            return None

        def store(self, profile):
            threads.append(threading.get_ident())
            return profile

    async def run():
        loop_thread = threading.get_ident()
        profile = await get_github_profile(github, RecordingRepository(), 3600)
        return loop_thread, profile

    loop_thread, profile = asyncio.run(run())

    assert profile.username == "octo"
    assert len(threads) == 2
    assert loop_thread not in threads
