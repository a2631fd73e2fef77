# portfolio_api/tests/conftest.py
import copy
import os
from collections import Counter

# Must be set before anything imports portfolio_api.config
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENV"] = "dev"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret-pass"
os.environ["ADMIN_NAME"] = "Test Admin"
os.environ.pop("ADMIN_PASSWORD_HASH", None)
os.environ["GITHUB_USERNAME"] = "octo"
os.environ.pop("API_PREFIX", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from portfolio_api.database import Base, SessionLocal, engine, get_db, get_session_factory  # noqa: E402
from portfolio_api.deps import get_github_service  # noqa: E402
from portfolio_api.main import app  # noqa: E402
from portfolio_api.services.github_service import GitHubAPIError, compute_language_stats  # noqa: E402
from portfolio_api.services.stats_cache import StatsCache  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"

GITHUB_USER = {
    "login": "octo",
    "name": "Octo Cat",
    "avatar_url": "https://avatars.example/octo.png",
    "bio": "Builds things",
    "location": "Lisbon",
    "blog": None,
    "twitter_username": None,
    "company": "@acme",
    "followers": 42,
    "following": 7,
    "public_repos": 12,
    "public_gists": 1,
    "html_url": "https://github.com/octo",
    "created_at": "2015-03-01T10:00:00Z",
}

GITHUB_REPOS = [
    {"name": f"repo-{i}", "full_name": f"octo/repo-{i}", "html_url": f"https://github.com/octo/repo-{i}",
     "description": None, "language": lang, "stargazers_count": i, "forks_count": 0,
     "topics": [], "updated_at": "2024-05-01T00:00:00Z"}
    for i, lang in enumerate(["Python", "Python", "Python", "Go", "Go", "Rust", None])
]

GITHUB_ORGS = [{"login": "acme", "id": 99, "avatar_url": "https://avatars.example/acme.png", "description": "Acme"}]

GITHUB_EVENTS = [
    {"type": "PushEvent", "repo": {"name": "octo/repo-1"}, "created_at": "2024-05-02T08:00:00Z",
     "payload": {"commits": [{"message": "Fix parser\n\nlong body"}]}},
    {"type": "WatchEvent", "repo": {"name": "acme/tool"}, "created_at": "2024-05-01T08:00:00Z", "payload": {}},
]


class FakeGitHubService:
    """In-memory stand-in for GitHubService; counts calls and can fail on demand."""

    def __init__(self, username: str = "octo"):
        self.username = username
        self.calls: Counter = Counter()
        self.failing = set()
        self.user = copy.deepcopy(GITHUB_USER)
        self.repos = copy.deepcopy(GITHUB_REPOS)
        self.orgs = copy.deepcopy(GITHUB_ORGS)
        self.events = copy.deepcopy(GITHUB_EVENTS)

    async def _answer(self, what, value):
        self.calls[what] += 1
        if what in self.failing:
            raise GitHubAPIError(503, f"{what} unavailable")
        return copy.deepcopy(value)

    async def get_user_profile(self):
        return await self._answer("user", self.user)

    async def get_user_repos(self, per_page=30, page=1):
        return await self._answer("repos", self.repos[:per_page])

    async def get_user_organizations(self):
        return await self._answer("orgs", self.orgs)

    async def get_user_activity(self, limit=30):
        return await self._answer("events", self.events[:limit])

    async def get_language_stats(self):
        return compute_language_stats(await self.get_user_repos(per_page=100))


@pytest.fixture(autouse=True)
def fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def github():
    return FakeGitHubService()


@pytest.fixture
def stats_cache():
    cache = StatsCache(ttl_seconds=3600)
    app.state.stats_cache = cache
    return cache


@pytest.fixture
def client(github, stats_cache):
    def _db():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_session_factory] = lambda: SessionLocal
    app.dependency_overrides[get_github_service] = lambda: github
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token(client):
    r = client.post("/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
