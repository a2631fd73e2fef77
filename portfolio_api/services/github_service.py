# portfolio_api/services/github_service.py
"""Thin async client for the GitHub REST API plus the derived language stats."""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

import httpx

from portfolio_api import config
from portfolio_api.schemas import RecentActivity, TopLanguage

log = logging.getLogger("services.github")

USER_AGENT = "portfolio-api"
TOP_LANGUAGES_COUNT = 4  # "Other" is the 5th bucket
MIN_LANGUAGE_REPOS = 5

# Shown when too few repositories declare a language to be meaningful
FALLBACK_LANGUAGES = [
    TopLanguage(name="Rust", percentage=35),
    TopLanguage(name="TypeScript", percentage=30),
    TopLanguage(name="JavaScript", percentage=20),
    TopLanguage(name="C#", percentage=10),
    TopLanguage(name="Other", percentage=5),
]


class GitHubAPIError(Exception):
    """Non-2xx answer from GitHub; keeps the body for context."""

    def __init__(self, status_code: int, body: str, url: str = ""):
        super().__init__(f"GitHub API error: {status_code} - {body[:400]}")
        self.status_code = status_code
        self.body = body
        self.url = url


def _percent(count: int, total: int) -> int:
    # Halves round away from zero (12.5 -> 13), unlike round()
    return (count * 200 + total) // (2 * total)


def compute_language_stats(repos: Iterable[Dict[str, Any]]) -> List[TopLanguage]:
    """Percentages of the top 4 primary languages plus an "Other" bucket,
    nudged so the total is exactly 100."""
    counts: Counter = Counter()
    for repo in repos:
        lang = repo.get("language")
        if lang:
            counts[lang] += 1
    total = sum(counts.values())

    if total < MIN_LANGUAGE_REPOS:
        return [lang.model_copy() for lang in FALLBACK_LANGUAGES]

    # Count desc, then name for a stable order among ties
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    top = [
        TopLanguage(name=name, percentage=_percent(count, total))
        for name, count in ranked[:TOP_LANGUAGES_COUNT]
    ]
    other = sum(_percent(count, total) for _, count in ranked[TOP_LANGUAGES_COUNT:])
    if other > 0:
        top.append(TopLanguage(name="Other", percentage=other))

    diff = 100 - sum(lang.percentage for lang in top)
    if diff and top:
        # Last of the tied largest buckets absorbs the difference
        largest = top[0]
        for lang in top:
            if lang.percentage >= largest.percentage:
                largest = lang
        largest.percentage += diff
    return top


def _event_message(event: Dict[str, Any]) -> str:
    kind = event.get("type") or "Event"
    payload = event.get("payload") or {}
    if kind == "PushEvent":
        commits = payload.get("commits") or []
        if commits:
            return (commits[-1].get("message") or "").splitlines()[0] or "Pushed commits"
        return "Pushed commits"
    if kind == "CreateEvent":
        return f"Created {payload.get('ref_type') or 'repository'}"
    if kind == "PullRequestEvent":
        title = (payload.get("pull_request") or {}).get("title") or ""
        return f"{(payload.get('action') or 'updated').capitalize()} pull request {title}".strip()
    if kind == "IssuesEvent":
        title = (payload.get("issue") or {}).get("title") or ""
        return f"{(payload.get('action') or 'updated').capitalize()} issue {title}".strip()
    if kind == "WatchEvent":
        return "Starred repository"
    if kind == "ForkEvent":
        return "Forked repository"
    # "ReleaseEvent" -> "Release"
    return kind[:-5] if kind.endswith("Event") else kind


def summarize_activity(events: Iterable[Dict[str, Any]], limit: int = 5) -> List[RecentActivity]:
    out: List[RecentActivity] = []
    for event in events:
        out.append(RecentActivity(
            date=(event.get("created_at") or "")[:10],
            message=_event_message(event),
            repo=(event.get("repo") or {}).get("name") or "",
        ))
        if len(out) >= limit:
            break
    return out


class GitHubService:
    def __init__(
        self,
        username: str = config.GITHUB_USERNAME,
        token: Optional[str] = config.GITHUB_TOKEN,
        base_url: str = config.GITHUB_API_URL,
        timeout: float = config.GITHUB_TIMEOUT_SECS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.username = username
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github+json",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            log.debug("GitHub GET %s params=%s", path, params)
            r = await client.get(path, params=params)
        if not r.is_success:
            raise GitHubAPIError(r.status_code, r.text, str(r.request.url))
        return r.json()

    async def get_user_profile(self) -> Dict[str, Any]:
        return await self._get(f"/users/{self.username}")

    async def get_user_repos(self, per_page: int = 30, page: int = 1) -> List[Dict[str, Any]]:
        return await self._get(
            f"/users/{self.username}/repos",
            params={"per_page": per_page, "page": page, "sort": "updated"},
        )

    async def get_user_organizations(self) -> List[Dict[str, Any]]:
        return await self._get(f"/users/{self.username}/orgs")

    async def get_user_activity(self, limit: int = 30) -> List[Dict[str, Any]]:
        return await self._get(f"/users/{self.username}/events/public", params={"per_page": limit})

    async def get_language_stats(self) -> List[TopLanguage]:
        repos = await self.get_user_repos(per_page=100, page=1)
        return compute_language_stats(repos)
