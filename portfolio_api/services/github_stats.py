# portfolio_api/services/github_stats.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from portfolio_api.repositories import GithubStatsRepository
from portfolio_api.schemas import GithubStats
from portfolio_api.services.github_service import GitHubService, summarize_activity
from portfolio_api.services.stats_cache import StatsCache

log = logging.getLogger("services.github_stats")

RECENT_ACTIVITY_LIMIT = 5


class GitHubUnavailable(Exception):
    """Every GitHub sub-fetch failed; nothing new to store."""


async def fetch_github_stats(github: GitHubService, current: Optional[GithubStats] = None) -> GithubStats:
    """Build stats from GitHub. A failing sub-fetch keeps the current value."""
    stats = current.model_copy(deep=True) if current else GithubStats(username=github.username)
    stats.username = github.username

    user, languages, events = await asyncio.gather(
        github.get_user_profile(),
        github.get_language_stats(),
        github.get_user_activity(30),
        return_exceptions=True,
    )

    failures = 0
    if isinstance(user, Exception):
        failures += 1
        log.warning("GitHub user fetch failed: %s", user)
    else:
        stats.username = user.get("login") or stats.username
        stats.repo_count = int(user.get("public_repos") or 0)
        stats.followers = int(user.get("followers") or 0)

    if isinstance(languages, Exception):
        failures += 1
        log.warning("GitHub language stats failed: %s", languages)
    else:
        stats.top_languages = languages

    if isinstance(events, Exception):
        failures += 1
        log.warning("GitHub activity fetch failed: %s", events)
    else:
        stats.recent_activity = summarize_activity(events, RECENT_ACTIVITY_LIMIT)

    # contributions are not exposed by the REST API; the stored value is kept
    if failures == 3:
        raise GitHubUnavailable("all GitHub requests failed")
    return stats


async def refresh_github_stats(
    github: GitHubService, repo: GithubStatsRepository, cache: StatsCache
) -> GithubStats:
    """Fetch now, persist, and replace the cache slot. Session work runs in
    the threadpool so the event loop keeps serving other requests."""
    current = await run_in_threadpool(repo.get)
    stats = await fetch_github_stats(github, current)
    await run_in_threadpool(repo.save, stats)
    cache.put(stats)
    log.info("GitHub stats refreshed for %s", stats.username)
    return stats


async def refresh_in_background(github: GitHubService, session_factory, cache: StatsCache) -> None:
    """Runs after the response is sent. The caller must have won
    cache.begin_refresh(); the claim is released here."""
    db = None
    try:
        db = session_factory()
        await refresh_github_stats(github, GithubStatsRepository(db), cache)
    except Exception:
        # Failure mode is a stale cache; the next stale read retries
        log.exception("Background GitHub stats refresh failed")
    finally:
        if db is not None:
            db.close()
        cache.end_refresh()
