# portfolio_api/routes/github_stats.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from portfolio_api.database import get_db, get_session_factory
from portfolio_api.deps import get_current_principal, get_github_service, get_stats_cache
from portfolio_api.errors import InternalError, error_body
from portfolio_api.repositories import GithubStatsRepository
from portfolio_api.schemas import GithubStats, RecentActivity, TopLanguage
from portfolio_api.security import Principal
from portfolio_api.services.github_service import GitHubService
from portfolio_api.services.github_stats import (
    GitHubUnavailable, refresh_github_stats, refresh_in_background,
)
from portfolio_api.services.stats_cache import StatsCache
from portfolio_api.utils.updates import apply_changes, changes_of

log = logging.getLogger("routes.github_stats")

router = APIRouter(prefix="/github-stats", tags=["GitHub"])


class GithubStatsUpdate(BaseModel):
    username: Optional[str] = None
    repo_count: Optional[int] = None
    followers: Optional[int] = None
    contributions: Optional[int] = None
    top_languages: Optional[List[TopLanguage]] = None
    recent_activity: Optional[List[RecentActivity]] = None


@router.get("", response_model=GithubStats)
def read_github_stats(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    cache: StatsCache = Depends(get_stats_cache),
    github: GitHubService = Depends(get_github_service),
    session_factory=Depends(get_session_factory),
):
    fresh = cache.get_fresh()
    if fresh is not None:
        return fresh

    # Stale or cold: answer from the store now, refresh after the response
    stored = GithubStatsRepository(db).get()
    if cache.begin_refresh():
        log.info("GitHub stats stale; scheduling refresh")
        background_tasks.add_task(refresh_in_background, github, session_factory, cache)

    if stored is None:
        # Returned (not raised) so the scheduled refresh still runs
        return JSONResponse(
            error_body(404, "GitHub stats not found"),
            status_code=404,
            background=background_tasks,
        )
    return stored


@router.put("", response_model=GithubStats)
def update_github_stats(
    body: GithubStatsUpdate,
    db: Session = Depends(get_db),
    cache: StatsCache = Depends(get_stats_cache),
    github: GitHubService = Depends(get_github_service),
    principal: Principal = Depends(get_current_principal),
):
    repo = GithubStatsRepository(db)
    current = repo.get() or GithubStats(username=github.username)
    saved = repo.save(apply_changes(current, changes_of(body)))
    cache.put(saved)
    log.info("GitHub stats updated by %s", principal.name)
    return saved


@router.get("/refresh", response_model=GithubStats)
async def force_refresh_github_stats(
    db: Session = Depends(get_db),
    cache: StatsCache = Depends(get_stats_cache),
    github: GitHubService = Depends(get_github_service),
    principal: Principal = Depends(get_current_principal),
):
    try:
        return await refresh_github_stats(github, GithubStatsRepository(db), cache)
    except GitHubUnavailable as exc:
        log.error("Forced GitHub stats refresh failed: %s", exc)
        raise InternalError("Failed to refresh GitHub stats")
