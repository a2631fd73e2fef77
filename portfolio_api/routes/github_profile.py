# portfolio_api/routes/github_profile.py
import logging

import httpx

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio_api import config
from portfolio_api.database import get_db
from portfolio_api.deps import get_github_service
from portfolio_api.errors import InternalError
from portfolio_api.repositories import GithubProfileRepository
from portfolio_api.schemas import GitHubProfile
from portfolio_api.services.github_profile import get_github_profile
from portfolio_api.services.github_service import GitHubAPIError, GitHubService

log = logging.getLogger("routes.github_profile")

router = APIRouter(prefix="/github", tags=["GitHub"])


@router.get("/profile", response_model=GitHubProfile)
async def read_github_profile(
    db: Session = Depends(get_db),
    github: GitHubService = Depends(get_github_service),
):
    try:
        return await get_github_profile(
            github, GithubProfileRepository(db), config.GITHUB_PROFILE_TTL_SECONDS
        )
    except (GitHubAPIError, httpx.HTTPError, KeyError) as exc:
        log.error("GitHub profile fetch failed: %s", exc)
        raise InternalError("Failed to fetch GitHub profile data")
