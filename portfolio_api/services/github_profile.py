# portfolio_api/services/github_profile.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from starlette.concurrency import run_in_threadpool

from portfolio_api.repositories import GithubProfileRepository
from portfolio_api.schemas import (
    GitHubActivityItem, GitHubOrganization, GitHubProfile, GitHubRepository,
)
from portfolio_api.services.github_service import GitHubService

log = logging.getLogger("services.github_profile")

TOP_REPOSITORIES = 10
ACTIVITY_EVENTS = 20


def _organization(org: Dict[str, Any]) -> GitHubOrganization:
    return GitHubOrganization(
        login=org["login"],
        id=org["id"],
        avatar_url=org.get("avatar_url") or "",
        description=org.get("description"),
        html_url=f"https://github.com/{org['login']}",
    )


def _repository(repo: Dict[str, Any]) -> GitHubRepository:
    return GitHubRepository(
        name=repo["name"],
        full_name=repo.get("full_name") or repo["name"],
        html_url=repo.get("html_url") or "",
        description=repo.get("description"),
        language=repo.get("language"),
        stargazers_count=repo.get("stargazers_count") or 0,
        forks_count=repo.get("forks_count") or 0,
        topics=repo.get("topics") or [],
        updated_at=repo.get("updated_at") or "",
    )


def _activity(event: Dict[str, Any]) -> GitHubActivityItem:
    repo_name = (event.get("repo") or {}).get("name") or ""
    return GitHubActivityItem(
        event_type=event.get("type") or "",
        repo_name=repo_name,
        repo_url=f"https://github.com/{repo_name}",
        created_at=event.get("created_at") or "",
        details=event.get("payload") or {},
    )


def _optional(result, what: str) -> List[Dict[str, Any]]:
    if isinstance(result, Exception):
        log.warning("GitHub %s fetch failed, using empty list: %s", what, result)
        return []
    return result


async def build_github_profile(github: GitHubService) -> GitHubProfile:
    """Aggregate the profile document. The user lookup is required; the
    organizations, repositories and events default to empty on failure."""
    user = await github.get_user_profile()
    orgs, repos, events = await asyncio.gather(
        github.get_user_organizations(),
        github.get_user_repos(TOP_REPOSITORIES, 1),
        github.get_user_activity(ACTIVITY_EVENTS),
        return_exceptions=True,
    )

    return GitHubProfile(
        username=user["login"],
        display_name=user.get("name") or user["login"],
        avatar_url=user.get("avatar_url") or "",
        bio=user.get("bio"),
        location=user.get("location"),
        blog=user.get("blog"),
        twitter_username=user.get("twitter_username"),
        company=user.get("company"),
        followers=user.get("followers") or 0,
        following=user.get("following") or 0,
        public_repos=user.get("public_repos") or 0,
        public_gists=user.get("public_gists") or 0,
        html_url=user.get("html_url") or "",
        created_at=user.get("created_at") or "",
        organizations=[_organization(o) for o in _optional(orgs, "organizations")],
        top_repositories=[_repository(r) for r in _optional(repos, "repositories")],
        recent_activity=[_activity(e) for e in _optional(events, "activity")],
    )


async def get_github_profile(
    github: GitHubService, repo: GithubProfileRepository, ttl_seconds: int
) -> GitHubProfile:
    """Serve the stored document while fresh; otherwise rebuild and store it.
    Session work runs in the threadpool, off the event loop."""
    cached = await run_in_threadpool(repo.load_fresh, ttl_seconds)
    if cached is not None:
        return cached
    profile = await build_github_profile(github)
    await run_in_threadpool(repo.store, profile)
    log.info("GitHub profile cached for %s", profile.username)
    return profile
