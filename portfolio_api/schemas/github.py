# portfolio_api/schemas/github.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ---- Stored stats (singleton) ----
class TopLanguage(BaseModel):
    name: str
    percentage: int


class RecentActivity(BaseModel):
    date: str
    message: str
    repo: str


class GithubStats(BaseModel):
    username: str
    repo_count: int = 0
    followers: int = 0
    contributions: int = 0
    top_languages: List[TopLanguage] = Field(default_factory=list)
    recent_activity: List[RecentActivity] = Field(default_factory=list)


# ---- Derived profile document ----
class GitHubOrganization(BaseModel):
    login: str
    id: int
    avatar_url: str = ""
    description: Optional[str] = None
    html_url: str


class GitHubRepository(BaseModel):
    name: str
    full_name: str
    html_url: str
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    topics: List[str] = Field(default_factory=list)
    updated_at: str = ""


class GitHubActivityItem(BaseModel):
    event_type: str
    repo_name: str
    repo_url: str
    created_at: str
    details: Dict[str, Any] = Field(default_factory=dict)


class GitHubProfile(BaseModel):
    username: str
    display_name: str
    avatar_url: str = ""
    bio: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None
    twitter_username: Optional[str] = None
    company: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    public_gists: int = 0
    html_url: str = ""
    created_at: str = ""
    organizations: List[GitHubOrganization] = Field(default_factory=list)
    top_repositories: List[GitHubRepository] = Field(default_factory=list)
    recent_activity: List[GitHubActivityItem] = Field(default_factory=list)
