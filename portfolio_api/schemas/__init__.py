# portfolio_api/schemas/__init__.py
from portfolio_api.schemas.portfolio import (  # noqa: F401
    Education, Experience, Language, Post, Profile, Project, Skill, SocialLink,
)
from portfolio_api.schemas.github import (  # noqa: F401
    GitHubActivityItem, GitHubOrganization, GitHubProfile, GitHubRepository,
    GithubStats, RecentActivity, TopLanguage,
)
from portfolio_api.schemas.contact import ContactIn, ContactMessage, ContactResponse  # noqa: F401
