# portfolio_api/repositories/__init__.py
from portfolio_api.repositories.base import (  # noqa: F401
    DecodeIssue, Repository, SingletonRepository, SqlRepository,
    decode_json, encode_json, generate_id,
)
from portfolio_api.repositories.content import (  # noqa: F401
    ExperienceRepository, PostRepository, ProfileRepository, ProjectRepository, SkillRepository,
)
from portfolio_api.repositories.contact import ContactRepository  # noqa: F401
from portfolio_api.repositories.github import GithubProfileRepository, GithubStatsRepository  # noqa: F401
