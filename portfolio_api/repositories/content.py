# portfolio_api/repositories/content.py
from __future__ import annotations

from typing import Optional

from portfolio_api import models
from portfolio_api.repositories.base import SingletonRepository, SqlRepository
from portfolio_api.schemas import Experience, Post, Profile, Project, Skill


class ProfileRepository(SingletonRepository[Profile]):
    model = models.Profile
    entity = Profile
    json_fields = {"bio": [], "social_links": [], "education": [], "languages": []}


class SkillRepository(SqlRepository[Skill]):
    model = models.Skill
    entity = Skill
    json_fields = {"items": []}
    order_by = (models.Skill.category.asc(),)

    def find_by_category(self, category: str) -> Optional[Skill]:
        with self._guard("read"):
            row = self._query().filter(models.Skill.category == category).first()
        return self._to_entity(row) if row is not None else None


class ExperienceRepository(SqlRepository[Experience]):
    model = models.Experience
    entity = Experience
    json_fields = {"technologies": [], "highlights": []}
    # Current positions (NULL end_date) first, then most recent start
    order_by = (models.Experience.end_date.is_(None).desc(), models.Experience.start_date.desc())


class PostRepository(SqlRepository[Post]):
    model = models.Post
    entity = Post
    json_fields = {"tags": []}
    order_by = (models.Post.date.desc(),)


class ProjectRepository(SqlRepository[Project]):
    model = models.Project
    entity = Project
    json_fields = {"technologies": [], "highlights": [], "image_urls": None}
    order_by = (models.Project.year.desc(), models.Project.title.asc())
