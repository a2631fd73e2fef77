# portfolio_api/scripts/seed_portfolio.py
"""
Load portfolio content from a JSON document into the database.

    SEED_FILE=data/portfolio.json python -m portfolio_api.scripts.seed_portfolio

The document may carry any of: profile, skills, experiences, projects, posts,
github_stats. Singletons are upserted; skills whose category already exists
and records whose id is already stored are skipped, so re-running is safe.
"""
import json
import logging
import os
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from portfolio_api.database import Base, SessionLocal, engine
from portfolio_api import models  # noqa: F401
from portfolio_api.repositories import (
    ExperienceRepository, GithubStatsRepository, PostRepository, ProfileRepository,
    ProjectRepository, SkillRepository, generate_id,
)
from portfolio_api.schemas import Experience, GithubStats, Post, Profile, Project, Skill

log = logging.getLogger("scripts.seed_portfolio")

SEED_FILE = os.environ.get("SEED_FILE", "data/portfolio.json")

_COLLECTIONS = (
    ("experiences", ExperienceRepository, Experience),
    ("projects", ProjectRepository, Project),
    ("posts", PostRepository, Post),
)


def _with_id(item: Dict[str, Any]) -> Dict[str, Any]:
    return {**item, "id": item.get("id") or generate_id()}


def seed(db: Session, document: Dict[str, Any]) -> Dict[str, int]:
    """Insert what the document holds; returns how many records were written per section."""
    written: Dict[str, int] = {}

    if "profile" in document:
        ProfileRepository(db).save(Profile.model_validate(document["profile"]))
        written["profile"] = 1

    if "github_stats" in document:
        GithubStatsRepository(db).save(GithubStats.model_validate(document["github_stats"]))
        written["github_stats"] = 1

    skills = SkillRepository(db)
    written["skills"] = 0
    for item in document.get("skills", []):
        skill = Skill.model_validate(_with_id(item))
        if skills.find_by_category(skill.category) is not None:
            log.info("Skill category %r exists; skipping", skill.category)
            continue
        skills.create(skill)
        written["skills"] += 1

    for section, repo_cls, entity_cls in _COLLECTIONS:
        repo = repo_cls(db)
        written[section] = 0
        for item in document.get(section, []):
            try:
                entity = entity_cls.model_validate(_with_id(item))
            except PydanticValidationError as exc:
                log.warning("Skipping invalid %s entry: %s", section, exc)
                continue
            if repo.find_by_id(entity.id) is not None:
                continue
            repo.create(entity)
            written[section] += 1

    return written


def run():
    if not os.path.exists(SEED_FILE):
        print(f"No file found at {SEED_FILE}. Nothing to seed.")
        return

    with open(SEED_FILE, "r", encoding="utf-8") as f:
        document = json.load(f)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        written = seed(db, document)
    finally:
        db.close()
    summary = ", ".join(f"{k}={v}" for k, v in written.items())
    print(f"✅ Seeded portfolio from {SEED_FILE}: {summary}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run()
