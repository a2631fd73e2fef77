# portfolio_api/routes/admin.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.deps import get_stats_cache, require_admin
from portfolio_api.repositories import (
    ContactRepository, ExperienceRepository, PostRepository, ProjectRepository, SkillRepository,
)
from portfolio_api.security import Principal
from portfolio_api.services.stats_cache import StatsCache

log = logging.getLogger("routes.admin")

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/dashboard")
def dashboard(
    db: Session = Depends(get_db),
    cache: StatsCache = Depends(get_stats_cache),
    admin: Principal = Depends(require_admin),
):
    messages = ContactRepository(db).find_all()
    return {
        "user": admin,
        "counts": {
            "projects": len(ProjectRepository(db).find_all()),
            "experiences": len(ExperienceRepository(db).find_all()),
            "posts": len(PostRepository(db).find_all()),
            "skills": len(SkillRepository(db).find_all()),
            "messages": len(messages),
        },
        "recent_messages": messages[:5],
        "github_stats_fresh": cache.get_fresh() is not None,
    }
