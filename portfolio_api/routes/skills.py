# portfolio_api/routes/skills.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.deps import get_current_principal
from portfolio_api.errors import BadRequestError, NotFoundError
from portfolio_api.repositories import SkillRepository, generate_id
from portfolio_api.schemas import Skill
from portfolio_api.security import Principal
from portfolio_api.utils.updates import apply_changes, changes_of

log = logging.getLogger("routes.skills")

router = APIRouter(prefix="/skills", tags=["Skills"])


class SkillIn(BaseModel):
    category: str = Field(..., min_length=1, max_length=120)
    items: List[str] = []


class SkillUpdate(BaseModel):
    category: Optional[str] = None
    items: Optional[List[str]] = None


def _not_found(skill_id: str) -> NotFoundError:
    return NotFoundError(f"Skill with ID {skill_id} not found")


def _ensure_category_free(repo: SkillRepository, category: str, skill_id: Optional[str] = None) -> None:
    clash = repo.find_by_category(category)
    if clash is not None and clash.id != skill_id:
        raise BadRequestError(f"Skill category '{category}' already exists")


@router.get("", response_model=List[Skill])
def list_skills(db: Session = Depends(get_db)):
    return SkillRepository(db).find_all()


@router.get("/{skill_id}", response_model=Skill)
def get_skill(skill_id: str, db: Session = Depends(get_db)):
    skill = SkillRepository(db).find_by_id(skill_id)
    if skill is None:
        raise _not_found(skill_id)
    return skill


@router.post("", response_model=Skill, status_code=status.HTTP_201_CREATED)
def create_skill(
    body: SkillIn,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    repo = SkillRepository(db)
    _ensure_category_free(repo, body.category)
    created = repo.create(Skill(id=generate_id(), **body.model_dump()))
    log.info("Created skill category %r", created.category)
    return created


@router.put("/{skill_id}", response_model=Skill)
def update_skill(
    skill_id: str,
    body: SkillUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    repo = SkillRepository(db)
    existing = repo.find_by_id(skill_id)
    if existing is None:
        raise _not_found(skill_id)
    updated = apply_changes(existing, changes_of(body))
    if updated.category != existing.category:
        _ensure_category_free(repo, updated.category, skill_id)
    return repo.update(skill_id, updated)


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(
    skill_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    if not SkillRepository(db).delete(skill_id):
        raise _not_found(skill_id)
    log.info("Deleted skill %s", skill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
