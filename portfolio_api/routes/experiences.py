# portfolio_api/routes/experiences.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.deps import get_current_principal
from portfolio_api.errors import NotFoundError
from portfolio_api.repositories import ExperienceRepository, generate_id
from portfolio_api.schemas import Experience
from portfolio_api.security import Principal
from portfolio_api.utils.updates import apply_changes, changes_of

log = logging.getLogger("routes.experiences")

router = APIRouter(prefix="/experiences", tags=["Experiences"])


class ExperienceIn(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    start_date: str = Field(..., min_length=1, max_length=20)
    end_date: Optional[str] = None  # null = current position
    description: str = ""
    technologies: List[str] = []
    highlights: List[str] = []


class ExperienceUpdate(BaseModel):
    company: Optional[str] = None
    position: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None  # explicit null marks the role as current
    description: Optional[str] = None
    technologies: Optional[List[str]] = None
    highlights: Optional[List[str]] = None


def _not_found(experience_id: str) -> NotFoundError:
    log.info("Experience with ID %s not found", experience_id)
    return NotFoundError(f"Experience with ID {experience_id} not found")


@router.get("", response_model=List[Experience])
def list_experiences(db: Session = Depends(get_db)):
    return ExperienceRepository(db).find_all()


@router.get("/{experience_id}", response_model=Experience)
def get_experience(experience_id: str, db: Session = Depends(get_db)):
    experience = ExperienceRepository(db).find_by_id(experience_id)
    if experience is None:
        raise _not_found(experience_id)
    return experience


@router.post("", response_model=Experience, status_code=status.HTTP_201_CREATED)
def create_experience(
    body: ExperienceIn,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    experience = Experience(id=generate_id(), **body.model_dump())
    created = ExperienceRepository(db).create(experience)
    log.info("Created experience %s at %s", created.id, created.company)
    return created


@router.put("/{experience_id}", response_model=Experience)
def update_experience(
    experience_id: str,
    body: ExperienceUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    repo = ExperienceRepository(db)
    existing = repo.find_by_id(experience_id)
    if existing is None:
        raise _not_found(experience_id)
    return repo.update(experience_id, apply_changes(existing, changes_of(body)))


@router.delete("/{experience_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_experience(
    experience_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    if not ExperienceRepository(db).delete(experience_id):
        raise _not_found(experience_id)
    log.info("Deleted experience %s", experience_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
