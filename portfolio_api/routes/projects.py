# portfolio_api/routes/projects.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.deps import get_current_principal
from portfolio_api.errors import NotFoundError
from portfolio_api.repositories import ProjectRepository, generate_id
from portfolio_api.schemas import Project
from portfolio_api.security import Principal
from portfolio_api.utils.updates import apply_changes, changes_of

log = logging.getLogger("routes.projects")

router = APIRouter(prefix="/projects", tags=["Projects"])


# ---- Schemas ----
class ProjectIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    technologies: List[str] = []
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None
    year: int
    highlights: List[str] = []


class ProjectUpdate(BaseModel):
    # Partial: omitted fields keep their stored values
    title: Optional[str] = None
    description: Optional[str] = None
    technologies: Optional[List[str]] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None
    year: Optional[int] = None
    highlights: Optional[List[str]] = None


def _not_found(project_id: str) -> NotFoundError:
    log.info("Project with ID %s not found", project_id)
    return NotFoundError(f"Project with ID {project_id} not found")


# ---- Routes ----
@router.get("", response_model=List[Project])
def list_projects(db: Session = Depends(get_db)):
    projects = ProjectRepository(db).find_all()
    log.info("Retrieved %d projects", len(projects))
    return projects


@router.get("/{project_id}", response_model=Project)
def get_project(project_id: str, db: Session = Depends(get_db)):
    project = ProjectRepository(db).find_by_id(project_id)
    if project is None:
        raise _not_found(project_id)
    return project


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectIn,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    project = Project(id=generate_id(), **body.model_dump())
    created = ProjectRepository(db).create(project)
    log.info("Created project %s (by %s)", created.id, principal.name)
    return created


@router.put("/{project_id}", response_model=Project)
def update_project(
    project_id: str,
    body: ProjectUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    repo = ProjectRepository(db)
    existing = repo.find_by_id(project_id)
    if existing is None:
        raise _not_found(project_id)
    updated = repo.update(project_id, apply_changes(existing, changes_of(body)))
    log.info("Updated project %s", project_id)
    return updated


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    if not ProjectRepository(db).delete(project_id):
        raise _not_found(project_id)
    log.info("Deleted project %s", project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
