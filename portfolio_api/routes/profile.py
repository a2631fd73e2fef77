# portfolio_api/routes/profile.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.deps import get_current_principal
from portfolio_api.repositories import ProfileRepository
from portfolio_api.schemas import Education, Language, Profile, SocialLink
from portfolio_api.security import Principal
from portfolio_api.utils.updates import apply_changes, changes_of

log = logging.getLogger("routes.profile")

router = APIRouter(prefix="/profile", tags=["Profile"])


# ---- Schemas ----
class ProfileUpdate(BaseModel):
    bio: Optional[List[str]] = None
    social_links: Optional[List[SocialLink]] = None
    education: Optional[List[Education]] = None
    languages: Optional[List[Language]] = None


# ---- Routes ----
@router.get("", response_model=Profile)
def read_profile(db: Session = Depends(get_db)):
    profile = ProfileRepository(db).get()
    if profile is None:
        # Nothing saved yet; the first PUT creates the row
        return Profile()
    return profile


@router.put("", response_model=Profile)
def upsert_profile(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    repo = ProfileRepository(db)
    current = repo.get() or Profile()
    saved = repo.save(apply_changes(current, changes_of(body)))
    log.info("Profile updated by %s", principal.name)
    return saved
