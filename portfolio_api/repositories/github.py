# portfolio_api/repositories/github.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from portfolio_api import models
from portfolio_api.repositories.base import SingletonRepository, decode_json, encode_json, guarded
from portfolio_api.schemas import GitHubProfile, GithubStats

log = logging.getLogger("repositories.github")


def utcnow() -> datetime:
    # Stored naive; SQLite drops the offset anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GithubStatsRepository(SingletonRepository[GithubStats]):
    model = models.GithubStats
    entity = GithubStats
    json_fields = {"top_languages": [], "recent_activity": []}


class GithubProfileRepository:
    """Stores the aggregated GitHub profile as one JSON document."""

    key = "primary"

    def __init__(self, db):
        self.db = db

    def _row(self) -> Optional[models.GithubProfileSnapshot]:
        with guarded(self.db, "github_profiles", "read"):
            return self.db.query(models.GithubProfileSnapshot).filter(
                models.GithubProfileSnapshot.id == self.key
            ).first()

    def load_fresh(self, max_age_seconds: int, now: Optional[datetime] = None) -> Optional[GitHubProfile]:
        """Return the stored profile if it is younger than `max_age_seconds`."""
        row = self._row()
        if row is None:
            return None
        now = now or utcnow()
        if now - row.last_updated >= timedelta(seconds=max_age_seconds):
            return None
        try:
            return GitHubProfile.model_validate(decode_json(row.data))
        except (ValueError, PydanticValidationError) as exc:
            log.warning("Unreadable github_profiles.data (%s); treating cache as empty", exc)
            return None

    def store(self, profile: GitHubProfile, now: Optional[datetime] = None) -> GitHubProfile:
        now = now or utcnow()
        row = self._row()
        if row is None:
            row = models.GithubProfileSnapshot(id=self.key)
        row.data = encode_json(profile)
        row.last_updated = now
        with guarded(self.db, "github_profiles", "store"):
            self.db.add(row)
            self.db.commit()
        return profile
