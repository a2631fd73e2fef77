# portfolio_api/routes/health.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio_api import config
from portfolio_api.database import get_db, ping

log = logging.getLogger("routes.health")

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        database = ping(db)
    except SQLAlchemyError as exc:
        log.warning("Database ping failed: %s", exc)
        database = False
    return {
        "status": "ok" if database else "degraded",
        "version": config.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
    }
