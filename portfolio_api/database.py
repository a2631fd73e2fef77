# portfolio_api/database.py
from sqlalchemy import create_engine, text
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from portfolio_api.config import DATABASE_URL, SQL_ECHO

url = make_url(DATABASE_URL)

connect_args = {}
engine_kwargs = {}
# Required for SQLite when used with FastAPI/threads
if url.drivername.startswith("sqlite"):
    connect_args["check_same_thread"] = False
    # An in-memory database only lives as long as its single connection
    if url.database in (None, "", ":memory:"):
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(
    DATABASE_URL,
    echo=SQL_ECHO,
    connect_args=connect_args,
    pool_pre_ping=True,  # avoid stale connections on resume
    **engine_kwargs,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """Session factory for work that outlives the request (background refresh)."""
    return SessionLocal


def ping(db) -> bool:
    db.execute(text("SELECT 1"))
    return True
