# portfolio_api/models.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func as sa_func

from portfolio_api.database import Base

# Composite fields (lists / nested objects) are stored as JSON text and
# encoded/decoded by the repositories, not by the column type.


class _Timestamps:
    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())


# =======================
# Profile (singleton)
# =======================
class Profile(_Timestamps, Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)
    bio = Column(Text, nullable=False, default="[]")
    social_links = Column(Text, nullable=False, default="[]")
    education = Column(Text, nullable=False, default="[]")
    languages = Column(Text, nullable=False, default="[]")

    def __repr__(self) -> str:
        return f"<Profile id={self.id!r}>"


# =======================
# Skill model
# =======================
class Skill(_Timestamps, Base):
    __tablename__ = "skills"

    id = Column(String(64), primary_key=True)
    category = Column(String(120), nullable=False, unique=True, index=True)
    items = Column(Text, nullable=False, default="[]")

    def __repr__(self) -> str:
        return f"<Skill id={self.id!r} category={self.category!r}>"


# =======================
# Experience model
# =======================
class Experience(_Timestamps, Base):
    __tablename__ = "experiences"

    id = Column(String(64), primary_key=True)
    company = Column(String(200), nullable=False)
    position = Column(String(200), nullable=False)
    start_date = Column(String(20), nullable=False, index=True)
    end_date = Column(String(20), nullable=True)     # NULL = current position
    description = Column(Text, nullable=False, default="")
    technologies = Column(Text, nullable=False, default="[]")
    highlights = Column(Text, nullable=False, default="[]")

    def __repr__(self) -> str:
        return f"<Experience id={self.id!r} company={self.company!r}>"


# =======================
# Post model
# =======================
class Post(_Timestamps, Base):
    __tablename__ = "posts"

    id = Column(String(64), primary_key=True)
    title = Column(String(300), nullable=False)
    date = Column(String(20), nullable=False, index=True)
    tags = Column(Text, nullable=False, default="[]")
    excerpt = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Post id={self.id!r} title={self.title!r}>"


# =======================
# Project model
# =======================
class Project(_Timestamps, Base):
    __tablename__ = "projects"

    id = Column(String(64), primary_key=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False, default="")
    technologies = Column(Text, nullable=False, default="[]")
    github_url = Column(String(500), nullable=True)
    live_url = Column(String(500), nullable=True)
    image_url = Column(String(500), nullable=True)
    image_urls = Column(Text, nullable=True)
    year = Column(Integer, nullable=False, index=True)
    highlights = Column(Text, nullable=False, default="[]")

    def __repr__(self) -> str:
        return f"<Project id={self.id!r} title={self.title!r} year={self.year}>"


# =======================
# GitHub stats (singleton)
# =======================
class GithubStats(_Timestamps, Base):
    __tablename__ = "github_stats"

    id = Column(String(64), primary_key=True)
    username = Column(String(100), nullable=False)
    repo_count = Column(Integer, nullable=False, default=0)
    followers = Column(Integer, nullable=False, default=0)
    contributions = Column(Integer, nullable=False, default=0)
    top_languages = Column(Text, nullable=False, default="[]")
    recent_activity = Column(Text, nullable=False, default="[]")

    def __repr__(self) -> str:
        return f"<GithubStats id={self.id!r} username={self.username!r}>"


# =======================
# GitHub profile document cache
# =======================
class GithubProfileSnapshot(_Timestamps, Base):
    __tablename__ = "github_profiles"

    id = Column(String(64), primary_key=True)
    data = Column(Text, nullable=False)
    last_updated = Column(DateTime, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<GithubProfileSnapshot id={self.id!r} last_updated={self.last_updated}>"


# =======================
# Contact message model
# =======================
class ContactMessage(_Timestamps, Base):
    __tablename__ = "contacts"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<ContactMessage id={self.id!r} email={self.email!r}>"
