# portfolio_api/schemas/portfolio.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ---- Profile ----
class SocialLink(BaseModel):
    title: str
    url: str
    icon: str = ""


class Education(BaseModel):
    degree: str
    institution: str
    period: str = ""


class Language(BaseModel):
    name: str
    level: str = ""


class Profile(BaseModel):
    bio: List[str] = Field(default_factory=list)
    social_links: List[SocialLink] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)


# ---- Skills ----
class Skill(BaseModel):
    id: str
    category: str = Field(..., min_length=1, max_length=120)
    items: List[str] = Field(default_factory=list)


# ---- Experience ----
class Experience(BaseModel):
    id: str
    company: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    start_date: str = Field(..., min_length=1, max_length=20, description="YYYY-MM")
    end_date: Optional[str] = Field(None, max_length=20, description="YYYY-MM, null while current")
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)

    @field_validator("end_date", mode="before")
    @classmethod
    def _blank_end_date_is_current(cls, value):
        # "present" is spelled None, never ""
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---- Blog posts ----
class Post(BaseModel):
    id: str
    title: str = Field(..., min_length=1, max_length=300)
    date: str = Field(..., min_length=1, max_length=20, description="YYYY-MM-DD")
    tags: List[str] = Field(default_factory=list)
    excerpt: str = ""
    content: str = ""


# ---- Projects ----
class Project(BaseModel):
    id: str
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None
    year: int
    highlights: List[str] = Field(default_factory=list)
