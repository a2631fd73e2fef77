# portfolio_api/schemas/contact.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactMessage(BaseModel):
    id: str
    name: str
    email: str
    message: str
    created_at: datetime


class ContactIn(BaseModel):
    """Public contact form submission."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=5000)


class ContactResponse(BaseModel):
    success: bool
    message: str
    id: str | None = None
