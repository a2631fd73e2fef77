# portfolio_api/repositories/contact.py
from __future__ import annotations

from portfolio_api import models
from portfolio_api.errors import BadRequestError
from portfolio_api.repositories.base import SqlRepository
from portfolio_api.schemas import ContactMessage


class ContactRepository(SqlRepository[ContactMessage]):
    """Contact messages are append-only: create, read and delete."""

    model = models.ContactMessage
    entity = ContactMessage
    order_by = (models.ContactMessage.created_at.desc(),)

    def update(self, id: str, entity: ContactMessage) -> ContactMessage:
        raise BadRequestError("contact messages cannot be edited")
