# portfolio_api/routes/contact.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.deps import require_admin
from portfolio_api.errors import NotFoundError
from portfolio_api.repositories import ContactRepository, generate_id
from portfolio_api.schemas import ContactIn, ContactMessage, ContactResponse
from portfolio_api.security import Principal

log = logging.getLogger("routes.contact")

router = APIRouter(tags=["Contact"])


@router.post("/contact", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
def submit_contact(body: ContactIn, db: Session = Depends(get_db)):
    message = ContactMessage(
        id=generate_id(),
        name=body.name,
        email=str(body.email),
        message=body.message,
        created_at=datetime.now(timezone.utc).replace(tzinfo=None),
    )
    ContactRepository(db).create(message)
    log.info("Contact message %s received from %s", message.id, message.email)
    return ContactResponse(success=True, message="Message sent successfully", id=message.id)


# ---- Admin inbox ----
@router.get("/admin/messages", response_model=List[ContactMessage])
def list_messages(db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    return ContactRepository(db).find_all()


@router.get("/admin/messages/{message_id}", response_model=ContactMessage)
def get_message(message_id: str, db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    message = ContactRepository(db).find_by_id(message_id)
    if message is None:
        raise NotFoundError(f"Message with ID {message_id} not found")
    return message


@router.delete("/admin/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(message_id: str, db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    if not ContactRepository(db).delete(message_id):
        raise NotFoundError(f"Message with ID {message_id} not found")
    log.info("Contact message %s deleted by %s", message_id, admin.name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
