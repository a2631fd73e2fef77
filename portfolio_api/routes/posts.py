# portfolio_api/routes/posts.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.deps import get_current_principal
from portfolio_api.errors import NotFoundError
from portfolio_api.repositories import PostRepository, generate_id
from portfolio_api.schemas import Post
from portfolio_api.security import Principal
from portfolio_api.utils.updates import apply_changes, changes_of

log = logging.getLogger("routes.posts")

router = APIRouter(prefix="/posts", tags=["Posts"])


class PostIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    date: str = Field(..., min_length=1, max_length=20, description="YYYY-MM-DD")
    tags: List[str] = []
    excerpt: str = ""
    content: str = ""


class PostUpdate(BaseModel):
    title: Optional[str] = None
    date: Optional[str] = None
    tags: Optional[List[str]] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None


def _not_found(post_id: str) -> NotFoundError:
    log.info("Post with ID %s not found", post_id)
    return NotFoundError(f"Post with ID {post_id} not found")


@router.get("", response_model=List[Post])
def list_posts(
    tag: Optional[str] = Query(None, description="Only posts carrying this tag (case-insensitive)"),
    db: Session = Depends(get_db),
):
    posts = PostRepository(db).find_all()
    if tag:
        wanted = tag.strip().lower()
        posts = [p for p in posts if any(t.lower() == wanted for t in p.tags)]
    return posts


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: str, db: Session = Depends(get_db)):
    post = PostRepository(db).find_by_id(post_id)
    if post is None:
        raise _not_found(post_id)
    return post


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostIn,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    post = Post(id=generate_id(), **body.model_dump())
    created = PostRepository(db).create(post)
    log.info("Created post %s", created.id)
    return created


@router.put("/{post_id}", response_model=Post)
def update_post(
    post_id: str,
    body: PostUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    repo = PostRepository(db)
    existing = repo.find_by_id(post_id)
    if existing is None:
        raise _not_found(post_id)
    return repo.update(post_id, apply_changes(existing, changes_of(body)))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    if not PostRepository(db).delete(post_id):
        raise _not_found(post_id)
    log.info("Deleted post %s", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
