# File: user_api/api/routes_posts.py

"""
Posts with their authors, read back either by ORM population or by an
explicit join (``?strategy=populate|lookup``).
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from user_api.api.deps import get_db
from user_api.api.responses import success
from user_api.schemas.post import PostCreate
from user_api.services import post_service

router = APIRouter()


@router.get("", summary="List posts with their authors")
def list_posts(strategy: str = "populate", db: Session = Depends(get_db)):
    posts = post_service.list_posts(db, strategy)
    return success(posts, count=len(posts))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a post")
def create_post(payload: PostCreate, db: Session = Depends(get_db)):
    post = post_service.create_post(db, payload)
    return success(post, message="Post created successfully", status_code=status.HTTP_201_CREATED)
