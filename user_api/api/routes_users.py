# File: user_api/api/routes_users.py

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from user_api.api.deps import get_app_settings, get_db
from user_api.api.responses import success
from user_api.core.config import Settings
from user_api.schemas.common import Pagination
from user_api.schemas.user import UserDocument, UserInfo, UserSummary
from user_api.services import user_service
from user_api.services.query_builder import build_user_query, total_pages

router = APIRouter()


@router.get("", summary="List users")
def list_users(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Paginated, searchable, sortable user listing.

    GET /api/users?page=1&limit=10&sort=createdAt&order=desc&search=khan
    """
    query = build_user_query(
        page=page,
        limit=limit,
        sort=sort,
        order=order,
        search=search,
        max_limit=settings.max_page_limit,
    )
    users, total = user_service.list_users(db, query)

    return success(
        [UserDocument.model_validate(user) for user in users],
        pagination=Pagination(
            current_page=query.page,
            total_pages=total_pages(total, query.limit),
            total_items=total,
            items_per_page=query.limit,
        ),
    )


# Registered before /{user_id} so "active" is not taken for an id
@router.get("/active", summary="List active users")
def list_active_users(db: Session = Depends(get_db)):
    users = user_service.list_active_users(db)
    return success(
        [UserDocument.model_validate(user) for user in users],
        count=len(users),
    )


@router.get("/{user_id}", summary="Get a user")
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    return success(UserInfo.model_validate(user))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a user")
def create_user(
    payload: Optional[dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
):
    """
    The body is checked as a whole by the validation layer, so an empty or
    partial body reports every missing field.
    """
    user = user_service.create_user(db, payload)
    return success(
        UserInfo.model_validate(user),
        message="User created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{user_id}", summary="Update a user")
def update_user(
    user_id: str,
    payload: Optional[dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
):
    """
    Partial update: fields left out of the body keep their current values.
    """
    user = user_service.update_user(db, user_id, payload)
    return success(UserInfo.model_validate(user), message="User updated successfully")


@router.delete("/{user_id}", summary="Delete a user")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    user = user_service.delete_user(db, user_id)
    return success(UserSummary.model_validate(user), message="User deleted successfully")
