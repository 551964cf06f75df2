# File: user_api/services/user_service.py

"""
User persistence.

Every function takes the request's SQLAlchemy session. Store errors are
wrapped in ``StoreFailure`` with an operation-specific message; a unique
index violation on commit is reported as ``DuplicateEmail``.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from user_api.core.errors import (
    DuplicateEmail,
    InvalidIdentifier,
    NotFound,
    StoreFailure,
)
from user_api.models.user import User
from user_api.services.query_builder import UserListQuery
from user_api.services.validation import validate_user

logger = logging.getLogger(__name__)


def parse_user_id(raw: str) -> str:
    """Normalize a path identifier to the stored key format (UUID hex)."""
    try:
        return uuid.UUID(raw).hex
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdentifier() from None


def failure_name(exc: SQLAlchemyError) -> str:
    return type(getattr(exc, "orig", None) or exc).__name__


@contextmanager
def store_operation(db: Session, message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s", message)
        # SQL text and bound parameters stay in the log
        raise StoreFailure(message, error=failure_name(exc)) from exc


def _email_taken(db: Session, email: str, exclude_id: Optional[str] = None) -> bool:
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return db.scalar(stmt.limit(1)) is not None


def _commit_user(db: Session, duplicate_message: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        # email is the only unique column besides the primary key
        db.rollback()
        logger.info("Rejected duplicate email at commit")
        raise DuplicateEmail(duplicate_message) from exc


# ----------------------------------------------------
# Reads
# ----------------------------------------------------

def list_users(db: Session, query: UserListQuery) -> Tuple[List[User], int]:
    with store_operation(db, "Error fetching users"):
        users = list(db.scalars(query.select_page()))
        total = db.scalar(select(func.count()).select_from(User).where(query.filter))
    return users, total or 0


def list_active_users(db: Session) -> List[User]:
    with store_operation(db, "Error fetching active users"):
        stmt = (
            select(User)
            .where(User.is_active.is_(True))
            .order_by(User.created_at.desc(), User.id.asc())
        )
        return list(db.scalars(stmt))


def get_user(db: Session, raw_id: str) -> User:
    user_id = parse_user_id(raw_id)
    with store_operation(db, "Error fetching user"):
        user = db.get(User, user_id)
    if user is None:
        raise NotFound()
    return user


# ----------------------------------------------------
# Writes
# ----------------------------------------------------

def create_user(db: Session, payload: Optional[Mapping[str, Any]]) -> User:
    data = validate_user(payload)

    with store_operation(db, "Error creating user"):
        if _email_taken(db, data["email"]):
            logger.info("Rejected duplicate email on create")
            raise DuplicateEmail()

        user = User(**data)
        db.add(user)
        _commit_user(db, DuplicateEmail.default_message)
        db.refresh(user)

    logger.info("Created user %s", user.id)
    return user


def update_user(db: Session, raw_id: str, payload: Optional[Mapping[str, Any]]) -> User:
    user_id = parse_user_id(raw_id)
    data = validate_user(payload, partial=True)

    with store_operation(db, "Error updating user"):
        if "email" in data and _email_taken(db, data["email"], exclude_id=user_id):
            logger.info("Rejected duplicate email on update of %s", user_id)
            raise DuplicateEmail("Email already exists")

        user = db.get(User, user_id)
        if user is None:
            raise NotFound()

        for field, value in data.items():
            setattr(user, field, value)
        _commit_user(db, "Email already exists")
        db.refresh(user)

    logger.info("Updated user %s (%s)", user.id, ", ".join(sorted(data)) or "no changes")
    return user


def delete_user(db: Session, raw_id: str) -> User:
    user_id = parse_user_id(raw_id)

    with store_operation(db, "Error deleting user"):
        user = db.get(User, user_id)
        if user is None:
            raise NotFound()
        db.delete(user)
        db.commit()

    logger.info("Deleted user %s", user_id)
    return user
