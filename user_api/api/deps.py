# File: user_api/api/deps.py

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from user_api.core.config import Settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    The session factory is built by ``create_application`` and kept on
    ``app.state``, so tests can hand the app their own engine.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
