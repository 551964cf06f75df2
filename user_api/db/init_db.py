"""
Database initialization helpers.

Models are imported so their tables get registered on Base.metadata.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from user_api.models.base import Base
from user_api.models.post import Post
from user_api.models.user import User

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)


def seed_initial_data(db: Session) -> int:
    """
    Insert a demo author and one of their posts into an empty database.

    Returns the number of rows inserted (0 when users already exist).
    """
    existing = db.scalar(select(func.count()).select_from(User))
    if existing:
        logger.info("Skipping seed, %d users already present", existing)
        return 0

    author = User(first_name="Ahtasham", last_name="Khan", email="ahtasham@example.com")
    post = Post(title="My first blog", content="Hello world", author=author)
    db.add_all([author, post])
    db.commit()

    logger.info("Seeded demo user %s and post %s", author.id, post.id)
    return 2
