# File: user_api/services/post_service.py

"""
Posts and their authors.

Two ways of reading a post together with the user it references:

* ``populate`` lets the ORM follow ``Post.author`` (batched with
  ``selectinload``), the same way an ODM would populate a reference.
* ``lookup`` does the join by hand: one outer join from posts to users on
  ``posts.author_id = users.id``, shaping the joined rows itself.

Both produce identical ``PostRead`` objects.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from user_api.core.errors import InvalidParameter, NotFound
from user_api.models.post import Post
from user_api.models.user import User, full_name
from user_api.schemas.post import PostCreate, PostRead
from user_api.schemas.user import UserSummary
from user_api.services.user_service import parse_user_id, store_operation

logger = logging.getLogger(__name__)

STRATEGIES = ("populate", "lookup")


def create_post(db: Session, payload: PostCreate) -> PostRead:
    author_id = parse_user_id(payload.author)

    with store_operation(db, "Error creating post"):
        author = db.get(User, author_id)
        if author is None:
            raise NotFound("Author not found")

        post = Post(title=payload.title, content=payload.content, author=author)
        db.add(post)
        db.commit()
        db.refresh(post)

    logger.info("Created post %s by %s", post.id, author_id)
    return _shape_populated(post)


def list_posts(db: Session, strategy: str = "populate") -> List[PostRead]:
    if strategy not in STRATEGIES:
        raise InvalidParameter(f"'strategy' must be one of: {', '.join(STRATEGIES)}")

    with store_operation(db, "Error fetching posts"):
        if strategy == "lookup":
            return _list_with_lookup(db)
        return _list_with_populate(db)


def _shape_populated(post: Post) -> PostRead:
    author = None
    if post.author is not None:
        author = UserSummary.model_validate(post.author)
    return PostRead(
        id=post.id,
        title=post.title,
        content=post.content,
        author=author,
        created_at=post.created_at,
    )


def _list_with_populate(db: Session) -> List[PostRead]:
    stmt = (
        select(Post)
        .options(selectinload(Post.author))
        .order_by(Post.created_at.desc(), Post.id.asc())
    )
    return [_shape_populated(post) for post in db.scalars(stmt)]


def _list_with_lookup(db: Session) -> List[PostRead]:
    stmt = (
        select(
            Post.id,
            Post.title,
            Post.content,
            Post.created_at,
            User.id.label("author_id"),
            User.first_name,
            User.last_name,
            User.email,
        )
        .outerjoin(User, Post.author_id == User.id)
        .order_by(Post.created_at.desc(), Post.id.asc())
    )

    posts = []
    for row in db.execute(stmt):
        author = None
        if row.author_id is not None:
            author = UserSummary(
                id=row.author_id,
                full_name=full_name(row.first_name, row.last_name),
                email=row.email,
            )
        posts.append(
            PostRead(
                id=row.id,
                title=row.title,
                content=row.content,
                author=author,
                created_at=row.created_at,
            )
        )
    return posts
