# File: user_api/services/query_builder.py

"""
Turns raw list-query parameters into a filter, an ordering and a page window.

Parameters arrive as untouched query strings so that malformed values are
rejected with ``InvalidParameter`` instead of being coerced.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import ColumnElement, Select, or_, select, true

from user_api.core.errors import InvalidParameter
from user_api.models.user import User

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT = "createdAt"
DEFAULT_ORDER = "desc"

# Public (camelCase) field name -> column
SORTABLE_FIELDS = {
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
    "firstName": User.first_name,
    "lastName": User.last_name,
    "email": User.email,
    "age": User.age,
    "role": User.role,
    "isActive": User.is_active,
}

_LIKE_ESCAPE = "\\"

_DIGITS = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class UserListQuery:
    filter: ColumnElement[bool]
    order_by: tuple
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def select_page(self) -> Select:
        return (
            select(User)
            .where(self.filter)
            .order_by(*self.order_by)
            .offset(self.skip)
            .limit(self.limit)
        )


def parse_positive_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    text = raw.strip()
    # plain ASCII digits only: no sign, underscores or other scripts
    if not _DIGITS.fullmatch(text) or int(text) < 1:
        raise InvalidParameter(f"'{name}' must be a positive integer")
    return int(text)


def _escape_like(text: str) -> str:
    return (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def search_filter(search: Optional[str]) -> ColumnElement[bool]:
    """Case-insensitive substring match on first name, last name or email."""
    if not search:
        return true()

    pattern = f"%{_escape_like(search)}%"
    return or_(
        User.first_name.ilike(pattern, escape=_LIKE_ESCAPE),
        User.last_name.ilike(pattern, escape=_LIKE_ESCAPE),
        User.email.ilike(pattern, escape=_LIKE_ESCAPE),
    )


def sort_clause(sort: Optional[str], order: Optional[str]) -> tuple:
    field = sort or DEFAULT_SORT
    column = SORTABLE_FIELDS.get(field)
    if column is None:
        allowed = ", ".join(SORTABLE_FIELDS)
        raise InvalidParameter(f"Cannot sort by '{field}'; expected one of: {allowed}")

    direction = column.desc() if (order or DEFAULT_ORDER) == "desc" else column.asc()
    # id keeps pages stable when the sort column has ties
    return (direction, User.id.asc())


def build_user_query(
    *,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    search: Optional[str] = None,
    max_limit: Optional[int] = None,
) -> UserListQuery:
    page_number = parse_positive_int(page, "page", DEFAULT_PAGE)
    page_size = parse_positive_int(limit, "limit", DEFAULT_LIMIT)
    if max_limit is not None and page_size > max_limit:
        raise InvalidParameter(f"'limit' cannot be more than {max_limit}")

    return UserListQuery(
        filter=search_filter(search),
        order_by=sort_clause(sort, order),
        page=page_number,
        limit=page_size,
    )


def total_pages(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit)
