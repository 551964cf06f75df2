# File: user_api/schemas/user.py

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from user_api.models.user import (
    AGE_MAX,
    AGE_MIN,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    UserRole,
)
from user_api.schemas.common import UtcDatetime

# \w is ASCII-only here, as in the address rule clients were given
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)


# -----------------------------
# Request bodies
# -----------------------------

class _UserPayload(BaseModel):
    """
    Field rules shared by create and update bodies.

    Strings are trimmed before the length checks run. Unknown keys are
    dropped. Failures are turned into client messages by
    ``user_api.services.validation``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    @field_validator("first_name", "last_name", "email", mode="before", check_fields=False)
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise PydanticCustomError("missing", "Field required")
        return v

    @field_validator("email", check_fields=False)
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.lower()
        if not EMAIL_PATTERN.match(v):
            raise PydanticCustomError("email_format", "Please enter a valid email")
        return v


class UserCreate(_UserPayload):
    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LENGTH)
    age: Optional[int] = Field(None, ge=AGE_MIN, le=AGE_MAX)
    # null falls back to the column default
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserUpdate(_UserPayload):
    first_name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: Optional[str] = Field(None, min_length=1, max_length=EMAIL_MAX_LENGTH)
    # null clears the age; null role / isActive leave the stored value alone
    age: Optional[int] = Field(None, ge=AGE_MIN, le=AGE_MAX)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


# -----------------------------
# Response shapes
# -----------------------------

class _ReadModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserInfo(_ReadModel):
    """Public view of a single user (get / create / update)."""

    id: str
    full_name: str
    email: str
    age: Optional[int] = None
    role: UserRole
    is_active: bool
    created_at: UtcDatetime


class UserDocument(UserInfo):
    """Full stored record plus the derived name (list endpoints)."""

    first_name: str
    last_name: str
    updated_at: UtcDatetime


class UserSummary(_ReadModel):
    """What is echoed back after a delete."""

    id: str
    full_name: str
    email: str
