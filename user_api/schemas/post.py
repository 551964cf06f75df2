# File: user_api/schemas/post.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from user_api.schemas.common import UtcDatetime
from user_api.schemas.user import UserSummary


class PostCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., max_length=200)
    content: Optional[str] = None
    author: str

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v


class PostRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    content: Optional[str] = None
    author: Optional[UserSummary] = None
    created_at: UtcDatetime
