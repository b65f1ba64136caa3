"""Post schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.apps.blog.models.post import (
    CONTENT_MAX_LENGTH,
    DEFAULT_AUTHOR,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ContentType,
)


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _require_text(value: Optional[str]) -> Optional[str]:
    # Body text keeps its whitespace; it only has to contain something
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class CamelModel(BaseModel):
    """Accept camelCase or snake_case input and emit camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PostCreate(CamelModel):
    """Schema for creating a post."""
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)
    content_type: ContentType = ContentType.MARKDOWN
    author: str = DEFAULT_AUTHOR

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("description")
    @classmethod
    def blank_description_is_missing(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        return _require_text(value)  # type: ignore

    @field_validator("author", mode="before")
    @classmethod
    def default_author(cls, value: Optional[str]) -> str:
        value = _strip(value)
        if not value:
            return DEFAULT_AUTHOR
        return value


class PostUpdate(CamelModel):
    """Schema for updating a post."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(
        default=None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH
    )
    content: Optional[str] = Field(default=None, min_length=1, max_length=CONTENT_MAX_LENGTH)
    content_type: Optional[ContentType] = None
    author: Optional[str] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _require_text(value)

    @field_validator("author", mode="before")
    @classmethod
    def default_author(cls, value: Optional[str]) -> Optional[str]:
        value = _strip(value)
        if value is not None and not value:
            return DEFAULT_AUTHOR
        return value


class PostRead(CamelModel):
    """Post as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    content: str
    content_type: ContentType
    author: str
    excerpt: str = ""
    created_at: datetime
    updated_at: datetime


class PostHTML(CamelModel):
    """Rendered post body."""
    id: int
    title: str
    content_type: ContentType
    html: str
