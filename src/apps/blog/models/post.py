"""Post model."""

from enum import Enum

from sqlmodel import Field, Text
from src.core.database import BaseModel

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500
CONTENT_MAX_LENGTH = 50_000
DEFAULT_AUTHOR = "Anonymous"


class ContentType(str, Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    PLAIN = "plain"


class Post(BaseModel, table=True):
    """Post model class."""

    __tablename__ = "blog_posts"  # type: ignore
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    content: str = Field(sa_type=Text)  # type: ignore
    content_type: ContentType = Field(default=ContentType.MARKDOWN)
    author: str = Field(default=DEFAULT_AUTHOR)
