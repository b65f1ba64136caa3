"""AI generation schemas."""

from typing import Optional

from pydantic import BaseModel

from src.apps.blog.models.post import ContentType
from src.apps.blog.schemas.post import CamelModel


class GenerateRequest(BaseModel):
    """Title to generate text for."""
    title: Optional[str] = None


class DescriptionResponse(CamelModel):
    description: str


class ContentResponse(CamelModel):
    content: str
    content_type: ContentType = ContentType.MARKDOWN
