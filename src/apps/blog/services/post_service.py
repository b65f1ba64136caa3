"""Post service."""

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from src.core import exceptions
from src.core.bases.base_service import BaseService
from src.core.config import settings
from src.core.response.schemas import ErrorDetail
from src.apps.blog.models.post import DESCRIPTION_MAX_LENGTH, Post
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.schemas.post import PostHTML, PostRead
from src.apps.blog.services import render_service

LIST_EXCERPT_LENGTH = 180


class PostService(BaseService[Post]):
    """Post service class."""

    def __init__(
        self,
        repository: PostRepository,
        now: Optional[Callable[[], datetime]] = None,
    ):
        super().__init__(repository)
        self.now = now or settings.get_now

    def _serialize(self, item: Post) -> PostRead:
        read = PostRead.model_validate(item)
        read.excerpt = render_service.excerpt(item.content, LIST_EXCERPT_LENGTH)
        return read

    async def _before_create(self, create_data: Dict[str, Any]) -> Dict[str, Any]:
        """Derive a missing description and stamp both timestamps."""
        if not create_data.get("description"):
            derived = render_service.excerpt(
                create_data.get("content"), DESCRIPTION_MAX_LENGTH
            )
            create_data["description"] = derived or create_data["title"]

        now = self.now()
        create_data["created_at"] = now
        create_data["updated_at"] = now
        return create_data

    async def _validate_update(
        self,
        item_id: Any,
        update_data: Dict[str, Any],
        existing_item: Post
    ) -> None:
        """Reject updates that change nothing."""
        if not update_data:
            raise exceptions.ValidationException(
                "No data provided for update",
                [ErrorDetail(code="EMPTY_UPDATE", message="At least one field is required")],
            )

    async def _before_update(
        self, update_data: Dict[str, Any], existing_item: Post
    ) -> Dict[str, Any]:
        now = self.now()
        created_at = existing_item.created_at
        # SQLite hands back naive datetimes; compare on equal footing
        if created_at.tzinfo is None and now.tzinfo is not None:
            created_at = created_at.replace(tzinfo=now.tzinfo)
        update_data["updated_at"] = max(now, created_at)
        return update_data

    async def render(self, item_id: Any) -> Dict[str, Any]:
        """Render the stored body of a post to HTML."""
        post = await self._get_or_404(item_id)
        html = render_service.render_content(post.content, post.content_type, post.title)
        return {
            "data": PostHTML(
                id=post.id,  # type: ignore
                title=post.title,
                content_type=post.content_type,
                html=html,
            ),
            "message": "Post rendered successfully",
        }
