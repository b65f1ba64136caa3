"""Post router."""

from fastapi import Depends

from src.core import exceptions
from src.core.bases.base_router import BaseRouter
from src.core.response.handlers import success_response
from src.apps.blog.dependencies import get_post_service
from src.apps.blog.schemas.post import PostCreate, PostUpdate
from src.apps.blog.services.post_service import PostService


class PostRouter(BaseRouter):
    """Post router class."""

    def __init__(self):
        super().__init__(
            service_dependency=get_post_service,
            create_schema=PostCreate,
            update_schema=PostUpdate,
            prefix="/api/blogs",
            tags=["Blogs"]
        )

    def _register_routes(self) -> None:
        super()._register_routes()
        self._register_render()

    def _register_render(self) -> None:
        """Register GET /{item_id}/html route."""
        @self.router.get(
            "/{item_id}/html",
            summary="Render post body as HTML",
            responses={
                200: {"description": "Post rendered successfully"},
                404: {"description": "Item not found"}
            }
        )
        async def render_post(
            item_id: int,
            service: PostService = Depends(self.service_dependency)
        ):
            try:
                result = await service.render(item_id)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)


# Router instance
router = PostRouter().get_router()
