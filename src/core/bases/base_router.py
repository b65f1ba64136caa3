from typing import Callable, List, Optional, Type
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.core.bases.base_service import BaseService
from src.core.response.handlers import success_response, paginated_response, error_response
from src.core import exceptions


class BaseRouter:
    """Base router class with automatic CRUD endpoints.

    The service is resolved per request through ``service_dependency`` so
    routers never hold on to a database handle themselves.
    """

    def __init__(
        self,
        service_dependency: Callable[..., BaseService],
        tags: Optional[List[str]] = None,
        prefix: str = "",
        create_schema: Optional[Type[BaseModel]] = None,
        update_schema: Optional[Type[BaseModel]] = None,
        dependencies: Optional[List[Callable]] = None
    ):
        self.service_dependency = service_dependency
        self.tags = tags or [self.__class__.__name__.replace("Router", "")]
        self.prefix = prefix
        self.create_schema = create_schema
        self.update_schema = update_schema

        # Create router
        self.router = APIRouter(
            prefix=self.prefix,
            tags=self.tags, #type:ignore
            dependencies=[Depends(dep) for dep in dependencies or []]
        )

        # Register routes
        self._register_routes()

    def _register_routes(self) -> None:
        """Register all CRUD routes."""
        # Static paths first so they are not captured by /{item_id}
        self._register_count()
        self._register_list()
        self._register_create()
        self._register_get_by_id()
        self._register_exists()
        self._register_update()
        self._register_delete()

    @staticmethod
    def handle_service_error(error: exceptions.ServiceException) -> JSONResponse:
        """Translate a service exception into an error envelope."""
        if isinstance(error, exceptions.NotFoundException):
            return error_response(
                error_code="NOT_FOUND",
                message=str(error.detail),
                status_code=status.HTTP_404_NOT_FOUND
            )
        if isinstance(error, exceptions.ValidationException):
            return error_response(
                error_code="VALIDATION_ERROR",
                message=str(error.detail),
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                details=[detail.model_dump() for detail in error.error_details]
            )
        if isinstance(error, exceptions.BadRequestException):
            return error_response(
                error_code="BAD_REQUEST",
                message=str(error.detail),
                status_code=status.HTTP_400_BAD_REQUEST
            )
        return error_response(
            error_code="SERVICE_ERROR",
            message=str(error.detail),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    def _register_get_by_id(self) -> None:
        """Register GET /{item_id} route."""
        @self.router.get(
            "/{item_id}",
            summary="Get item by ID",
            responses={
                200: {"description": "Item retrieved successfully"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"}
            }
        )
        async def get_by_id(
            item_id: int,
            service: BaseService = Depends(self.service_dependency)
        ):
            try:
                result = await service.get_by_id(item_id=item_id)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)

    def _register_list(self) -> None:
        """Register GET / route with pagination."""
        @self.router.get(
            "/",
            summary="List items",
            responses={
                200: {"description": "Items retrieved successfully"},
                500: {"description": "Internal server error"}
            }
        )
        async def list_items(
            page: int = Query(1, ge=1, description="Page number"),
            per_page: int = Query(10, ge=1, le=100, description="Items per page"),
            service: BaseService = Depends(self.service_dependency)
        ):
            try:
                result = await service.get_list(page=page, per_page=per_page)
                return paginated_response(
                    items=result["items"],
                    total=result["total"],
                    page=result["page"],
                    per_page=result["per_page"],
                    pages=result["pages"],
                    message=result["message"]
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)

    def _register_create(self) -> None:
        """Register POST / route."""
        if not self.create_schema:
            return

        create_schema = self.create_schema

        @self.router.post(
            "/",
            status_code=status.HTTP_201_CREATED,
            summary="Create new item",
            responses={
                201: {"description": "Item created successfully"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def create_item(
            item_data: create_schema,  # type: ignore
            service: BaseService = Depends(self.service_dependency)
        ):
            try:
                result = await service.create(item_data)
                return success_response(
                    data=result["data"],
                    message=result["message"],
                    status_code=status.HTTP_201_CREATED
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)

    def _register_update(self) -> None:
        """Register PUT /{item_id} route."""
        if not self.update_schema:
            return

        update_schema = self.update_schema

        @self.router.put(
            "/{item_id}",
            summary="Update item",
            responses={
                200: {"description": "Item updated successfully"},
                404: {"description": "Item not found"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def update_item(
            item_id: int,
            item_data: update_schema,  # type: ignore
            service: BaseService = Depends(self.service_dependency)
        ):
            try:
                result = await service.update(item_id, item_data)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)

    def _register_delete(self) -> None:
        """Register DELETE /{item_id} route (permanent delete)."""
        @self.router.delete(
            "/{item_id}",
            summary="Delete item",
            responses={
                200: {"description": "Item deleted successfully"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"}
            }
        )
        async def delete_item(
            item_id: int,
            service: BaseService = Depends(self.service_dependency)
        ):
            try:
                result = await service.delete(item_id)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)

    def _register_count(self) -> None:
        """Register GET /count route."""
        @self.router.get(
            "/count",
            summary="Count items",
            responses={
                200: {"description": "Count retrieved successfully"},
                500: {"description": "Internal server error"}
            }
        )
        async def count_items(
            service: BaseService = Depends(self.service_dependency)
        ):
            try:
                result = await service.count()
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)

    def _register_exists(self) -> None:
        """Register GET /{item_id}/exists route."""
        @self.router.get(
            "/{item_id}/exists",
            summary="Check if item exists",
            responses={
                200: {"description": "Existence check completed"},
                500: {"description": "Internal server error"}
            }
        )
        async def check_exists(
            item_id: int,
            service: BaseService = Depends(self.service_dependency)
        ):
            try:
                result = await service.exists(item_id=item_id)
                return success_response(
                    data=result["data"],
                    message=result["message"]
                )
            except exceptions.ServiceException as e:
                return self.handle_service_error(e)

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router
