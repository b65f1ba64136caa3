from typing import Any, Dict, Generic, Optional, TypeVar, Union

from pydantic import BaseModel
from sqlmodel import SQLModel

from src.core import exceptions
from src.core.bases.base_repository import BaseRepository, RepositoryError
from src.core.logger import get_logger

T = TypeVar("T", bound=SQLModel)

logger = get_logger(__name__)


class BaseService(Generic[T]):
    """Business layer on top of a repository.

    Every public method returns a plain dict with the payload and a
    human-readable message; routers turn that into a response envelope.
    Subclasses hook validation in through the ``_validate_*`` methods and
    shape outgoing items through ``_serialize``.
    """

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    @property
    def model_name(self) -> str:
        return self.repository.model.__name__

    # ----------------- hooks ----------------- #
    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        """Validate data before creation."""
        pass

    async def _validate_update(
        self, item_id: Any, update_data: Dict[str, Any], existing_item: T
    ) -> None:
        """Validate data before update."""
        pass

    async def _validate_delete(self, item_id: Any, existing_item: T) -> None:
        """Validate before delete."""
        pass

    async def _before_create(self, create_data: Dict[str, Any]) -> Dict[str, Any]:
        """Fill in derived fields before the item is stored."""
        return create_data

    async def _before_update(
        self, update_data: Dict[str, Any], existing_item: T
    ) -> Dict[str, Any]:
        """Fill in derived fields before changes are stored."""
        return update_data

    def _serialize(self, item: T) -> Any:
        return item

    # ----------------- helpers ----------------- #
    def _raise_service_error(self, error: RepositoryError, operation: str):
        logger.error(f"❌ {self.model_name} {operation} failed: {error}")
        raise exceptions.ServiceException(
            f"Could not {operation} {self.model_name.lower()}"
        ) from error

    async def _get_or_404(self, item_id: Any) -> T:
        try:
            item = await self.repository.get(item_id)
        except RepositoryError as e:
            self._raise_service_error(e, "get")
        if item is None:
            raise exceptions.NotFoundException(
                f"{self.model_name} with id {item_id} not found"
            )
        return item

    @staticmethod
    def _to_dict(data: Union[Dict[str, Any], BaseModel]) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True, exclude_none=True)
        return {key: value for key, value in data.items() if value is not None}

    # ----------------- operations ----------------- #
    async def get_by_id(self, item_id: Any) -> Dict[str, Any]:
        item = await self._get_or_404(item_id)
        return {
            "data": self._serialize(item),
            "message": f"{self.model_name} retrieved successfully",
        }

    async def get_list(
        self, page: int = 1, per_page: int = 10, ordering: Optional[str] = None
    ) -> Dict[str, Any]:
        try:
            result = await self.repository.list(
                page=page, per_page=per_page, ordering=ordering
            )
        except RepositoryError as e:
            self._raise_service_error(e, "list")
        result["items"] = [self._serialize(item) for item in result["items"]]
        result["message"] = f"{self.model_name} items retrieved successfully"
        return result

    async def create(self, data: Union[Dict[str, Any], BaseModel]) -> Dict[str, Any]:
        create_data = self._to_dict(data)
        await self._validate_create(create_data)
        create_data = await self._before_create(create_data)
        try:
            item = await self.repository.create(create_data)
        except RepositoryError as e:
            self._raise_service_error(e, "create")
        logger.info(f"📝 Created {self.model_name} {item.id}")  # type: ignore
        return {
            "data": self._serialize(item),
            "message": f"{self.model_name} created successfully",
        }

    async def update(
        self, item_id: Any, data: Union[Dict[str, Any], BaseModel]
    ) -> Dict[str, Any]:
        update_data = self._to_dict(data)
        existing = await self._get_or_404(item_id)
        await self._validate_update(item_id, update_data, existing)
        update_data = await self._before_update(update_data, existing)
        try:
            item = await self.repository.update(item_id, update_data)
        except RepositoryError as e:
            self._raise_service_error(e, "update")
        if item is None:
            raise exceptions.NotFoundException(
                f"{self.model_name} with id {item_id} not found"
            )
        logger.info(f"✏️ Updated {self.model_name} {item_id}")
        return {
            "data": self._serialize(item),
            "message": f"{self.model_name} updated successfully",
        }

    async def delete(self, item_id: Any) -> Dict[str, Any]:
        existing = await self._get_or_404(item_id)
        await self._validate_delete(item_id, existing)
        try:
            deleted = await self.repository.delete(item_id)
        except RepositoryError as e:
            self._raise_service_error(e, "delete")
        if not deleted:
            raise exceptions.NotFoundException(
                f"{self.model_name} with id {item_id} not found"
            )
        logger.info(f"🗑️ Deleted {self.model_name} {item_id}")
        return {
            "data": {"id": item_id},
            "message": f"{self.model_name} deleted successfully",
        }

    async def count(self) -> Dict[str, Any]:
        try:
            total = await self.repository.count()
        except RepositoryError as e:
            self._raise_service_error(e, "count")
        return {"data": {"count": total}, "message": "Count retrieved successfully"}

    async def exists(self, item_id: Any) -> Dict[str, Any]:
        try:
            found = await self.repository.exists(item_id)
        except RepositoryError as e:
            self._raise_service_error(e, "check")
        return {"data": {"exists": found}, "message": "Existence check completed"}
