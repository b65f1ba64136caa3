from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar
from sqlmodel import SQLModel, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

T = TypeVar("T", bound=SQLModel)


class RepositoryError(Exception):
    """Custom exception for repository errors."""

    pass


class BaseRepository(Generic[T]):
    model: Type[T]
    # Column name used to order listings; prefix with "-" for descending
    default_ordering: Optional[str] = None

    def __init__(self, get_session: Callable[..., Any]):
        self.get_session = get_session

    def _handle_db_error(self, error: SQLAlchemyError, operation: str) -> None:
        """Handle database errors and raise appropriate exceptions."""
        if isinstance(error, IntegrityError):
            raise RepositoryError(
                f"Database integrity error during {operation}: {error}"
            ) from error
        else:
            raise RepositoryError(
                f"Database error during {operation}: {error}"
            ) from error

    def _build_select_stmt(self, ordering: Optional[str] = None) -> Any:
        """Build select statement with optional ordering."""
        stmt = select(self.model)

        ordering = ordering or self.default_ordering
        if ordering:
            column = getattr(self.model, ordering.lstrip("-"))
            stmt = stmt.order_by(column.desc() if ordering.startswith("-") else column.asc())
            # Tie-break on id so equal timestamps keep a stable order
            if ordering.lstrip("-") != "id":
                id_column = self.model.id  # type: ignore
                stmt = stmt.order_by(id_column.desc() if ordering.startswith("-") else id_column.asc())

        return stmt

    # ----------------- CRUD ----------------- #
    async def get(self, item_id: Any) -> Optional[T]:
        """Get a single item by ID."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt()
                stmt = stmt.where(self.model.id == item_id)  # type: ignore

                result = await db.exec(stmt)
                return result.first()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get")

    async def list(
        self,
        page: int = 1,
        per_page: int = 10,
        ordering: Optional[str] = None,
    ) -> Dict[str, Any]:  # type:ignore
        """Get one page of items plus paging totals."""
        if page < 1:
            page = 1
        if per_page < 1 or per_page > 100:
            per_page = 10

        async with self.get_session() as db:
            try:
                offset = (page - 1) * per_page

                stmt = self._build_select_stmt(ordering=ordering)

                count_stmt = select(func.count()).select_from(self.model)
                total_result = await db.exec(count_stmt)
                total = total_result.one()

                result = await db.exec(stmt.offset(offset).limit(per_page))
                items = list(result.all())

                pages = (total + per_page - 1) // per_page  # Ceiling division

                return {
                    "items": items,
                    "total": total,
                    "page": page,
                    "per_page": per_page,
                    "pages": pages,
                }
            except SQLAlchemyError as e:
                self._handle_db_error(e, "list")

    async def create(self, obj_in: Dict[str, Any]) -> T:  # type:ignore
        """Create a new item."""
        async with self.get_session() as db:
            try:
                obj = self.model(**obj_in)  # type: ignore
                db.add(obj)
                await db.commit()
                await db.refresh(obj)
                return obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "create")

    async def update(
        self,
        item_id: Any,
        obj_in: Dict[str, Any],
    ) -> Optional[T]:
        """Update an existing item."""
        update_data = dict(obj_in)

        # Remove ID from update data to prevent changing primary key
        update_data.pop("id", None)

        if not update_data:
            raise RepositoryError("No data provided for update")

        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return None

                for key, value in update_data.items():
                    if hasattr(db_obj, key) and key != "id":
                        setattr(db_obj, key, value)

                db.add(db_obj)
                await db.commit()
                await db.refresh(db_obj)
                return db_obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "update")

    async def exists(self, item_id: Any) -> bool:  # type:ignore
        """Check if an item exists."""
        async with self.get_session() as db:
            try:
                stmt = select(self.model.id).where(self.model.id == item_id)  # type: ignore
                result = await db.exec(stmt)
                return result.first() is not None
            except SQLAlchemyError as e:
                self._handle_db_error(e, "exists")

    async def count(self) -> int:  # type:ignore
        """Count all items."""
        async with self.get_session() as db:
            try:
                count_stmt = select(func.count()).select_from(self.model)
                result = await db.exec(count_stmt)
                return result.one()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "count")

    async def delete(self, item_id: Any) -> bool:  # type:ignore
        """Permanently delete the item from DB."""
        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return False

                await db.delete(db_obj)
                await db.commit()
                return True
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "delete")
