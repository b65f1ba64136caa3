from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import DateTime, Field, SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.core.config import settings


class Database:
    """Async engine handle owned by the application lifespan."""

    def __init__(self, db_url: str, echo: bool = False):
        self.url = db_url
        self.engine = create_async_engine(db_url, echo=echo, future=True)

    async def connect(self):
        async with self.get_session() as session:
            await session.exec(select(1))

    async def create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def disconnect(self):
        await self.engine.dispose()

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, Any]:
        async with AsyncSession(self.engine, expire_on_commit=False) as session:
            yield session


class BaseModel(SQLModel):
    """Base model with common fields."""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=settings.get_now,
        sa_type=DateTime(timezone=True),  # type: ignore
        nullable=False,
    )
    updated_at: datetime = Field(
        default_factory=settings.get_now,
        sa_type=DateTime(timezone=True),  # type: ignore
        nullable=False,
    )
