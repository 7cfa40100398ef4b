"""Category persistence.

``CategoryRepository`` is what the service depends on.
``SqlCategoryRepository`` implements it with SQLAlchemy's asyncio ORM; each
call runs in its own session, committed on success and rolled back on error.
Driver failures surface as ``StorageError``.
"""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Protocol

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cms.core.exceptions import StorageError
from cms.models.category import Category
from cms.services.list_query import SortDirection
from cms.services.regexp_query import FilterPredicate

# API field name -> mapped column
COLUMNS = {
    "id": Category.id,
    "name": Category.name,
    "description": Category.description,
    "createTime": Category.create_time,
    "updateTime": Category.update_time,
}


class CategoryRepository(Protocol):
    async def find_by_id(self, category_id: uuid.UUID) -> Category | None: ...

    async def find_by_name(self, name: str) -> Category | None: ...

    async def find_page(
        self,
        predicate: FilterPredicate | None,
        sort_field: str,
        sort_direction: SortDirection,
        skip: int | None = None,
        limit: int | None = None,
    ) -> list[Category]: ...

    async def count(self, predicate: FilterPredicate | None = None) -> int: ...

    async def create(
        self, *, name: str, description: str | None, create_time: datetime, update_time: datetime
    ) -> Category: ...

    async def update_name(
        self, category_id: uuid.UUID, name: str, update_time: datetime
    ) -> Category | None: ...

    async def delete_by_id(self, category_id: uuid.UUID) -> bool: ...


def _escape_like(word: str) -> str:
    return word.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def predicate_clause(predicate: FilterPredicate) -> ColumnElement[bool]:
    pattern = f"%{_escape_like(predicate.word)}%"
    return or_(*(COLUMNS[field].ilike(pattern, escape="\\") for field in predicate.fields))


class SqlCategoryRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

    async def find_by_id(self, category_id: uuid.UUID) -> Category | None:
        async with self._session() as db:
            return await db.get(Category, category_id)

    async def find_by_name(self, name: str) -> Category | None:
        async with self._session() as db:
            result = await db.execute(select(Category).where(Category.name == name).limit(1))
            return result.scalar_one_or_none()

    async def find_page(
        self,
        predicate: FilterPredicate | None,
        sort_field: str,
        sort_direction: SortDirection,
        skip: int | None = None,
        limit: int | None = None,
    ) -> list[Category]:
        column = COLUMNS[sort_field]
        order = column.desc() if sort_direction is SortDirection.DESC else column.asc()
        stmt = select(Category).order_by(order, Category.id.asc())
        if predicate is not None:
            stmt = stmt.where(predicate_clause(predicate))
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._session() as db:
            result = await db.execute(stmt)
            return list(result.scalars().all())

    async def count(self, predicate: FilterPredicate | None = None) -> int:
        stmt = select(func.count()).select_from(Category)
        if predicate is not None:
            stmt = stmt.where(predicate_clause(predicate))
        async with self._session() as db:
            return (await db.execute(stmt)).scalar_one()

    async def create(
        self, *, name: str, description: str | None, create_time: datetime, update_time: datetime
    ) -> Category:
        category = Category(
            name=name,
            description=description,
            create_time=create_time,
            update_time=update_time,
        )
        async with self._session() as db:
            db.add(category)
            await db.flush()
            await db.refresh(category)
        return category

    async def update_name(
        self, category_id: uuid.UUID, name: str, update_time: datetime
    ) -> Category | None:
        async with self._session() as db:
            category = await db.get(Category, category_id)
            if category is None:
                return None
            category.name = name
            category.update_time = update_time
            await db.flush()
            await db.refresh(category)
        return category

    async def delete_by_id(self, category_id: uuid.UUID) -> bool:
        async with self._session() as db:
            result = await db.execute(delete(Category).where(Category.id == category_id))
            return result.rowcount > 0
