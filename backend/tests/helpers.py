"""Shared helpers: a deterministic clock, seeding, and an in-memory repository."""

import asyncio
import uuid
from datetime import UTC, datetime, timedelta

from cms.models.category import Category
from cms.services.list_query import SortDirection
from cms.services.regexp_query import FilterPredicate

CATEGORIES_URL = "/api/v1/categories"


class TickingClock:
    """Returns a strictly increasing time, one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


async def seed_categories(repository, names, clock=None, description=None) -> list[Category]:
    """Create categories in order; each gets a later createTime than the previous one."""
    clock = clock or TickingClock()
    created = []
    for name in names:
        now = clock()
        created.append(
            await repository.create(
                name=name, description=description, create_time=now, update_time=now
            )
        )
    return created


def _record(category: Category) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "createTime": category.create_time,
        "updateTime": category.update_time,
    }


class InMemoryCategoryRepository:
    """Dict-backed repository. Every call yields to the event loop once."""

    def __init__(self):
        self.rows: dict[uuid.UUID, Category] = {}
        self.count_calls: list[FilterPredicate | None] = []

    async def find_by_id(self, category_id):
        await asyncio.sleep(0)
        return self.rows.get(category_id)

    async def find_by_name(self, name):
        await asyncio.sleep(0)
        return next((c for c in self.rows.values() if c.name == name), None)

    async def find_page(self, predicate, sort_field, sort_direction, skip=None, limit=None):
        await asyncio.sleep(0)
        rows = [c for c in self.rows.values() if predicate is None or predicate.matches(_record(c))]
        rows.sort(key=lambda c: str(c.id))
        rows.sort(
            key=lambda c: _record(c)[sort_field],
            reverse=sort_direction is SortDirection.DESC,
        )
        start = skip or 0
        end = start + limit if limit is not None else None
        return rows[start:end]

    async def count(self, predicate=None):
        await asyncio.sleep(0)
        self.count_calls.append(predicate)
        return sum(1 for c in self.rows.values() if predicate is None or predicate.matches(_record(c)))

    async def create(self, *, name, description, create_time, update_time):
        await asyncio.sleep(0)
        category = Category(
            id=uuid.uuid4(),
            name=name,
            description=description,
            create_time=create_time,
            update_time=update_time,
        )
        self.rows[category.id] = category
        return category

    async def update_name(self, category_id, name, update_time):
        await asyncio.sleep(0)
        category = self.rows.get(category_id)
        if category is None:
            return None
        category.name = name
        category.update_time = update_time
        return category

    async def delete_by_id(self, category_id):
        await asyncio.sleep(0)
        return self.rows.pop(category_id, None) is not None
