"""Category business logic.

One ``CategoryService`` is built per process (see ``cms.main.create_app``)
with its repository, query builder and pagination defaults injected.

Name uniqueness is a read-then-write check with no lock or transaction
around it, so two concurrent requests for the same new name can both pass.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from cms.core.exceptions import CategoryNotFoundError, FieldValidationError
from cms.models.category import Category
from cms.repositories.category_repository import CategoryRepository
from cms.services.list_query import ListQueryBuilder, Pagination, PaginationDefaults

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Operation successful"

SORTABLE_COLUMNS = frozenset({"id", "name", "createTime", "updateTime"})
FILTERABLE_COLUMNS = frozenset({"name", "description"})


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class CategoryPage:
    items: list[Category]
    pagination: Pagination | None = None
    total: int | None = None


class CategoryService:
    def __init__(
        self,
        repository: CategoryRepository,
        defaults: PaginationDefaults,
        query_builder: ListQueryBuilder | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.defaults = defaults
        self.query_builder = query_builder or ListQueryBuilder(
            defaults, sortable=SORTABLE_COLUMNS, filterable=FILTERABLE_COLUMNS
        )
        self.clock = clock

    async def list_categories(
        self,
        *,
        page: str | None = None,
        page_size: str | None = None,
        order_column: str | None = None,
        order_type: str | None = None,
        filter_column: str | None = None,
        word: str | None = None,
    ) -> CategoryPage:
        query = self.query_builder.build(
            page=page,
            page_size=page_size,
            order_column=order_column,
            order_type=order_type,
            filter_column=filter_column,
            word=word,
        )

        if query.pagination is None:
            items = await self.repository.find_page(
                query.filter, query.sort_field, query.sort_direction
            )
            return CategoryPage(items=items)

        total = await self.repository.count(query.filter if self.defaults.total_filtered else None)
        items = await self.repository.find_page(
            query.filter,
            query.sort_field,
            query.sort_direction,
            skip=query.pagination.skip,
            limit=query.pagination.limit,
        )
        return CategoryPage(items=items, pagination=query.pagination, total=total)

    async def get_category(self, category_id: uuid.UUID) -> Category:
        category = await self.repository.find_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def add_category(self, name: str | None, description: str | None = None) -> Category:
        if not name:
            raise FieldValidationError({"name": "Category name is required"})

        if await self.repository.find_by_name(name) is not None:
            raise FieldValidationError({"name": "Category already exists"})

        now = self.clock()
        category = await self.repository.create(
            name=name, description=description, create_time=now, update_time=now
        )
        logger.info("Created category %s (%r)", category.id, category.name)
        return category

    async def update_category(self, category_id: uuid.UUID, name: str | None) -> Category:
        if not name:
            raise FieldValidationError({"name": "Category name is required"})

        # The lookup does not exclude category_id: renaming a category to its
        # current name counts as a collision.
        if await self.repository.find_by_name(name) is not None:
            raise FieldValidationError({"name": "Category name already exists"})

        category = await self.repository.update_name(category_id, name, self.clock())
        if category is None:
            raise CategoryNotFoundError(category_id)
        logger.info("Renamed category %s to %r", category.id, category.name)
        return category

    async def remove_category(self, category_id: uuid.UUID | None) -> None:
        if category_id is None:
            raise FieldValidationError({"id": "Category id is required"})

        deleted = await self.repository.delete_by_id(category_id)
        if not deleted:
            logger.debug("Delete of missing category %s ignored", category_id)
