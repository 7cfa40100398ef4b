"""Translate raw list parameters into a bounded, validated query descriptor.

Query-string values are untrusted. ``ListQueryBuilder.build`` never touches
storage; it only decides what to fetch:

- ``word`` present: case-insensitive "contains" filter on ``filterColumn``
  (comma-separated allowed), defaulting to ``name``
- ``page`` and ``pageSize`` both positive integers: paginated mode with
  ``skip = pageSize * (page - 1)``; anything else returns the whole set.
  A page whose skip exceeds a 64-bit OFFSET is rejected
- ``orderColumn`` / ``orderType`` pick the sort, ties broken by id
"""

import enum
from dataclasses import dataclass

from cms.core.exceptions import FieldValidationError
from cms.services.regexp_query import FilterPredicate, to_regexp_query


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


# Largest OFFSET a 64-bit signed integer column type can take.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PaginationDefaults:
    """Values come from ``Settings`` (see ``cms.main.pagination_defaults``)."""

    page_size: int
    max_page_size: int
    order_column: str
    order_type: str
    total_filtered: bool


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return self.page_size * (self.page - 1)

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class ListQuery:
    sort_field: str
    sort_direction: SortDirection
    filter: FilterPredicate | None = None
    pagination: Pagination | None = None


def _positive_int(value: str | int | None) -> int | None:
    if value is None:
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


class ListQueryBuilder:
    """Builds ``ListQuery`` objects against a fixed set of sortable/filterable fields."""

    def __init__(
        self,
        defaults: PaginationDefaults,
        sortable: frozenset[str],
        filterable: frozenset[str],
        default_filter_column: str = "name",
    ):
        self.defaults = defaults
        self.sortable = sortable
        self.filterable = filterable
        self.default_filter_column = default_filter_column

    def build(
        self,
        *,
        page: str | None = None,
        page_size: str | None = None,
        order_column: str | None = None,
        order_type: str | None = None,
        filter_column: str | None = None,
        word: str | None = None,
    ) -> ListQuery:
        errors: dict[str, str] = {}

        sort_field = order_column or self.defaults.order_column
        if sort_field not in self.sortable:
            errors["orderColumn"] = f"Cannot sort by '{sort_field}'"

        raw_direction = (order_type or self.defaults.order_type).strip().lower()
        try:
            direction = SortDirection(raw_direction)
        except ValueError:
            errors["orderType"] = "Order type must be 'asc' or 'desc'"
            direction = SortDirection.ASC

        predicate = None
        if word is not None:
            try:
                predicate = to_regexp_query(filter_column or self.default_filter_column, word)
            except ValueError:
                errors["filterColumn"] = "Filter column cannot be empty"
            else:
                unknown = [f for f in predicate.fields if f not in self.filterable]
                if unknown:
                    errors["filterColumn"] = f"Cannot filter by '{', '.join(unknown)}'"

        pagination = self._pagination(page, page_size)
        if pagination is not None and pagination.skip > MAX_OFFSET:
            errors["page"] = "Page is out of range"

        if errors:
            raise FieldValidationError(errors)

        return ListQuery(
            sort_field=sort_field,
            sort_direction=direction,
            filter=predicate,
            pagination=pagination,
        )

    def _pagination(self, page: str | None, page_size: str | None) -> Pagination | None:
        page_number = _positive_int(page)
        if page_number is None:
            return None
        size = _positive_int(page_size if page_size is not None else self.defaults.page_size)
        if size is None:
            return None
        return Pagination(page=page_number, page_size=min(size, self.defaults.max_page_size))
