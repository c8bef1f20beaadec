"""Generic search / sort / paginate controller for contract and task tables"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, Iterable, List, Optional, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SortDirection(str, Enum):
    """Sort direction"""
    ASC = "asc"
    DESC = "desc"


class SortState(BaseModel):
    """Current sort key"""
    field: str
    direction: SortDirection = SortDirection.ASC


class TablePage(BaseModel, Generic[T]):
    """One page of a filtered, sorted collection"""
    items: List[T]
    total: int
    page: int
    page_size: int
    page_count: int


def get_field(item: Any, field: str) -> Any:
    """Read a field from a model or a dict"""
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def _is_null(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _sort_key(value: Any) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value.lower()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, (int, float, date)):
        return value
    return str(value).lower()


def sort_items(items: Iterable[T], sort: Optional[SortState]) -> List[T]:
    """Sort on one key; nulls always go last, whatever the direction"""
    items = list(items)
    if sort is None:
        return items
    present = [i for i in items if not _is_null(get_field(i, sort.field))]
    missing = [i for i in items if _is_null(get_field(i, sort.field))]
    present.sort(
        key=lambda i: _sort_key(get_field(i, sort.field)),
        reverse=sort.direction == SortDirection.DESC,
    )
    return present + missing


def _matches(value: Any, expected: Any) -> bool:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(expected, Enum):
        expected = expected.value
    if isinstance(value, (list, tuple, set)):
        return expected in value
    return value == expected


class TableController(Generic[T]):
    """Search, filter, single-key sort and pagination state for a table.

    Changing the search term or a filter puts the user back on page 1.
    """

    def __init__(
        self,
        searchable_fields: Sequence[str],
        page_size: int = 10,
        sort: Optional[SortState] = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.searchable_fields = list(searchable_fields)
        self.page_size = page_size
        self.sort = sort
        self.search = ""
        self.filters: dict[str, Any] = {}
        self.page = 1

    def set_search(self, term: str) -> None:
        self.search = term or ""
        self.page = 1

    def set_filter(self, field: str, value: Any) -> None:
        """Filter on equality; None or 'all' clears the filter"""
        if value is None or value == "all":
            self.filters.pop(field, None)
        else:
            self.filters[field] = value
        self.page = 1

    def toggle_sort(self, field: str) -> SortState:
        """Same key flips direction; a new key starts ascending"""
        if self.sort is not None and self.sort.field == field:
            flipped = SortDirection.DESC if self.sort.direction == SortDirection.ASC else SortDirection.ASC
            self.sort = SortState(field=field, direction=flipped)
        else:
            self.sort = SortState(field=field)
        return self.sort

    def set_page(self, page: int) -> None:
        self.page = max(1, page)

    def filter(self, items: Iterable[T]) -> List[T]:
        term = self.search.strip().lower()
        result = []
        for item in items:
            if term and not any(
                term in str(get_field(item, f) or "").lower() for f in self.searchable_fields
            ):
                continue
            if not all(_matches(get_field(item, f), v) for f, v in self.filters.items()):
                continue
            result.append(item)
        return result

    def apply(self, items: Iterable[T]) -> TablePage[T]:
        """Filter, then sort, then slice the current page"""
        rows = sort_items(self.filter(items), self.sort)
        total = len(rows)
        page_count = max(1, math.ceil(total / self.page_size))
        page = min(self.page, page_count)
        start = (page - 1) * self.page_size
        return TablePage(
            items=rows[start:start + self.page_size],
            total=total,
            page=page,
            page_size=self.page_size,
            page_count=page_count,
        )
