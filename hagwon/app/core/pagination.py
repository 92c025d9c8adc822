"""Page bookkeeping for in-memory lists and for offset/limit queries.

Both paginators are 1-indexed and always keep ``current_page`` inside
``[1, total_pages]``. When there is nothing to page through ``total_pages`` is 0
and the current page stays at 1.
"""

import math
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel

from hagwon.app.core.errors import ValidationError

T = TypeVar("T")


def count_pages(total: int, items_per_page: int) -> int:
    return math.ceil(total / items_per_page) if total > 0 else 0


def _check_page_size(items_per_page: int) -> None:
    if items_per_page < 1:
        raise ValidationError("itemsPerPage must be greater than 0")


class _PageCursor:
    def __init__(self, total_items: int, items_per_page: int, initial_page: int = 1):
        _check_page_size(items_per_page)
        self.total_items = total_items
        self.items_per_page = items_per_page
        self.total_pages = count_pages(total_items, items_per_page)
        self.current_page = 1
        self.go_to_page(initial_page)

    def go_to_page(self, page: int) -> int:
        self.current_page = max(1, min(page, self.total_pages))
        return self.current_page

    def next_page(self) -> int:
        if self.current_page < self.total_pages:
            self.current_page += 1
        return self.current_page

    def previous_page(self) -> int:
        if self.current_page > 1:
            self.current_page -= 1
        return self.current_page

    def reset_page(self) -> int:
        self.current_page = 1
        return self.current_page

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def start_index(self) -> int:
        return (self.current_page - 1) * self.items_per_page + 1

    @property
    def end_index(self) -> int:
        return min(self.current_page * self.items_per_page, self.total_items)


class Paginator(_PageCursor, Generic[T]):
    """Slice a fully loaded sequence into pages."""

    def __init__(self, items: Sequence[T], items_per_page: int = 10, initial_page: int = 1):
        self.items = list(items)
        super().__init__(len(self.items), items_per_page, initial_page)

    @property
    def page_items(self) -> list[T]:
        start = (self.current_page - 1) * self.items_per_page
        return self.items[start : start + self.items_per_page]


class ServerPaginator(_PageCursor):
    """Compute the inclusive row range for a remote paged fetch from a known total."""

    @property
    def range_from(self) -> int:
        return (self.current_page - 1) * self.items_per_page

    @property
    def range_to(self) -> int:
        return self.range_from + self.items_per_page - 1

    @property
    def start_index(self) -> int:
        return self.range_from + 1

    @property
    def end_index(self) -> int:
        return min(self.range_to + 1, self.total_items)


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PageMeta":
        total_pages = count_pages(total, limit)
        return cls(
            page=page,
            limit=limit,
            total=total,
            totalPages=total_pages,
            hasNext=page < total_pages,
            hasPrev=page > 1,
        )
