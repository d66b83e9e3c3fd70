"""
Offset pagination for Supabase range queries.
Turns a page number and page size into the inclusive row range PostgREST expects.
"""

from typing import Generic, TypeVar, List
from dataclasses import dataclass
from math import ceil

T = TypeVar('T')


@dataclass
class PaginationMetadata:
    """Pagination metadata for responses."""
    page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next: bool
    has_previous: bool


@dataclass
class Page(Generic[T]):
    """One page of records plus its metadata."""
    items: List[T]
    metadata: PaginationMetadata


class OffsetPagination:
    """
    Offset-based pagination.
    Page numbers start at 1; sizes above the maximum are clamped.
    """

    def __init__(self, default_page_size: int = 20, max_page_size: int = 100):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def normalize(self, page: int = 1, page_size: int = None) -> tuple:
        """Clamp page and page size to valid values."""
        if not page_size or page_size < 1:
            page_size = self.default_page_size
        return max(1, page), min(page_size, self.max_page_size)

    def row_range(self, page: int = 1, page_size: int = None) -> tuple:
        """
        Inclusive ``(from, to)`` row bounds for a page.

        Page 2 of 20 is rows 20..39.
        """
        page, page_size = self.normalize(page, page_size)
        start = (page - 1) * page_size
        return start, start + page_size - 1

    def build_page(self, items: List[T], total_items: int, page: int = 1, page_size: int = None) -> Page[T]:
        """Wrap fetched items with metadata computed from the exact count."""
        page, page_size = self.normalize(page, page_size)
        total_pages = ceil(total_items / page_size) if page_size > 0 else 0
        return Page(
            items=items,
            metadata=PaginationMetadata(
                page=page,
                page_size=page_size,
                total_items=total_items,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_previous=page > 1
            )
        )
