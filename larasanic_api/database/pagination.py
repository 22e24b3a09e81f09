"""
Pagination
Length-aware pages over Tortoise querysets
"""
from math import ceil
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from tortoise.models import Model
from tortoise.queryset import QuerySet


T = TypeVar('T', bound=Model)


class PaginatedResult(Generic[T]):
    """
    One page of records plus the totals needed to navigate the rest

    Iterating yields the page's records; len() is the page length,
    total_items the number of matches across all pages.
    """

    def __init__(self, items: List[T], total_items: int, page: int, per_page: int, total_pages: int):
        self.items = items
        self.total_items = total_items
        self.page = page
        self.per_page = per_page
        self.total_pages = total_pages

    @classmethod
    def single_page(cls, items: List[T]) -> 'PaginatedResult[T]':
        """
        Every match as one page sized to fit it

        Example:
            result = PaginatedResult.single_page(await Book.all())
            assert result.per_page == result.total_items == len(result)
        """
        items = list(items)
        return cls(items, total_items=len(items), page=1, per_page=len(items), total_pages=1)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next else None

    @property
    def prev_page(self) -> Optional[int]:
        return self.page - 1 if self.has_prev else None

    @property
    def start_index(self) -> int:
        """1-based position of the first record on this page (0 when empty)"""
        if not self.items:
            return 0
        return (self.page - 1) * self.per_page + 1

    @property
    def end_index(self) -> int:
        if not self.items:
            return 0
        return self.start_index + len(self.items) - 1

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __repr__(self) -> str:
        return f"<PaginatedResult page={self.page}/{self.total_pages} items={len(self)} total={self.total_items}>"

    def to_dict(self, item_converter: Optional[Callable[[T], Any]] = None, items_key: str = 'items') -> Dict[str, Any]:
        """
        JSON-ready page

        Args:
            item_converter: Turns a record into a dict (default: its to_dict(), else str())
            items_key: Key the records are listed under
        """
        if item_converter is None:
            item_converter = _default_converter

        return {
            items_key: [item_converter(item) for item in self.items],
            'pagination': {
                'total_items': self.total_items,
                'total_pages': self.total_pages,
                'current_page': self.page,
                'per_page': self.per_page,
                'has_next': self.has_next,
                'has_prev': self.has_prev,
                'next_page': self.next_page,
                'prev_page': self.prev_page,
                'start_index': self.start_index,
                'end_index': self.end_index,
            },
        }


def _default_converter(item: Any) -> Any:
    return item.to_dict() if hasattr(item, 'to_dict') else str(item)


async def paginate_queryset(queryset: QuerySet, page: int = 1, per_page: Optional[int] = None) -> PaginatedResult:
    """
    Count the matches, then fetch one page of them

    page and per_page are clamped to at least 1. A page past the last
    comes back empty with the real totals.

    Example:
        result = await paginate_queryset(Book.filter(author_id=1), page=2, per_page=10)
    """
    from larasanic_api.defaults import DEFAULT_PER_PAGE

    page = max(1, int(page))
    per_page = max(1, int(DEFAULT_PER_PAGE if per_page is None else per_page))

    total_items = await queryset.count()
    total_pages = max(1, ceil(total_items / per_page))

    items = []
    if page <= total_pages:
        items = await queryset.offset((page - 1) * per_page).limit(per_page)

    return PaginatedResult(items, total_items, page, per_page, total_pages)
