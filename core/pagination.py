"""Page-number pagination shared by the store and list endpoints.

List endpoints accept ``page`` (1-based) and ``limit`` query parameters. The
limit is capped at ``NOTIFICATION_MAX_PAGE_SIZE`` (100) and results are
returned together with ``hasNextPage`` / ``hasPreviousPage`` flags.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from django.conf import settings
from django.db.models import QuerySet

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Validated page/limit pair."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        """Validate page and limit bounds.

        Raises:
            ValueError: If page < 1 or limit is outside 1..max page size.
        """
        if self.page < 1:
            raise ValueError("page must be greater than or equal to 1")
        if not 1 <= self.limit <= max_page_size():
            raise ValueError(f"limit must be between 1 and {max_page_size()}")

    @property
    def offset(self) -> int:
        """Number of rows skipped before this page."""
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """A page of results with its position in the full result set."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        """Number of pages needed for all results."""
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next_page(self) -> bool:
        """Whether a page exists after this one."""
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        """Whether a page exists before this one."""
        return self.page > 1


def max_page_size() -> int:
    """Configured upper bound for ``limit``."""
    return getattr(settings, "NOTIFICATION_MAX_PAGE_SIZE", MAX_PAGE_SIZE)


def paginate(queryset: QuerySet, page_request: PageRequest) -> Page:
    """Slice an ordered queryset into a page.

    Args:
        queryset: Queryset with a deterministic ordering.
        page_request: Requested page and limit.

    Returns:
        Page holding the model instances of the requested slice.
    """
    total = queryset.count()
    start = page_request.offset
    items = list(queryset[start : start + page_request.limit])
    return Page(items=items, total=total, page=page_request.page, limit=page_request.limit)

