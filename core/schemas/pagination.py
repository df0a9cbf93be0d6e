"""Pagination envelope returned by every list endpoint."""

from typing import Any

from pydantic import Field

from core.pagination import Page
from core.schemas.base_schema_model import BaseSchemaModel


class PaginationMeta(BaseSchemaModel):
    """Pagination metadata for a page of results."""

    current_page: int = Field(..., ge=1)
    items_per_page: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_page(cls, page: Page) -> "PaginationMeta":
        """Build metadata from a store page."""
        return cls(
            current_page=page.page,
            items_per_page=page.limit,
            total_items=page.total,
            total_pages=page.total_pages,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
        )


class PaginatedResponse(BaseSchemaModel):
    """``{data, meta}`` envelope for paginated lists."""

    data: list[dict[str, Any]]
    meta: PaginationMeta
