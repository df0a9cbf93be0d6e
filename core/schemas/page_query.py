"""Paging parameters shared by list query schemas."""

from pydantic import Field

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from core.pagination import PageRequest
from core.schemas.base_schema_model import BaseSchemaModel


class PageQuery(BaseSchemaModel):
    """``page`` (1-based) and ``limit`` query parameters."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    def page_request(self) -> PageRequest:
        """Return the validated page request for the store."""
        return PageRequest(page=self.page, limit=self.limit)
