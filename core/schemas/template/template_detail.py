"""Schema for template details."""

from datetime import datetime
from typing import Any
from uuid import UUID

from core.schemas.base_schema_model import BaseSchemaModel


class TemplateDetail(BaseSchemaModel):
    """Template as returned by the API."""

    id: UUID
    name: str
    channel: str
    subject: str | None = None
    body: str
    variables: list[str]
    metadata: dict[str, Any]
    version: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
