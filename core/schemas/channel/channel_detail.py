"""Schema for channel details."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class ChannelDetail(BaseSchemaModel):
    """Channel as returned by the API."""

    id: UUID
    name: str
    type: str = Field(..., validation_alias="channel_type")
    configuration: dict[str, Any]
    is_active: bool
    description: str | None = None
    created_at: datetime
    updated_at: datetime
