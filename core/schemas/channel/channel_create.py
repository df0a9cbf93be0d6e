"""Schema for creating channels."""

from typing import Any

from pydantic import Field

from core.enums import ChannelType
from core.schemas.base_schema_model import BaseSchemaModel


class ChannelCreate(BaseSchemaModel):
    """Request body for registering a channel."""

    name: str = Field(..., min_length=1, max_length=255, description="Channel name")
    type: ChannelType = Field(..., description="Channel type")
    configuration: dict[str, Any] = Field(
        ..., description="Provider credentials and settings"
    )
    description: str | None = Field(None, description="Optional description")
    is_active: bool = Field(default=True, description="Whether the channel is usable")
