"""Schema for updating channels."""

from typing import Any

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class ChannelUpdate(BaseSchemaModel):
    """Partial update of a channel. The channel type cannot change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    configuration: dict[str, Any] | None = None
    description: str | None = None
    is_active: bool | None = None
