"""Schema for creating orders."""

from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class OrderCreate(BaseSchemaModel):
    """Request body for creating an order.

    When ``channel_ids`` is empty or omitted the order confirmation goes out
    through every active channel.
    """

    user_id: str = Field(..., min_length=1, max_length=255)
    total: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    channel_ids: list[UUID] | None = Field(
        None, description="Channels to notify through"
    )
    metadata: dict[str, Any] | None = None
    notes: str | None = None
