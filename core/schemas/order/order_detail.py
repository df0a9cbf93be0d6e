"""Schema for order details."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import field_serializer

from core.schemas.base_schema_model import BaseSchemaModel


class OrderDetail(BaseSchemaModel):
    """Order as returned by the API."""

    id: UUID
    user_id: str
    order_number: str
    status: str
    total: Decimal
    metadata: dict[str, Any] | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("total")
    def serialize_total(self, total: Decimal) -> str:
        """Render the total with two decimals."""
        return f"{total:.2f}"
