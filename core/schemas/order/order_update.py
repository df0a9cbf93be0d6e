"""Schema for updating orders."""

from typing import Any

from core.enums import OrderStatus
from core.schemas.base_schema_model import BaseSchemaModel


class OrderUpdate(BaseSchemaModel):
    """Partial order update."""

    status: OrderStatus | None = None
    notes: str | None = None
    metadata: dict[str, Any] | None = None
