"""Schema for delivery log entries."""

from datetime import datetime
from typing import Any
from uuid import UUID

from core.schemas.base_schema_model import BaseSchemaModel


class DeliveryLogDetail(BaseSchemaModel):
    """One delivery attempt of a notification."""

    id: UUID
    notification_id: UUID
    attempt_number: int
    status: str
    response_data: dict[str, Any] | None = None
    error_message: str | None = None
    attempted_at: datetime
