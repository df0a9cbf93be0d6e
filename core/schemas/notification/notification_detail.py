"""Schema for notification details."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class NotificationDetail(BaseSchemaModel):
    """Notification as returned by the API."""

    id: UUID = Field(..., description="Unique identifier for the notification")
    recipient_id: str
    channel_id: UUID
    template_name: str
    data: dict[str, Any]
    status: str = Field(..., description="pending, processing, sent or failed")
    idempotency_key: str
    retry_count: int = Field(..., ge=0)
    sent_at: datetime | None = None
    failed_at: datetime | None = None
    error_message: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
