"""Schema for creating notifications."""

from typing import Any
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class NotificationCreate(BaseSchemaModel):
    """Request body for creating a notification.

    ``idempotency_key`` is generated by the service when omitted. Sending the
    same key twice is rejected with a conflict.
    """

    recipient_id: str = Field(
        ..., min_length=1, max_length=255, description="Email, phone number or device token"
    )
    channel_id: UUID = Field(..., description="Channel to deliver through")
    template_name: str = Field(..., min_length=1, max_length=255)
    data: dict[str, Any] = Field(default_factory=dict, description="Template data")
    idempotency_key: str | None = Field(None, min_length=1, max_length=255)
