"""Event payloads published to the broker.

Bodies are serialized as camelCase JSON. ``metadata.notificationId`` ties an
event to the notification row the consumer reports its outcome on.
"""

from typing import Any
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class EventMetadata(BaseSchemaModel):
    """Correlation data carried by every event."""

    notification_id: UUID | None = None
    order_id: UUID | None = None


class EmailNotificationEvent(BaseSchemaModel):
    """Email send request, rendered from ``template_name`` when it exists."""

    emails: list[str] = Field(..., min_length=1)
    subject: str | None = None
    body: str | None = None
    template_name: str | None = None
    template_data: dict[str, Any] = Field(default_factory=dict)
    metadata: EventMetadata = Field(default_factory=EventMetadata)
    channel_id: UUID | None = None


class EmailOrderConfirmationEvent(EmailNotificationEvent):
    """Order confirmation email; template data is read from the order."""

    order_id: UUID


class SmsNotificationEvent(BaseSchemaModel):
    """SMS send request."""

    phone_numbers: list[str] = Field(..., min_length=1)
    message: str | None = None
    template_name: str | None = None
    template_data: dict[str, Any] = Field(default_factory=dict)
    metadata: EventMetadata = Field(default_factory=EventMetadata)
    channel_id: UUID | None = None


class PushNotificationEvent(BaseSchemaModel):
    """Push send request. ``data`` doubles as template data."""

    device_tokens: list[str] = Field(..., min_length=1)
    title: str | None = None
    body: str | None = None
    template_name: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    metadata: EventMetadata = Field(default_factory=EventMetadata)
    channel_id: UUID | None = None


def event_body(event: BaseSchemaModel) -> dict[str, Any]:
    """Serialize an event into its JSON wire form."""
    return event.model_dump(mode="json", by_alias=True, exclude_none=True)
