"""Schema for updating a notification's delivery status."""

from pydantic import Field

from core.enums import NotificationStatus
from core.schemas.base_schema_model import BaseSchemaModel


class NotificationUpdate(BaseSchemaModel):
    """Partial status update.

    Omitting ``status`` keeps the current one and only stores the error
    message. Sent and failed notifications are not changed any more.
    """

    status: NotificationStatus | None = None
    error_message: str | None = Field(None, description="Last delivery error")
