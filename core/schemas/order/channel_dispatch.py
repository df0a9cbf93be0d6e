"""Per-channel outcome of an order fan-out."""

from typing import Literal
from uuid import UUID

from core.schemas.base_schema_model import BaseSchemaModel


class ChannelDispatch(BaseSchemaModel):
    """What happened for one channel when an order was created."""

    channel_id: UUID
    channel_type: str
    status: Literal["published", "skipped", "failed"]
    notification_id: UUID | None = None
    error: str | None = None
