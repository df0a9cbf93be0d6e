"""Query parameters for listing notifications."""

from uuid import UUID

from core.enums import NotificationStatus
from core.schemas.page_query import PageQuery


class NotificationQuery(PageQuery):
    """Filters for the notification list, newest first."""

    search: str | None = None
    status: NotificationStatus | None = None
    recipient_id: str | None = None
    channel_id: UUID | None = None
    template_name: str | None = None
