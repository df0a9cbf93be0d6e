"""Notification schemas."""

from core.schemas.notification.delivery_log_detail import DeliveryLogDetail
from core.schemas.notification.notification_create import NotificationCreate
from core.schemas.notification.notification_detail import NotificationDetail
from core.schemas.notification.notification_query import NotificationQuery
from core.schemas.notification.notification_update import NotificationUpdate

__all__ = [
    "DeliveryLogDetail",
    "NotificationCreate",
    "NotificationDetail",
    "NotificationQuery",
    "NotificationUpdate",
]
