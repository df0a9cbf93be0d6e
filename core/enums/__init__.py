"""Enumerations for the core app."""

from core.enums.channel import ChannelType
from core.enums.health_status import HealthStatus
from core.enums.notification import (
    DeliveryOutcome,
    DeliveryStatus,
    NotificationStatus,
)
from core.enums.order import OrderStatus

__all__ = [
    "ChannelType",
    "DeliveryOutcome",
    "DeliveryStatus",
    "HealthStatus",
    "NotificationStatus",
    "OrderStatus",
]
