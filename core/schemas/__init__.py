"""Schemas for the core app."""

from core.schemas.channel import (
    AvailableChannel,
    ChannelCreate,
    ChannelDetail,
    ChannelQuery,
    ChannelUpdate,
)
from core.schemas.events import (
    EmailNotificationEvent,
    EmailOrderConfirmationEvent,
    EventMetadata,
    PushNotificationEvent,
    SmsNotificationEvent,
)
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.notification import (
    DeliveryLogDetail,
    NotificationCreate,
    NotificationDetail,
    NotificationQuery,
)
from core.schemas.order import (
    ChannelDispatch,
    OrderCreate,
    OrderCreated,
    OrderDetail,
    OrderQuery,
    OrderUpdate,
)
from core.schemas.pagination import PaginatedResponse, PaginationMeta
from core.schemas.template import (
    RenderedTemplate,
    TemplateCreate,
    TemplateDetail,
    TemplateQuery,
    TemplateUpdate,
)

__all__ = [
    "AvailableChannel",
    "ChannelCreate",
    "ChannelDetail",
    "ChannelDispatch",
    "ChannelQuery",
    "ChannelUpdate",
    "DeliveryLogDetail",
    "DependencyHealth",
    "EmailNotificationEvent",
    "EmailOrderConfirmationEvent",
    "EventMetadata",
    "LivenessResponse",
    "NotificationCreate",
    "NotificationDetail",
    "NotificationQuery",
    "OrderCreate",
    "OrderCreated",
    "OrderDetail",
    "OrderQuery",
    "OrderUpdate",
    "PaginatedResponse",
    "PaginationMeta",
    "PushNotificationEvent",
    "ReadinessResponse",
    "RenderedTemplate",
    "SmsNotificationEvent",
    "TemplateCreate",
    "TemplateDetail",
    "TemplateQuery",
    "TemplateUpdate",
]
