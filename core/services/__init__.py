"""Services for the core app.

The module-level instances are what the views, handlers and commands use;
tests build their own instances with injected collaborators.
"""

from core.services.channel_registry import ChannelRegistry, channel_registry
from core.services.health_service import HealthService, health_service
from core.services.notification_service import (
    NotificationService,
    notification_service,
)
from core.services.notification_store import NotificationStore, notification_store
from core.services.order_service import OrderCreation, OrderService, order_service
from core.services.publisher import Publisher, publisher
from core.services.retry_policy import (
    ExponentialBackoffRetryPolicy,
    RetryErrorHandler,
    RetryPolicy,
)
from core.services.template_registry import TemplateRegistry, template_registry
from core.services.template_renderer import TemplateRenderer, template_renderer

__all__ = [
    "ChannelRegistry",
    "ExponentialBackoffRetryPolicy",
    "HealthService",
    "NotificationService",
    "NotificationStore",
    "OrderCreation",
    "OrderService",
    "Publisher",
    "RetryErrorHandler",
    "RetryPolicy",
    "TemplateRegistry",
    "TemplateRenderer",
    "channel_registry",
    "health_service",
    "notification_service",
    "notification_store",
    "order_service",
    "publisher",
    "template_registry",
    "template_renderer",
]
