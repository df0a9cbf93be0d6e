"""Exception handling utilities for the notification hub."""

from core.exceptions.handlers import custom_exception_handler
from core.exceptions.service_exceptions import (
    ChannelConfigurationError,
    ChannelNotFoundError,
    ConflictError,
    InactiveChannelError,
    MissingVariablesError,
    NotFoundError,
    NotificationHubError,
    NotificationNotFoundError,
    OrderNotFoundError,
    PermanentDeliveryError,
    PublishError,
    TemplateNotFoundError,
    UnsupportedChannelError,
    ValidationError,
)

__all__ = [
    "ChannelConfigurationError",
    "ChannelNotFoundError",
    "ConflictError",
    "InactiveChannelError",
    "MissingVariablesError",
    "NotFoundError",
    "NotificationHubError",
    "NotificationNotFoundError",
    "OrderNotFoundError",
    "PermanentDeliveryError",
    "PublishError",
    "TemplateNotFoundError",
    "UnsupportedChannelError",
    "ValidationError",
    "custom_exception_handler",
]
