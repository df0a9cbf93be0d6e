"""Provider send implementations per channel type."""

from core.providers.base import NotificationProvider, get_provider

__all__ = ["NotificationProvider", "get_provider"]
