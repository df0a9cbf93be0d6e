"""Database models for core application."""

from core.models.channel import Channel
from core.models.delivery_log import DeliveryLog
from core.models.notification import Notification
from core.models.order import Order
from core.models.template import Template

__all__ = ["Channel", "DeliveryLog", "Notification", "Order", "Template"]
