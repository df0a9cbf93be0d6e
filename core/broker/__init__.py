"""Message broker used to hand events from the API to the consumers."""

from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string

from core.broker.base import Broker, Message
from core.broker.topology import (
    BINDINGS,
    QUEUE_NAMES,
    ROUTABLE_CHANNEL_TYPES,
    Binding,
    EventName,
    binding_for_queue,
)


@lru_cache(maxsize=1)
def get_broker() -> Broker:
    """Return the process-wide broker configured by NOTIFICATION_BROKER_BACKEND."""
    return import_string(settings.NOTIFICATION_BROKER_BACKEND)()


__all__ = [
    "BINDINGS",
    "QUEUE_NAMES",
    "ROUTABLE_CHANNEL_TYPES",
    "Binding",
    "Broker",
    "EventName",
    "Message",
    "binding_for_queue",
    "get_broker",
]
