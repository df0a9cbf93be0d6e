"""Channel consumers, one per subscriber queue."""

from functools import lru_cache

from django.utils.module_loading import import_string

from core.broker import binding_for_queue
from core.handlers.base import ChannelHandler


@lru_cache(maxsize=None)
def get_handler(queue_name: str) -> ChannelHandler:
    """Handler instance consuming ``queue_name``.

    Raises:
        KeyError: If no handler is bound to the queue.
    """
    return import_string(binding_for_queue(queue_name).handler_path)()


__all__ = ["ChannelHandler", "get_handler"]
