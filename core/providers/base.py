"""Provider send interface shared by all channel types."""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string

from core.enums import ChannelType
from core.exceptions import UnsupportedChannelError
from core.schemas.template import RenderedTemplate


class NotificationProvider(ABC):
    """Delivers rendered content to recipients of one channel type.

    Implementations raise on failure. Exceptions derived from
    ``PermanentDeliveryError`` are never retried; anything else is treated
    as transient.
    """

    channel_type: ChannelType

    @abstractmethod
    def send(
        self,
        recipients: list[str],
        content: RenderedTemplate,
        configuration: dict[str, Any],
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send ``content`` to ``recipients``.

        Args:
            recipients: Email addresses, phone numbers or device tokens.
            content: Rendered subject (or title) and body.
            configuration: The channel's stored configuration.
            data: Extra payload for providers that carry one (push).

        Returns:
            Provider response, stored in the delivery log.
        """


@lru_cache(maxsize=None)
def get_provider(channel_type: ChannelType | str) -> NotificationProvider:
    """Provider configured for a channel type in NOTIFICATION_PROVIDERS.

    Raises:
        UnsupportedChannelError: If no provider is configured for the type.
    """
    channel_type = ChannelType(channel_type)
    provider_path = settings.NOTIFICATION_PROVIDERS.get(channel_type.value)
    if not provider_path:
        raise UnsupportedChannelError(channel_type.value)
    return import_string(provider_path)()
