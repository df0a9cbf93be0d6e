"""Channel-related enumerations."""

from enum import Enum


class ChannelType(str, Enum):
    """Delivery channel types.

    Each channel type is also the name of the broker exchange its events are
    published to.
    """

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    WHATSAPP = "whatsapp"
    SLACK = "slack"
