"""Channel schemas."""

from core.schemas.channel.available_channel import AvailableChannel
from core.schemas.channel.channel_configuration import (
    CHANNEL_CONFIGURATION_SCHEMAS,
    EmailChannelConfiguration,
    PushChannelConfiguration,
    SlackChannelConfiguration,
    SmsChannelConfiguration,
    WhatsAppChannelConfiguration,
    parse_channel_configuration,
    validate_channel_configuration,
)
from core.schemas.channel.channel_create import ChannelCreate
from core.schemas.channel.channel_detail import ChannelDetail
from core.schemas.channel.channel_query import ChannelQuery
from core.schemas.channel.channel_update import ChannelUpdate

__all__ = [
    "CHANNEL_CONFIGURATION_SCHEMAS",
    "AvailableChannel",
    "ChannelCreate",
    "ChannelDetail",
    "ChannelQuery",
    "ChannelUpdate",
    "EmailChannelConfiguration",
    "PushChannelConfiguration",
    "SlackChannelConfiguration",
    "SmsChannelConfiguration",
    "WhatsAppChannelConfiguration",
    "parse_channel_configuration",
    "validate_channel_configuration",
]
