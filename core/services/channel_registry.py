"""Channel registry: configured delivery endpoints."""

import builtins
from collections.abc import Iterable
from uuid import UUID

from django.db.models import ProtectedError

import structlog

from core.enums import ChannelType
from core.exceptions import ChannelNotFoundError, ConflictError
from core.models import Channel
from core.pagination import Page, paginate
from core.schemas.channel import (
    AvailableChannel,
    ChannelCreate,
    ChannelQuery,
    ChannelUpdate,
    validate_channel_configuration,
)

logger = structlog.get_logger(__name__)

AVAILABLE_CHANNELS: tuple[AvailableChannel, ...] = tuple(
    AvailableChannel(
        name=channel_type.value,
        description=f"{label} channel",
        icon=channel_type.value,
        type=channel_type.value,
        needs_configuration=True,
    )
    for channel_type, label in (
        (ChannelType.EMAIL, "Email"),
        (ChannelType.SMS, "SMS"),
        (ChannelType.PUSH, "Push"),
        (ChannelType.WHATSAPP, "WhatsApp"),
        (ChannelType.SLACK, "Slack"),
    )
)


class ChannelRegistry:
    """Register, validate and look up channels."""

    def create(self, data: ChannelCreate) -> Channel:
        """Register a channel after validating its configuration.

        Raises:
            ChannelConfigurationError: If the configuration does not match the type.
        """
        configuration = validate_channel_configuration(data.type, data.configuration)
        channel = Channel.objects.create(
            name=data.name,
            channel_type=ChannelType(data.type).value,
            configuration=configuration,
            description=data.description,
            is_active=data.is_active,
        )
        logger.info(
            "channel_created",
            channel_id=str(channel.id),
            channel_type=channel.channel_type,
        )
        return channel

    def get(self, channel_id: UUID) -> Channel:
        """Get a channel by ID.

        Raises:
            ChannelNotFoundError: If the channel does not exist.
        """
        try:
            return Channel.objects.get(pk=channel_id)
        except Channel.DoesNotExist:
            raise ChannelNotFoundError(channel_id) from None

    def list(self, query: ChannelQuery) -> Page[Channel]:
        """List channels, newest first."""
        queryset = Channel.objects.all()
        if query.type:
            queryset = queryset.filter(channel_type=ChannelType(query.type).value)
        if query.is_active is not None:
            queryset = queryset.filter(is_active=query.is_active)
        queryset = queryset.order_by("-created_at", "-id")
        return paginate(queryset, query.page_request())

    def list_active(self, channel_ids: Iterable[UUID] | None = None) -> builtins.list[Channel]:
        """Active channels, restricted to ``channel_ids`` when given.

        Unknown or inactive IDs are silently dropped.
        """
        queryset = Channel.objects.filter(is_active=True)
        channel_ids = list(channel_ids or [])
        if channel_ids:
            queryset = queryset.filter(pk__in=channel_ids)
        return list(queryset.order_by("created_at", "id"))

    def update(self, channel_id: UUID, data: ChannelUpdate) -> Channel:
        """Apply a partial update, re-validating a new configuration.

        Raises:
            ChannelNotFoundError: If the channel does not exist.
            ChannelConfigurationError: If the new configuration does not match
                the channel type.
        """
        channel = self.get(channel_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "description"
        }
        if "configuration" in changes:
            changes["configuration"] = validate_channel_configuration(
                channel.channel_type, changes["configuration"]
            )
        for field, value in changes.items():
            setattr(channel, field, value)
        channel.save()
        logger.info("channel_updated", channel_id=str(channel.id), fields=sorted(changes))
        return channel

    def remove(self, channel_id: UUID) -> None:
        """Delete a channel.

        Raises:
            ChannelNotFoundError: If the channel does not exist.
            ConflictError: If notifications still reference the channel.
        """
        channel = self.get(channel_id)
        try:
            channel.delete()
        except ProtectedError as e:
            raise ConflictError(
                f"Channel {channel_id} has notifications and cannot be deleted",
                detail="Deactivate the channel instead",
            ) from e
        logger.info("channel_removed", channel_id=str(channel_id))

    def available_channel_types(self) -> builtins.list[AvailableChannel]:
        """Catalogue of channel types that can be registered."""
        return list(AVAILABLE_CHANNELS)


channel_registry = ChannelRegistry()
