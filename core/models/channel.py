"""Channel model for configured delivery endpoints."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import ChannelType


class Channel(models.Model):
    """A configured provider endpoint notifications are sent through.

    The ``configuration`` payload is polymorphic by ``channel_type``; its shape
    is validated by the channel registry before it is stored.

    Attributes:
        id: Unique identifier for the channel.
        name: Human readable channel name.
        channel_type: Delivery channel type (email, sms, push, whatsapp, slack).
        configuration: Provider credentials and sender settings.
        is_active: Whether the channel may be used for delivery.
        description: Optional free-text description.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    channel_type = models.CharField(
        max_length=20,
        db_column="type",
        choices=[(channel_type.value, channel_type.value) for channel_type in ChannelType],
        help_text="Delivery channel type",
    )
    configuration = models.JSONField(
        default=dict,
        help_text="Provider configuration, shape depends on the channel type",
    )
    is_active = models.BooleanField(default=True)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "channels"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["channel_type"]),
            models.Index(fields=["is_active", "-created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of channel."""
        return f"{self.name} ({self.channel_type})"

    def __repr__(self) -> str:
        """Return detailed representation of channel."""
        return (
            f"<Channel(id={self.id}, type={self.channel_type}, "
            f"is_active={self.is_active})>"
        )
