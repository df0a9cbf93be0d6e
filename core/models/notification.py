"""Notification model for per-channel delivery requests.

This module defines the notification record created for every delivery
request, whether it came from the API or from an order fan-out. The record is
mutated only by delivery outcomes reported by the consumers.
"""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import NotificationStatus


class Notification(models.Model):
    """A single notification routed through one channel.

    Attributes:
        id: Unique identifier, carried in event metadata as ``notificationId``.
        recipient_id: Recipient identity (email, phone number, device token).
        channel: Channel the notification is delivered through.
        template_name: Template used to render the message.
        data: Arbitrary template data.
        status: Lifecycle status (pending, processing, sent, failed).
        idempotency_key: Globally unique key; duplicates are rejected.
        retry_count: Number of retries scheduled so far.
        version: Incremented on every status transition (optimistic lock).
        sent_at: When delivery succeeded.
        failed_at: When delivery permanently failed.
        error_message: Last delivery error.
        deleted_at: Soft delete marker.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the notification",
    )
    recipient_id = models.CharField(
        max_length=255,
        help_text="Recipient identifier (email, phone, device token)",
    )
    channel = models.ForeignKey(
        "core.Channel",
        on_delete=models.PROTECT,
        related_name="notifications",
        db_column="channel_id",
    )
    template_name = models.CharField(max_length=255)
    data = models.JSONField(default=dict)
    status = models.CharField(
        max_length=20,
        choices=[(status.value, status.value) for status in NotificationStatus],
        default=NotificationStatus.PENDING.value,
    )
    idempotency_key = models.CharField(
        max_length=255,
        unique=True,
        help_text="Unique key preventing duplicate creation",
    )
    retry_count = models.PositiveIntegerField(default=0)
    version = models.PositiveIntegerField(default=0)
    sent_at = models.DateTimeField(null=True, blank=True)
    failed_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at", "-id"]
        indexes: ClassVar[list] = [
            models.Index(fields=["recipient_id"]),
            models.Index(fields=["status"]),
            models.Index(fields=["-created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.template_name} to {self.recipient_id} ({self.status})"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.id}, "
            f"recipient={self.recipient_id}, "
            f"status={self.status}, "
            f"retry_count={self.retry_count})>"
        )

    @property
    def is_terminal(self) -> bool:
        """Whether the delivery outcome is final."""
        return self.status in {status.value for status in NotificationStatus.terminal()}
