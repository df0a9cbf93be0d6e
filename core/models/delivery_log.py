"""DeliveryLog model: append-only audit trail of delivery attempts."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import DeliveryStatus


class DeliveryLog(models.Model):
    """One row per delivery attempt of a notification.

    Rows are written once and never updated. ``attempt_number`` increases
    monotonically per notification.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    notification = models.ForeignKey(
        "core.Notification",
        on_delete=models.CASCADE,
        related_name="delivery_logs",
        db_column="notification_id",
    )
    attempt_number = models.PositiveIntegerField()
    status = models.CharField(
        max_length=20,
        choices=[(status.value, status.value) for status in DeliveryStatus],
    )
    response_data = models.JSONField(null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)
    attempted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "delivery_logs"
        managed = False
        ordering: ClassVar[list[str]] = ["attempt_number"]
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["notification", "attempt_number"],
                name="uniq_delivery_log_attempt",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of delivery log entry."""
        return f"attempt {self.attempt_number} of {self.notification_id}: {self.status}"
