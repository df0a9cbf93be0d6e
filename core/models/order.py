"""Order model."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import OrderStatus


class Order(models.Model):
    """Customer order whose creation fans out notifications."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(
        max_length=255,
        help_text="Customer identifier (email, phone or device token)",
    )
    order_number = models.CharField(max_length=100, unique=True)
    status = models.CharField(
        max_length=20,
        choices=[(status.value, status.value) for status in OrderStatus],
        default=OrderStatus.PENDING.value,
    )
    total = models.DecimalField(max_digits=10, decimal_places=2)
    metadata = models.JSONField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "orders"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["user_id"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self) -> str:
        """Return string representation of order."""
        return f"{self.order_number} for {self.user_id}"
