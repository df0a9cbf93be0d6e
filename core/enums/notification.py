"""Notification-related enumerations.

This module contains the lifecycle statuses for notifications and the
per-attempt statuses written to the delivery log.
"""

from enum import Enum


class NotificationStatus(str, Enum):
    """Notification lifecycle status.

    A notification is created ``pending``, moves to ``processing`` when a
    consumer picks up its event and ends in ``sent`` or ``failed``.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SENT = "sent"
    FAILED = "failed"

    @classmethod
    def terminal(cls) -> frozenset["NotificationStatus"]:
        """Statuses after which delivery outcome no longer changes."""
        return frozenset({cls.SENT, cls.FAILED})


class DeliveryStatus(str, Enum):
    """Outcome recorded for a single delivery attempt."""

    ATTEMPTING = "attempting"
    SUCCESS = "success"
    FAILED = "failed"


class DeliveryOutcome(str, Enum):
    """How a consumer settled a message."""

    SUCCESS = "success"
    RETRY_SCHEDULED = "retry_scheduled"
    DEAD_LETTERED = "dead_lettered"
    SKIPPED = "skipped"
