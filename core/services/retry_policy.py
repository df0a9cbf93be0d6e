"""Retry policy and error handler for failed deliveries.

A failed message is acknowledged and an identical copy carrying an
incremented ``x-retry-count`` header is published again after an
exponential backoff. Once the retry ceiling is exceeded the message is
dead-lettered: logged, never re-queued, and its notification is marked
``failed``.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from uuid import UUID

from django.conf import settings

import structlog

from core.broker import Message
from core.constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_BASE_DELAY_SECONDS
from core.enums import DeliveryOutcome, NotificationStatus
from core.exceptions import PublishError
from core.services.notification_store import NotificationStore, notification_store
from core.services.publisher import Publisher
from core.services.publisher import publisher as default_publisher

logger = structlog.get_logger(__name__)


class RetryPolicy(ABC):
    """Decides whether and when a failed message is retried."""

    @abstractmethod
    def should_retry(self, attempt: int) -> bool:
        """Whether retry number ``attempt`` (1-based) may be scheduled."""

    @abstractmethod
    def backoff_delay(self, attempt: int) -> timedelta:
        """Delay before retry number ``attempt``."""

    @abstractmethod
    def on_exhausted(self, message: Message, error: Exception) -> None:
        """Called once when a message is dead-lettered."""


class ExponentialBackoffRetryPolicy(RetryPolicy):
    """Retry up to ``max_retries`` times, doubling the delay each time."""

    def __init__(
        self,
        max_retries: int | None = None,
        base_delay: timedelta | None = None,
    ) -> None:
        """Initialize the policy.

        Args:
            max_retries: Retry ceiling, defaults to NOTIFICATION_MAX_RETRIES
            base_delay: Delay before the first retry, defaults to
                NOTIFICATION_RETRY_BASE_DELAY_SECONDS
        """
        if max_retries is None:
            max_retries = getattr(settings, "NOTIFICATION_MAX_RETRIES", DEFAULT_MAX_RETRIES)
        if base_delay is None:
            base_delay = timedelta(
                seconds=getattr(
                    settings,
                    "NOTIFICATION_RETRY_BASE_DELAY_SECONDS",
                    DEFAULT_RETRY_BASE_DELAY_SECONDS,
                )
            )
        self.max_retries = max_retries
        self.base_delay = base_delay

    def should_retry(self, attempt: int) -> bool:
        """Retry while the attempt is within the ceiling."""
        return attempt <= self.max_retries

    def backoff_delay(self, attempt: int) -> timedelta:
        """``base_delay * 2 ** (attempt - 1)``."""
        return self.base_delay * (2 ** (attempt - 1))

    def on_exhausted(self, message: Message, error: Exception) -> None:
        """Log the dead-lettered message."""
        logger.error(
            "message_dead_lettered",
            message_id=message.message_id,
            exchange=message.exchange,
            routing_key=message.routing_key,
            retry_count=message.retry_count,
            max_retries=self.max_retries,
            error=str(error),
            body=message.body,
        )


class RetryErrorHandler:
    """Settles failed messages by retrying or dead-lettering them."""

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        publisher: Publisher | None = None,
        store: NotificationStore | None = None,
    ) -> None:
        """Initialize the handler with its collaborators."""
        self.policy = policy or ExponentialBackoffRetryPolicy()
        self.publisher = publisher or default_publisher
        self.store = store or notification_store

    def handle(
        self,
        message: Message,
        error: Exception,
        notification_id: UUID | None = None,
        handler_name: str | None = None,
    ) -> DeliveryOutcome:
        """Schedule a retry of ``message`` or dead-letter it.

        Args:
            message: The message that failed.
            error: The failure.
            notification_id: Notification correlated with the message.
            handler_name: Handler that failed, for logging.

        Returns:
            RETRY_SCHEDULED or DEAD_LETTERED.
        """
        attempt = message.retry_count + 1
        logger.error(
            "message_handling_failed",
            handler=handler_name,
            message_id=message.message_id,
            attempt=attempt,
            error=str(error),
        )

        if not self.policy.should_retry(attempt):
            return self.dead_letter(
                message,
                error,
                notification_id,
                reason=f"Failed after {attempt} attempts: {error}",
            )

        delay = self.policy.backoff_delay(attempt)
        try:
            self.publisher.republish(message.with_retry_count(attempt), delay=delay)
        except PublishError as e:
            logger.error(
                "message_retry_publish_failed",
                message_id=message.message_id,
                attempt=attempt,
                error=str(e),
            )
            return self.dead_letter(
                message,
                error,
                notification_id,
                reason=f"Retry {attempt} could not be scheduled: {error}",
            )

        if notification_id is not None:
            self.store.record_retry(notification_id, attempt, str(error))

        logger.warning(
            "message_retry_scheduled",
            message_id=message.message_id,
            attempt=attempt,
            delay_seconds=delay.total_seconds(),
        )
        return DeliveryOutcome.RETRY_SCHEDULED

    def dead_letter(
        self,
        message: Message,
        error: Exception,
        notification_id: UUID | None = None,
        reason: str | None = None,
    ) -> DeliveryOutcome:
        """Drop a message for good and fail its notification."""
        self.policy.on_exhausted(message, error)
        if notification_id is not None:
            self.store.update_status(
                notification_id,
                NotificationStatus.FAILED,
                error_message=reason or str(error),
            )
        return DeliveryOutcome.DEAD_LETTERED
