"""Notification workflow: create a notification and publish its event.

The notification row is written first; the event is published afterwards.
If publishing fails the error reaches the caller and the notification stays
``pending``.
"""

import uuid
from uuid import UUID

from django.db.models import QuerySet

import structlog

from core.broker import ROUTABLE_CHANNEL_TYPES, EventName
from core.enums import ChannelType
from core.exceptions import InactiveChannelError, UnsupportedChannelError
from core.models import Channel, DeliveryLog, Notification
from core.pagination import Page
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.events import (
    EmailNotificationEvent,
    EventMetadata,
    PushNotificationEvent,
    SmsNotificationEvent,
)
from core.schemas.notification import NotificationCreate, NotificationQuery, NotificationUpdate
from core.services.channel_registry import ChannelRegistry, channel_registry
from core.services.notification_store import NotificationStore, notification_store
from core.services.publisher import Publisher
from core.services.publisher import publisher as default_publisher

logger = structlog.get_logger(__name__)


def build_notification_event(
    notification: Notification, channel: Channel
) -> tuple[BaseSchemaModel, str]:
    """Event and routing key delivering a notification through its channel.

    ``subject``, ``body``, ``message`` and ``title`` in the notification
    data are passed along as the literal fallback content.

    Raises:
        UnsupportedChannelError: If the channel type has no event shape.
    """
    data = notification.data or {}
    metadata = EventMetadata(notification_id=notification.id)
    channel_type = ChannelType(channel.channel_type)

    if channel_type == ChannelType.EMAIL:
        event = EmailNotificationEvent(
            emails=[notification.recipient_id],
            subject=data.get("subject"),
            body=data.get("body"),
            template_name=notification.template_name,
            template_data=data,
            metadata=metadata,
            channel_id=channel.id,
        )
        return event, EventName.EMAIL_NOTIFICATION
    if channel_type == ChannelType.SMS:
        event = SmsNotificationEvent(
            phone_numbers=[notification.recipient_id],
            message=data.get("message") or data.get("body"),
            template_name=notification.template_name,
            template_data=data,
            metadata=metadata,
            channel_id=channel.id,
        )
        return event, EventName.SMS_NOTIFICATION
    if channel_type == ChannelType.PUSH:
        event = PushNotificationEvent(
            device_tokens=[notification.recipient_id],
            title=data.get("title") or data.get("subject"),
            body=data.get("body") or data.get("message"),
            template_name=notification.template_name,
            data=data,
            metadata=metadata,
            channel_id=channel.id,
        )
        return event, EventName.PUSH_NOTIFICATION
    raise UnsupportedChannelError(channel_type.value)


class NotificationService:
    """Entry point for notifications requested through the API."""

    def __init__(
        self,
        store: NotificationStore | None = None,
        channels: ChannelRegistry | None = None,
        publisher: Publisher | None = None,
    ) -> None:
        """Initialize notification service."""
        self.store = store or notification_store
        self.channels = channels or channel_registry
        self.publisher = publisher or default_publisher

    def create(self, data: NotificationCreate) -> Notification:
        """Create a notification and publish it to its channel.

        Args:
            data: Creation payload; an idempotency key is generated when missing.

        Returns:
            The created, still pending, notification.

        Raises:
            ChannelNotFoundError: If the channel does not exist.
            InactiveChannelError: If the channel is not active.
            UnsupportedChannelError: If the channel type cannot be routed.
            ConflictError: If the idempotency key was used before.
            PublishError: If the event could not be published.
        """
        channel = self.channels.get(data.channel_id)
        if not channel.is_active:
            raise InactiveChannelError(channel.id)
        channel_type = ChannelType(channel.channel_type)
        if channel_type not in ROUTABLE_CHANNEL_TYPES:
            raise UnsupportedChannelError(channel_type.value)

        if not data.idempotency_key:
            data = data.model_copy(update={"idempotency_key": str(uuid.uuid4())})

        notification = self.store.create(data)
        event, event_name = build_notification_event(notification, channel)
        message = self.publisher.publish(event, channel_type, event_name)

        logger.info(
            "notification_queued",
            notification_id=str(notification.id),
            channel_type=channel_type.value,
            event_name=event_name,
            message_id=message.message_id,
        )
        return notification

    def get(self, notification_id: UUID) -> Notification:
        """Get a notification by ID."""
        return self.store.get(notification_id)

    def list(self, query: NotificationQuery) -> Page[Notification]:
        """List notifications, newest first."""
        return self.store.list(query)

    def update_status(self, notification_id: UUID, data: NotificationUpdate) -> Notification:
        """Apply a status update from the API.

        Deleted notifications are not found. Sent and failed ones are
        returned unchanged.

        Raises:
            NotificationNotFoundError: If the notification does not exist.
            ConflictError: If a concurrent update won the race.
        """
        notification = self.store.get(notification_id)
        return self.store.update_status(
            notification.id,
            data.status or notification.status,
            error_message=data.error_message,
        )

    def remove(self, notification_id: UUID) -> Notification:
        """Soft delete a notification."""
        return self.store.remove(notification_id)

    def restore(self, notification_id: UUID) -> Notification:
        """Recover a soft-deleted notification."""
        return self.store.restore(notification_id)

    def delivery_logs(self, notification_id: UUID) -> QuerySet[DeliveryLog]:
        """Delivery attempts of a notification."""
        return self.store.delivery_logs(notification_id)


notification_service = NotificationService()
