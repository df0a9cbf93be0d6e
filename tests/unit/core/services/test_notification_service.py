"""Tests for NotificationService."""

import uuid
from unittest.mock import Mock

from core.broker.memory import InMemoryBroker
from core.enums import ChannelType
from core.exceptions import (
    ChannelNotFoundError,
    ConflictError,
    InactiveChannelError,
    NotificationNotFoundError,
    PublishError,
    UnsupportedChannelError,
)
from core.models import Notification
from core.schemas.notification import NotificationCreate, NotificationUpdate
from core.services.notification_service import NotificationService, build_notification_event
from core.services.publisher import Publisher
from tests.base import BaseUnitTest
from tests.factories import create_channel, create_notification


class TestNotificationService(BaseUnitTest):
    """Test suite for NotificationService."""

    def setUp(self):
        """Set up test fixtures."""
        self.broker = InMemoryBroker()
        self.service = NotificationService(publisher=Publisher(broker=self.broker))
        self.channel = create_channel(ChannelType.EMAIL)

    def _payload(self, **overrides):
        fields = {
            "recipient_id": "ann@example.com",
            "channel_id": self.channel.id,
            "template_name": "generic-notification",
            "data": {"message": "Your parcel shipped"},
        }
        fields.update(overrides)
        return NotificationCreate(**fields)

    def test_create_persists_and_publishes(self):
        """Test the notification is stored pending and its event is queued."""
        notification = self.service.create(self._payload(idempotency_key="k-1"))

        self.assertEqual(notification.status, "pending")
        self.assertEqual(notification.idempotency_key, "k-1")
        message = self.broker.queues["EmailNotificationHandler"][0]
        self.assertEqual(message.exchange, "email")
        self.assertEqual(message.routing_key, "EmailNotificationEvent")
        self.assertEqual(message.retry_count, 0)
        self.assertEqual(message.body["metadata"], {"notificationId": str(notification.id)})
        self.assertEqual(message.body["emails"], ["ann@example.com"])
        self.assertEqual(message.body["templateName"], "generic-notification")
        self.assertEqual(message.body["channelId"], str(self.channel.id))

    def test_create_generates_idempotency_key(self):
        """Test a key is generated when the caller sends none."""
        notification = self.service.create(self._payload())

        self.assertTrue(notification.idempotency_key)

    def test_duplicate_key_publishes_once(self):
        """Test a replayed request conflicts and publishes nothing more."""
        self.service.create(self._payload(idempotency_key="k-1"))

        with self.assertRaises(ConflictError):
            self.service.create(self._payload(idempotency_key="k-1"))

        self.assertEqual(len(self.broker.published), 1)
        self.assertEqual(Notification.objects.count(), 1)

    def test_unknown_channel(self):
        """Test a missing channel raises not found."""
        with self.assertRaises(ChannelNotFoundError):
            self.service.create(self._payload(channel_id=uuid.uuid4()))

    def test_inactive_channel(self):
        """Test inactive channels are rejected before anything is stored."""
        channel = create_channel(ChannelType.SMS, is_active=False)

        with self.assertRaises(InactiveChannelError):
            self.service.create(self._payload(channel_id=channel.id))

        self.assertEqual(Notification.objects.count(), 0)

    def test_channel_type_without_route(self):
        """Test channel types with no consumers are rejected."""
        channel = create_channel(ChannelType.SLACK)

        with self.assertRaises(UnsupportedChannelError):
            self.service.create(self._payload(channel_id=channel.id))

    def test_publish_failure_leaves_notification_pending(self):
        """Test a broker failure reaches the caller after the row is written."""
        broker = Mock()
        broker.publish.side_effect = ConnectionError("redis down")
        service = NotificationService(publisher=Publisher(broker=broker))

        with self.assertRaises(PublishError):
            service.create(self._payload(idempotency_key="k-2"))

        self.assertEqual(Notification.objects.get(idempotency_key="k-2").status, "pending")

    def test_update_status_to_failed(self):
        """Test a status update stores the error and the failure time."""
        notification = create_notification(self.channel)

        updated = self.service.update_status(
            notification.id, NotificationUpdate(status="failed", error_message="bounced")
        )

        self.assertEqual(updated.status, "failed")
        self.assertEqual(updated.error_message, "bounced")
        self.assertIsNotNone(updated.failed_at)

    def test_update_status_of_sent_notification_is_noop(self):
        """Test a terminal notification is returned unchanged."""
        notification = create_notification(self.channel, status="sent")

        updated = self.service.update_status(
            notification.id, NotificationUpdate(status="pending")
        )

        self.assertEqual(updated.status, "sent")
        self.assertEqual(updated.version, notification.version)

    def test_update_status_of_deleted_notification(self):
        """Test soft-deleted notifications are not found."""
        notification = create_notification(self.channel)
        self.service.remove(notification.id)

        with self.assertRaises(NotificationNotFoundError):
            self.service.update_status(notification.id, NotificationUpdate(status="sent"))


class TestBuildNotificationEvent(BaseUnitTest):
    """Event shapes per channel type."""

    def test_sms_event_uses_message(self):
        """Test SMS events carry the phone number and literal message."""
        channel = create_channel(ChannelType.SMS)
        notification = create_notification(
            channel, recipient_id="+15551234567", data={"message": "Code 1234"}
        )

        event, event_name = build_notification_event(notification, channel)

        self.assertEqual(event_name, "SmsNotificationEvent")
        self.assertEqual(event.phone_numbers, ["+15551234567"])
        self.assertEqual(event.message, "Code 1234")
        self.assertEqual(event.metadata.notification_id, notification.id)

    def test_push_event_uses_title_and_data(self):
        """Test push events carry the device token and data."""
        channel = create_channel(ChannelType.PUSH)
        notification = create_notification(
            channel, recipient_id="device-token", data={"title": "Hi", "body": "There"}
        )

        event, event_name = build_notification_event(notification, channel)

        self.assertEqual(event_name, "PushNotificationEvent")
        self.assertEqual(event.device_tokens, ["device-token"])
        self.assertEqual((event.title, event.body), ("Hi", "There"))
        self.assertEqual(event.data, {"title": "Hi", "body": "There"})

    def test_whatsapp_has_no_event(self):
        """Test unsupported channel types raise."""
        channel = create_channel(ChannelType.WHATSAPP)
        notification = create_notification(channel)

        with self.assertRaises(UnsupportedChannelError):
            build_notification_event(notification, channel)
