"""End-to-end tests: API request, broker, consumer, provider and status."""

from datetime import timedelta
from unittest.mock import Mock, patch

from core.enums import ChannelType
from core.models import DeliveryLog, Notification
from tests.base import BaseComponentTest
from tests.factories import create_channel, create_template


class PipelineTestCase(BaseComponentTest):
    """Patches every provider with one mock that records the sends."""

    def setUp(self):
        """Set up test fixtures."""
        super().setUp()
        self.provider = Mock()
        self.provider.send.return_value = {"provider": "mock", "accepted": 1}
        patcher = patch("core.handlers.base.get_provider", return_value=self.provider)
        patcher.start()
        self.addCleanup(patcher.stop)

    def log_statuses(self, notification_id):
        """Delivery log statuses of a notification in attempt order."""
        return list(
            DeliveryLog.objects.filter(notification_id=notification_id)
            .order_by("attempt_number")
            .values_list("status", flat=True)
        )


class TestNotificationDelivery(PipelineTestCase):
    """A single notification travelling through the pipeline."""

    def setUp(self):
        """Register an email channel and the generic template."""
        super().setUp()
        self.channel = create_channel(ChannelType.EMAIL)
        create_template(
            name="generic-notification",
            subject="News for you",
            body="<p>###message###</p>",
            variables=["message"],
        )
        response = self.client.post(
            "/api/v1/notifications",
            {
                "recipientId": "ann@example.com",
                "channelId": str(self.channel.id),
                "templateName": "generic-notification",
                "data": {"message": "Your parcel shipped"},
            },
            content_type="application/json",
        )
        self.notification_id = response.json()["id"]

    def notification(self):
        """Current state of the notification."""
        return Notification.objects.get(pk=self.notification_id)

    def test_delivered_on_first_attempt(self):
        """Test a successful send marks the notification sent."""
        outcomes = self.broker.drain()

        self.assertEqual(outcomes, ["success"])
        recipients, content, configuration = self.provider.send.call_args.args
        self.assertEqual(recipients, ["ann@example.com"])
        self.assertEqual(content.body, "<p>Your parcel shipped</p>")
        self.assertEqual(configuration["fromEmail"], "orders@example.com")
        detail = self.client.get(f"/api/v1/notifications/{self.notification_id}").json()
        self.assertEqual(detail["status"], "sent")
        self.assertIsNotNone(detail["sentAt"])
        logs = self.client.get(
            f"/api/v1/notifications/{self.notification_id}/delivery-logs"
        ).json()["data"]
        self.assertEqual([log["status"] for log in logs], ["success"])

    def test_succeeds_on_third_retry(self):
        """Test three transient failures are retried before the send succeeds."""
        self.provider.send.side_effect = [
            ConnectionError("smtp timeout"),
            ConnectionError("smtp timeout"),
            ConnectionError("smtp timeout"),
            {"provider": "mock", "accepted": 1},
        ]

        outcomes = self.broker.drain()

        self.assertEqual(
            outcomes, ["retry_scheduled", "retry_scheduled", "retry_scheduled", "success"]
        )
        notification = self.notification()
        self.assertEqual(notification.status, "sent")
        self.assertEqual(notification.retry_count, 3)
        self.assertEqual(
            self.log_statuses(notification.id), ["failed", "failed", "failed", "success"]
        )

    def test_dead_lettered_after_retries_exhausted(self):
        """Test the fourth failure fails the notification for good."""
        self.provider.send.side_effect = ConnectionError("smtp timeout")

        outcomes = self.broker.drain()

        self.assertEqual(
            outcomes, ["retry_scheduled", "retry_scheduled", "retry_scheduled", "dead_lettered"]
        )
        self.assertEqual(self.provider.send.call_count, 4)
        notification = self.notification()
        self.assertEqual(notification.status, "failed")
        self.assertEqual(notification.error_message, "Failed after 4 attempts: smtp timeout")
        self.assertIsNotNone(notification.failed_at)
        self.assertEqual(self.log_statuses(notification.id), ["failed"] * 4)
        self.assertEqual(self.broker.pending(), 0)
        self.assertEqual(self.broker.delayed, [])

    def test_backoff_doubles(self):
        """Test retries wait one, two and four seconds."""
        self.provider.send.side_effect = ConnectionError("smtp timeout")

        delays = []
        self.broker.drain(include_delayed=False)
        while self.broker.delayed:
            delays.append(self.broker.delayed[0].delay)
            self.assertEqual(
                self.broker.delayed[0].message.retry_count, len(delays)
            )
            self.broker.release_delayed()
            self.broker.drain(include_delayed=False)

        self.assertEqual(delays, [timedelta(seconds=1), timedelta(seconds=2), timedelta(seconds=4)])

    def test_redelivery_after_success_is_skipped(self):
        """Test a duplicate delivery of a settled message sends nothing."""
        message = self.broker.published[0]
        self.broker.drain()

        self.broker.deliver("EmailNotificationHandler", message, None)
        outcomes = self.broker.drain()

        self.assertEqual(outcomes, ["skipped"])
        self.provider.send.assert_called_once()
        self.assertEqual(self.log_statuses(self.notification_id), ["success"])

    def test_missing_template_fails_without_retry(self):
        """Test a template removed before delivery fails permanently."""
        self.client.delete(
            f"/api/v1/templates/{self.client.get('/api/v1/templates').json()['data'][0]['id']}"
        )

        outcomes = self.broker.drain()

        self.assertEqual(outcomes, ["dead_lettered"])
        self.provider.send.assert_not_called()
        self.assertEqual(self.notification().status, "failed")


class TestOrderDelivery(PipelineTestCase):
    """An order confirmation fanned out to email, SMS and push."""

    def setUp(self):
        """Register one channel and one order template per routable type."""
        super().setUp()
        self.channels = {
            channel_type: create_channel(channel_type)
            for channel_type in (ChannelType.EMAIL, ChannelType.SMS, ChannelType.PUSH)
        }
        create_template()
        create_template(
            name="order-sms",
            channel="sms",
            subject=None,
            body="Order ###orderNumber### confirmed! Total: $###total###.",
            variables=["orderNumber", "total"],
        )
        create_template(
            name="order-push",
            channel="push",
            subject="Order Confirmation",
            body="Your order ###orderNumber### ($###total###) has been confirmed!",
            variables=["orderNumber", "total"],
        )

    def test_every_channel_delivered(self):
        """Test each channel's confirmation is rendered and sent."""
        response = self.client.post(
            "/api/v1/orders",
            {"userId": "ann@example.com", "total": "19.99"},
            content_type="application/json",
        )
        order_number = response.json()["orderNumber"]

        outcomes = self.broker.drain()

        self.assertEqual(outcomes, ["success", "success", "success"])
        bodies = sorted(call.args[1].body for call in self.provider.send.call_args_list)
        self.assertEqual(
            bodies,
            sorted(
                [
                    f"<p>Order {order_number} for $19.99. No additional notes</p>",
                    f"Order {order_number} confirmed! Total: $19.99.",
                    f"Your order {order_number} ($19.99) has been confirmed!",
                ]
            ),
        )
        self.assertEqual(Notification.objects.filter(status="sent").count(), 3)
