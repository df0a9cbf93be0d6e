"""Tests for the notification hub models."""

import pytest
from django.db import IntegrityError, transaction

from core.enums import NotificationStatus
from core.models import Channel, DeliveryLog, Notification, Order, Template
from tests.factories import create_channel, create_notification, create_order, create_template


def test_tables_are_owned_externally():
    """Models map onto existing tables."""
    tables = {model._meta.db_table for model in (Channel, Notification, DeliveryLog, Order, Template)}
    assert tables == {
        "channels",
        "notifications",
        "delivery_logs",
        "orders",
        "templates",
    }


@pytest.mark.django_db
class TestNotificationModel:
    """Test suite for Notification."""

    @pytest.fixture
    def notification(self):
        """Pending notification on an email channel."""
        return create_notification(create_channel(), recipient_id="ann@example.com")

    def test_defaults(self, notification):
        """New notifications start pending with no retries."""
        assert notification.status == NotificationStatus.PENDING.value
        assert notification.retry_count == 0
        assert notification.version == 0
        assert notification.sent_at is None

    def test_str(self, notification):
        """String form names template, recipient and status."""
        assert str(notification) == "generic-notification to ann@example.com (pending)"

    @pytest.mark.parametrize(
        ("status", "terminal"),
        [("pending", False), ("processing", False), ("sent", True), ("failed", True)],
    )
    def test_is_terminal(self, notification, status, terminal):
        """Only sent and failed are final."""
        notification.status = status
        assert notification.is_terminal is terminal

    def test_idempotency_key_unique(self, notification):
        """The database rejects a second row with the same key."""
        with pytest.raises(IntegrityError), transaction.atomic():
            create_notification(notification.channel, idempotency_key=notification.idempotency_key)


@pytest.mark.django_db
class TestTemplateModel:
    """Test suite for Template."""

    def test_one_live_template_per_name_and_channel(self):
        """A second live template for the pair is rejected."""
        create_template(name="welcome")
        with pytest.raises(IntegrityError), transaction.atomic():
            create_template(name="welcome")

    def test_soft_deleted_template_frees_the_pair(self):
        """A soft-deleted template does not block a new one."""
        old = create_template(name="welcome")
        Template.objects.filter(pk=old.pk).update(deleted_at=old.created_at)

        new = create_template(name="welcome")

        assert str(new) == "welcome [email] v1"


@pytest.mark.django_db
class TestDeliveryLogModel:
    """Test suite for DeliveryLog."""

    def test_attempt_numbers_unique_per_notification(self):
        """Each attempt number is used once per notification."""
        notification = create_notification(create_channel())
        DeliveryLog.objects.create(notification=notification, attempt_number=1, status="failed")

        with pytest.raises(IntegrityError), transaction.atomic():
            DeliveryLog.objects.create(notification=notification, attempt_number=1, status="success")


@pytest.mark.django_db
def test_order_number_unique():
    """Order numbers cannot repeat."""
    order = create_order()
    assert str(order) == f"{order.order_number} for {order.user_id}"
    with pytest.raises(IntegrityError), transaction.atomic():
        create_order(order_number=order.order_number)
