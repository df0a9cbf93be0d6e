"""Helpers creating model instances with realistic fake data."""

import uuid
from decimal import Decimal

from faker import Faker

from core.enums import ChannelType, NotificationStatus, OrderStatus
from core.models import Channel, Notification, Order, Template

fake = Faker()

CHANNEL_CONFIGURATIONS = {
    ChannelType.EMAIL: {"provider": "smtp", "fromEmail": "orders@example.com", "fromName": "Shop"},
    ChannelType.SMS: {
        "provider": "twilio",
        "accountSid": "AC123",
        "authToken": "secret",
        "fromNumber": "+15550000000",
    },
    ChannelType.PUSH: {"provider": "fcm", "serverKey": "server-key"},
    ChannelType.WHATSAPP: {
        "provider": "twilio",
        "accountSid": "AC123",
        "authToken": "secret",
        "fromNumber": "+15550000001",
    },
    ChannelType.SLACK: {"webhookUrl": "https://hooks.slack.com/services/T000/B000/XXX"},
}


def create_channel(channel_type=ChannelType.EMAIL, **overrides) -> Channel:
    """Channel of the given type with a valid configuration."""
    channel_type = ChannelType(channel_type)
    fields = {
        "name": f"{channel_type.value}-{fake.word()}",
        "channel_type": channel_type.value,
        "configuration": dict(CHANNEL_CONFIGURATIONS[channel_type]),
        "is_active": True,
    }
    fields.update(overrides)
    return Channel.objects.create(**fields)


def create_template(name="order-created", channel="email", **overrides) -> Template:
    """Active template; defaults to an order confirmation email."""
    fields = {
        "name": name,
        "channel": channel,
        "subject": "Order ###orderNumber###",
        "body": "<p>Order ###orderNumber### for ###price###. ###notes###</p>",
        "variables": ["orderNumber", "price", "notes"],
        "metadata": {},
    }
    fields.update(overrides)
    return Template.objects.create(**fields)


def create_notification(channel: Channel, **overrides) -> Notification:
    """Pending notification on ``channel``."""
    fields = {
        "recipient_id": fake.email(),
        "channel": channel,
        "template_name": "generic-notification",
        "data": {"message": fake.sentence()},
        "idempotency_key": str(uuid.uuid4()),
        "status": NotificationStatus.PENDING.value,
    }
    fields.update(overrides)
    return Notification.objects.create(**fields)


def create_order(**overrides) -> Order:
    """Pending order with a unique order number."""
    fields = {
        "user_id": fake.email(),
        "order_number": f"ORD-{fake.unique.random_number(digits=13, fix_len=True)}",
        "status": OrderStatus.PENDING.value,
        "total": Decimal("49.90"),
        "notes": None,
    }
    fields.update(overrides)
    return Order.objects.create(**fields)
