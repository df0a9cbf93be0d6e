"""Tests for Publisher."""

from datetime import timedelta
from unittest.mock import Mock

import pytest

from core.broker import EventName
from core.broker.memory import InMemoryBroker
from core.constants import RETRY_COUNT_HEADER
from core.enums import ChannelType
from core.exceptions import PublishError
from core.schemas.events import SmsNotificationEvent
from core.services.publisher import Publisher


@pytest.fixture
def event():
    """SMS event with snake_case fields."""
    return SmsNotificationEvent(phone_numbers=["+15551234567"], message="Code 1234")


class TestPublisher:
    """Test suite for Publisher."""

    def test_publish_serializes_camel_case(self, event):
        """Test the body is camelCase JSON without null fields."""
        broker = InMemoryBroker()

        message = Publisher(broker=broker).publish(
            event, ChannelType.SMS, EventName.SMS_NOTIFICATION
        )

        assert message.exchange == "sms"
        assert message.headers == {RETRY_COUNT_HEADER: 0}
        assert message.body == {
            "phoneNumbers": ["+15551234567"],
            "message": "Code 1234",
            "templateData": {},
            "metadata": {},
        }
        assert list(broker.queues["SmsNotificationHandler"]) == [message]

    def test_republish_passes_delay(self, event):
        """Test a republished envelope keeps its delay."""
        broker = Mock()
        publisher = Publisher(broker=broker)
        message = publisher.publish(event, "sms", EventName.SMS_NOTIFICATION)

        publisher.republish(message.with_retry_count(1), delay=timedelta(seconds=1))

        republished = broker.publish.call_args
        assert republished.args[0].retry_count == 1
        assert republished.kwargs["delay"] == timedelta(seconds=1)

    def test_transport_errors_wrapped(self, event):
        """Test unexpected broker errors raise PublishError."""
        broker = Mock()
        broker.publish.side_effect = OSError("connection refused")

        with pytest.raises(PublishError) as exc_info:
            Publisher(broker=broker).publish(event, "sms", EventName.SMS_NOTIFICATION)

        assert exc_info.value.exchange == "sms"
        assert "connection refused" in exc_info.value.detail
