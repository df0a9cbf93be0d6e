"""Publisher: hands channel-typed events to the broker."""

from datetime import timedelta

import structlog

from core.broker import Broker, Message, get_broker
from core.constants import RETRY_COUNT_HEADER
from core.enums import ChannelType
from core.exceptions import PublishError
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.events import event_body

logger = structlog.get_logger(__name__)


class Publisher:
    """Serialize events and publish them to their channel-type exchange.

    There is no deduplication at publish time; consumers tolerate
    redelivery instead.
    """

    def __init__(self, broker: Broker | None = None) -> None:
        """Initialize the publisher.

        Args:
            broker: Broker to publish to, defaults to the configured one
        """
        self._broker = broker

    @property
    def broker(self) -> Broker:
        """Broker in use, resolved lazily from settings."""
        return self._broker or get_broker()

    def publish(
        self,
        event: BaseSchemaModel,
        channel_type: ChannelType | str,
        event_name: str,
    ) -> Message:
        """Publish an event.

        Args:
            event: Event payload.
            channel_type: Exchange to publish to.
            event_name: Routing key.

        Returns:
            The published message envelope.

        Raises:
            PublishError: If the broker could not take the message.
        """
        message = Message(
            exchange=ChannelType(channel_type).value,
            routing_key=event_name,
            body=event_body(event),
            headers={RETRY_COUNT_HEADER: 0},
        )
        self._send(message)
        return message

    def republish(self, message: Message, delay: timedelta | None = None) -> Message:
        """Publish an existing envelope again, optionally after a delay.

        Raises:
            PublishError: If the broker could not take the message.
        """
        self._send(message, delay)
        return message

    def _send(self, message: Message, delay: timedelta | None = None) -> None:
        try:
            self.broker.publish(message, delay=delay)
        except PublishError:
            raise
        except Exception as e:
            logger.error(
                "event_publish_failed",
                message_id=message.message_id,
                exchange=message.exchange,
                routing_key=message.routing_key,
                error=str(e),
            )
            raise PublishError(message.exchange, message.routing_key, cause=e) from e


publisher = Publisher()
