"""Broker interface and message envelope."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

import structlog

from core.broker.topology import BINDINGS, Binding
from core.constants import RETRY_COUNT_HEADER

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Message:
    """A published event as it travels through the broker.

    Attributes:
        exchange: Exchange (channel type) the event was published to.
        routing_key: Event name.
        body: JSON-serializable event payload.
        headers: Transport headers, including the retry count.
        message_id: Identifier used to correlate logs of one message.
    """

    exchange: str
    routing_key: str
    body: dict[str, Any]
    headers: dict[str, Any] = field(default_factory=dict)
    message_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def retry_count(self) -> int:
        """Number of retries already scheduled for this message."""
        return int(self.headers.get(RETRY_COUNT_HEADER) or 0)

    def with_retry_count(self, retry_count: int) -> "Message":
        """Return an identical copy carrying a new retry count header."""
        return replace(self, headers={**self.headers, RETRY_COUNT_HEADER: retry_count})

    def to_dict(self) -> dict[str, Any]:
        """Serialize for transport."""
        return {
            "message_id": self.message_id,
            "exchange": self.exchange,
            "routing_key": self.routing_key,
            "headers": dict(self.headers),
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Message":
        """Rebuild a message from its transport form."""
        return cls(
            exchange=payload["exchange"],
            routing_key=payload["routing_key"],
            body=payload.get("body") or {},
            headers=payload.get("headers") or {},
            message_id=payload.get("message_id") or uuid.uuid4().hex,
        )


class Broker(ABC):
    """Routes messages to every queue bound to their (exchange, routing key).

    Subclasses only implement delivery to a single named queue; routing and
    logging live here.
    """

    def __init__(self, bindings: tuple[Binding, ...] | None = None) -> None:
        """Initialize the broker.

        Args:
            bindings: Queue bindings, defaults to the application topology
        """
        self.bindings = bindings if bindings is not None else BINDINGS

    def queues_for(self, exchange: str, routing_key: str) -> list[str]:
        """Names of the queues bound to an (exchange, routing key) pair."""
        return [
            binding.queue
            for binding in self.bindings
            if binding.exchange == exchange and binding.routing_key == routing_key
        ]

    def publish(self, message: Message, delay: timedelta | None = None) -> list[str]:
        """Copy the message to every bound queue.

        Unroutable messages are dropped with a warning, as a direct exchange
        without a matching binding would do.

        Args:
            message: Message to publish
            delay: Deliver after this delay instead of immediately

        Returns:
            Names of the queues the message was delivered to.

        Raises:
            PublishError: If the transport rejects the message.
        """
        queues = self.queues_for(message.exchange, message.routing_key)
        if not queues:
            logger.warning(
                "message_unroutable",
                message_id=message.message_id,
                exchange=message.exchange,
                routing_key=message.routing_key,
            )
            return []

        for queue_name in queues:
            self.deliver(queue_name, message, delay)

        logger.info(
            "message_published",
            message_id=message.message_id,
            exchange=message.exchange,
            routing_key=message.routing_key,
            queues=queues,
            retry_count=message.retry_count,
            delay_seconds=delay.total_seconds() if delay else None,
        )
        return queues

    @abstractmethod
    def deliver(self, queue_name: str, message: Message, delay: timedelta | None) -> None:
        """Put a message on one queue."""

    @abstractmethod
    def ping(self) -> bool:
        """Check connectivity to the transport."""
