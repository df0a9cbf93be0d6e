"""In-process broker for tests and single-process local runs."""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from core.broker.base import Broker, Message


@dataclass(frozen=True)
class DelayedMessage:
    """A message waiting for its retry delay."""

    queue: str
    message: Message
    delay: timedelta


class InMemoryBroker(Broker):
    """Keeps queues in memory and delivers only when drained.

    Delayed messages are recorded with their delay instead of waiting for
    it; ``drain`` releases them once the ready queues are empty.
    """

    def __init__(self, bindings=None) -> None:
        """Initialize empty queues."""
        super().__init__(bindings)
        self.queues: dict[str, deque[Message]] = {
            binding.queue: deque() for binding in self.bindings
        }
        self.delayed: list[DelayedMessage] = []
        self.published: list[Message] = []

    def deliver(self, queue_name: str, message: Message, delay: timedelta | None) -> None:
        """Append to the queue, or to the delayed list when a delay is given."""
        self.published.append(message)
        if delay:
            self.delayed.append(DelayedMessage(queue_name, message, delay))
        else:
            self.queues.setdefault(queue_name, deque()).append(message)

    def ping(self) -> bool:
        """Always reachable."""
        return True

    def pending(self) -> int:
        """Number of messages ready for delivery."""
        return sum(len(queue) for queue in self.queues.values())

    def release_delayed(self) -> int:
        """Move every delayed message onto its queue.

        Returns:
            Number of messages released.
        """
        released = self.delayed
        self.delayed = []
        for delayed in released:
            self.queues.setdefault(delayed.queue, deque()).append(delayed.message)
        return len(released)

    def drain(
        self,
        consumer: Callable[[str, dict[str, Any]], Any] | None = None,
        include_delayed: bool = True,
        max_messages: int = 1000,
    ) -> list[Any]:
        """Deliver queued messages until the broker is empty.

        Args:
            consumer: Called with (queue name, message dict); defaults to the
                consume job the RQ workers run
            include_delayed: Release delayed messages when the queues run dry
            max_messages: Safety bound on the number of deliveries

        Returns:
            The consumer's return value for each delivery, in order.
        """
        if consumer is None:
            from core.jobs.consumer_jobs import consume_message

            consumer = consume_message

        results = []
        while len(results) < max_messages:
            if not self.pending():
                if not (include_delayed and self.release_delayed()):
                    break
                continue
            for queue_name, queue in self.queues.items():
                if queue:
                    message = queue.popleft()
                    results.append(consumer(queue_name, message.to_dict()))
                    break
        return results

    def reset(self) -> None:
        """Drop every queued, delayed and recorded message."""
        for queue in self.queues.values():
            queue.clear()
        self.delayed.clear()
        self.published.clear()
