"""Exchanges, routing keys and subscriber queues.

Every channel type is a direct exchange and every event name is a routing
key. Each handler owns one queue, named after the handler class, bound to a
single (exchange, routing key) pair.
"""

from dataclasses import dataclass

from core.enums import ChannelType


class EventName:
    """Routing keys of the events the consumers subscribe to."""

    EMAIL_NOTIFICATION = "EmailNotificationEvent"
    EMAIL_ORDER_CONFIRMATION = "EmailOrderConfirmationEvent"
    SMS_NOTIFICATION = "SmsNotificationEvent"
    SMS_VERIFICATION = "SmsVerificationEvent"
    PUSH_NOTIFICATION = "PushNotificationEvent"
    PUSH_ORDER_UPDATE = "PushOrderUpdateEvent"


@dataclass(frozen=True)
class Binding:
    """A subscriber queue bound to an (exchange, routing key) pair."""

    exchange: str
    routing_key: str
    handler_path: str

    @property
    def queue(self) -> str:
        """Queue name, which is the handler class name."""
        return self.handler_path.rsplit(".", 1)[-1]


BINDINGS: tuple[Binding, ...] = (
    Binding(
        ChannelType.EMAIL.value,
        EventName.EMAIL_NOTIFICATION,
        "core.handlers.email.EmailNotificationHandler",
    ),
    Binding(
        ChannelType.EMAIL.value,
        EventName.EMAIL_ORDER_CONFIRMATION,
        "core.handlers.email.EmailOrderConfirmationHandler",
    ),
    Binding(
        ChannelType.SMS.value,
        EventName.SMS_NOTIFICATION,
        "core.handlers.sms.SmsNotificationHandler",
    ),
    Binding(
        ChannelType.SMS.value,
        EventName.SMS_VERIFICATION,
        "core.handlers.sms.SmsVerificationHandler",
    ),
    Binding(
        ChannelType.PUSH.value,
        EventName.PUSH_NOTIFICATION,
        "core.handlers.push.PushNotificationHandler",
    ),
    Binding(
        ChannelType.PUSH.value,
        EventName.PUSH_ORDER_UPDATE,
        "core.handlers.push.PushOrderUpdateHandler",
    ),
)

# Channel types that have an event shape and at least one subscriber.
ROUTABLE_CHANNEL_TYPES = frozenset({ChannelType.EMAIL, ChannelType.SMS, ChannelType.PUSH})

QUEUE_NAMES: tuple[str, ...] = tuple(binding.queue for binding in BINDINGS)


def binding_for_queue(queue_name: str) -> Binding:
    """Return the binding that owns ``queue_name``.

    Raises:
        KeyError: If no handler listens on the queue.
    """
    for binding in BINDINGS:
        if binding.queue == queue_name:
            return binding
    raise KeyError(queue_name)
