"""Background job that delivers broker messages to their handler.

RQ workers run ``consume_message`` for every message put on a subscriber
queue. The job returns normally however the message was settled (sent,
retried or dead-lettered), so RQ only records a failed job when the
pipeline itself broke.
"""

from typing import Any

import structlog

from core.broker import Message
from core.handlers import get_handler

logger = structlog.get_logger(__name__)


def consume_message(queue_name: str, raw_message: dict[str, Any]) -> str:
    """Process one message from ``queue_name``.

    Args:
        queue_name: Subscriber queue the message was delivered to.
        raw_message: Message envelope as produced by ``Message.to_dict``.

    Returns:
        The delivery outcome value.

    Raises:
        KeyError: If no handler is bound to the queue.
    """
    message = Message.from_dict(raw_message)
    try:
        handler = get_handler(queue_name)
    except KeyError:
        logger.error(
            "queue_has_no_handler",
            queue=queue_name,
            message_id=message.message_id,
        )
        raise

    outcome = handler.handle(message)
    logger.info(
        "message_consumed",
        queue=queue_name,
        message_id=message.message_id,
        outcome=outcome.value,
    )
    return outcome.value
