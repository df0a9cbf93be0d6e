"""Thread-local context for correlating logs with requests and messages.

HTTP requests carry a request id; consumer jobs carry the id of the broker
message they are processing. Both end up on every log event emitted while
the request or message is in flight.
"""

import threading

_context = threading.local()


def set_request_id(request_id: str) -> None:
    """Store the request ID in thread-local storage.

    Args:
        request_id: The unique request identifier to store.
    """
    _context.request_id = request_id


def get_request_id() -> str | None:
    """Retrieve the request ID from thread-local storage.

    Returns:
        The current request ID, or None if not set.
    """
    return getattr(_context, "request_id", None)


def clear_request_id() -> None:
    """Clear the request ID once the request completes."""
    if hasattr(_context, "request_id"):
        delattr(_context, "request_id")


def set_message_id(message_id: str) -> None:
    """Store the id of the broker message being consumed."""
    _context.message_id = message_id


def get_message_id() -> str | None:
    """Retrieve the id of the broker message being consumed."""
    return getattr(_context, "message_id", None)


def clear_message_id() -> None:
    """Clear the message id once the message is acknowledged."""
    if hasattr(_context, "message_id"):
        delattr(_context, "message_id")
