"""Logging utilities for the notification hub."""

from core.logging.config import setup_logging, setup_test_logging
from core.logging.context import (
    clear_message_id,
    clear_request_id,
    get_message_id,
    get_request_id,
    set_message_id,
    set_request_id,
)
from core.logging.filters import RequestIDFilter

__all__ = [
    "RequestIDFilter",
    "clear_message_id",
    "clear_request_id",
    "get_message_id",
    "get_request_id",
    "set_message_id",
    "set_request_id",
    "setup_logging",
    "setup_test_logging",
]
