"""Logging filters for enriching log records with correlation context."""

import logging

from core.logging.context import get_message_id, get_request_id


class RequestIDFilter(logging.Filter):
    """Add request and message ids to stdlib log records.

    Records emitted outside a request or a consumed message get ``N/A``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add request_id and message_id attributes to the log record.

        Args:
            record: The log record to enrich.

        Returns:
            True to indicate the record should be logged.
        """
        record.request_id = get_request_id() or "N/A"
        record.message_id = get_message_id() or "N/A"
        return True
