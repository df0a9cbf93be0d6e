"""Structlog configuration: JSON file logs plus colored console output."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from core.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

_SHARED_PRE_CHAIN = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    add_request_context,
]


def setup_logging(log_file_path: str | None = None, log_level: str | None = None) -> None:
    """Configure structlog over the standard library logging machinery.

    API processes and consumer workers both call this once at startup. Log
    events are rendered as JSON into a rotating file (when a path is set)
    and as a colored one-liner on the console.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/notification-hub.log,
      empty string disables the file handler)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME / ENVIRONMENT: added to every event

    Args:
        log_file_path: Overrides LOG_FILE_PATH.
        log_level: Overrides LOG_LEVEL.
    """
    if log_file_path is None:
        log_file_path = os.getenv("LOG_FILE_PATH", "./logs/notification-hub.log")
    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = []

    if log_file_path:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        # 100MB per file, ~10 days at one rotation per hour
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file_path,
            maxBytes=100 * 1024 * 1024,
            backupCount=240,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=[
                    *_SHARED_PRE_CHAIN,
                    add_service_context,
                    add_process_info,
                ],
            )
        )
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_SHARED_PRE_CHAIN,
        )
    )
    handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_request_context,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_file=log_file_path or None,
        log_level=level_name,
    )


def setup_test_logging() -> None:
    """Route structlog through stdlib so test settings can silence it."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
