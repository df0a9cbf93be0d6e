"""Django application configuration for core."""

from django.apps import AppConfig
from django.conf import settings


class CoreConfig(AppConfig):
    """Configuration class for the core application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self) -> None:
        """Configure structlog once Django is ready.

        Test settings keep structlog on the stdlib loggers they silence.
        """
        from core.logging import setup_logging, setup_test_logging  # noqa: PLC0415

        if getattr(settings, "TEST_MODE", False):
            setup_test_logging()
        else:
            setup_logging()
