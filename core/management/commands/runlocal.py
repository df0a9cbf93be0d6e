"""Development server that starts without touching the database.

The notification hub does not own its schema, so the migration check that
runserver performs at startup is skipped. Readiness reports ``degraded``
until the database becomes reachable.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """runserver without the migration check."""

    help = "Start the notification hub API for local development"

    def check_migrations(self, *_args, **_kwargs):
        """Skip migration checks; the schema is managed outside this service."""
        self.stdout.write(
            self.style.WARNING(
                "Skipping migration checks (schema is managed outside the notification hub)"
            )
        )
