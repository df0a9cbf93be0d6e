#!/usr/bin/env python
"""Script to run the notification hub development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the Django development server.

    Uses the custom 'runlocal' command, which skips migration checks so the
    API starts without a database connection (degraded readiness).
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "notification_hub.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
