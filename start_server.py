"""Production server startup script for the notification hub API.

Starts the Django application with Gunicorn. Consumers run separately
through ``manage.py run_consumers``; delayed retries need ``rqscheduler``.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the notification hub API using Gunicorn.

    Configures and launches Gunicorn:
    - Binds to 0.0.0.0:$PORT (default 8000) for container accessibility
    - GUNICORN_WORKERS worker processes (default 4), 2 threads each
    - 60-second timeout for long-running requests
    - Logs to stdout/stderr for container log aggregation
    """
    sys.argv = [
        "gunicorn",
        "notification_hub.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        os.getenv("GUNICORN_WORKERS", "4"),
        "--threads",
        "2",
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
