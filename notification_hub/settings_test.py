"""Test-specific Django settings."""

from django.db.models.signals import class_prepared

from .settings import *

# Use SQLite for faster tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEBUG = False

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Messages stay in process; tests drain them explicitly.
NOTIFICATION_BROKER_BACKEND = "core.broker.memory.InMemoryBroker"

# Suppress logs during tests (only show CRITICAL errors)
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "root": {
        "handlers": ["null"],
        "level": "CRITICAL",
    },
    "loggers": {
        "django": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
        "core": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
    },
}

TEST_MODE = True

# The tables are owned by an external schema (managed=False), but tests need
# them created in the SQLite database.


def make_unmanaged_models_managed(sender, **_kwargs):
    """Signal handler to make unmanaged models managed during tests.

    This fires when each model class is prepared by Django.
    """
    if not sender._meta.managed:
        sender._meta.managed = True


class_prepared.connect(make_unmanaged_models_managed)
