"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "notification_hub.settings_test")
django.setup()

from core.broker import get_broker  # noqa: E402


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture
def broker():
    """In-memory broker shared by the publisher and consumers, emptied per test."""
    in_memory_broker = get_broker()
    in_memory_broker.reset()
    yield in_memory_broker
    in_memory_broker.reset()
