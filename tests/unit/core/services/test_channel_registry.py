"""Tests for ChannelRegistry."""

import uuid

from core.enums import ChannelType
from core.exceptions import ChannelConfigurationError, ChannelNotFoundError, ConflictError
from core.schemas.channel import ChannelCreate, ChannelQuery, ChannelUpdate
from core.services.channel_registry import ChannelRegistry
from tests.base import BaseUnitTest
from tests.factories import create_channel, create_notification


class TestChannelRegistry(BaseUnitTest):
    """Test suite for ChannelRegistry."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = ChannelRegistry()

    def test_create_stores_normalized_configuration(self):
        """Test the configuration is validated and stored in camelCase."""
        channel = self.registry.create(
            ChannelCreate(
                name="Transactional email",
                type="email",
                configuration={"from_email": "shop@example.com", "fromName": "Shop"},
            )
        )

        self.assertEqual(channel.channel_type, "email")
        self.assertEqual(
            channel.configuration,
            {"provider": "smtp", "fromEmail": "shop@example.com", "fromName": "Shop"},
        )
        self.assertTrue(channel.is_active)

    def test_create_rejects_configuration_of_other_type(self):
        """Test an SMS configuration is not accepted for an email channel."""
        with self.assertRaises(ChannelConfigurationError) as ctx:
            self.registry.create(
                ChannelCreate(
                    name="bad",
                    type="email",
                    configuration={"provider": "twilio", "accountSid": "AC1"},
                )
            )

        self.assertEqual(ctx.exception.channel_type, "email")
        self.assertIn("fromEmail", ctx.exception.detail)

    def test_get_unknown_channel(self):
        """Test a missing channel raises not found."""
        with self.assertRaises(ChannelNotFoundError):
            self.registry.get(uuid.uuid4())

    def test_list_filters_by_type_and_activity(self):
        """Test type and isActive filters combine."""
        create_channel(ChannelType.EMAIL)
        create_channel(ChannelType.SMS)
        create_channel(ChannelType.SMS, is_active=False)

        page = self.registry.list(ChannelQuery(type="sms", is_active=True))

        self.assertEqual(page.total, 1)
        self.assertEqual(page.items[0].channel_type, "sms")

    def test_list_active_restricts_to_ids(self):
        """Test only active channels among the given IDs are returned."""
        email = create_channel(ChannelType.EMAIL)
        inactive = create_channel(ChannelType.SMS, is_active=False)
        create_channel(ChannelType.PUSH)

        channels = self.registry.list_active([email.id, inactive.id, uuid.uuid4()])

        self.assertEqual(channels, [email])

    def test_list_active_without_ids_returns_all_active(self):
        """Test no IDs means every active channel."""
        first = create_channel(ChannelType.EMAIL)
        second = create_channel(ChannelType.PUSH)
        create_channel(ChannelType.SMS, is_active=False)

        self.assertCountEqual(self.registry.list_active(), [first, second])

    def test_update_revalidates_configuration(self):
        """Test a new configuration is checked against the stored type."""
        channel = create_channel(ChannelType.SMS)

        with self.assertRaises(ChannelConfigurationError):
            self.registry.update(channel.id, ChannelUpdate(configuration={"provider": "fcm"}))

    def test_update_deactivates(self):
        """Test partial updates leave other fields alone."""
        channel = create_channel(ChannelType.PUSH, name="mobile")

        updated = self.registry.update(channel.id, ChannelUpdate(is_active=False))

        self.assertFalse(updated.is_active)
        self.assertEqual(updated.name, "mobile")

    def test_remove_unused_channel(self):
        """Test a channel without notifications can be deleted."""
        channel = create_channel()

        self.registry.remove(channel.id)

        with self.assertRaises(ChannelNotFoundError):
            self.registry.get(channel.id)

    def test_remove_channel_in_use_conflicts(self):
        """Test a channel referenced by notifications cannot be deleted."""
        channel = create_channel()
        create_notification(channel)

        with self.assertRaises(ConflictError):
            self.registry.remove(channel.id)

    def test_available_channel_types(self):
        """Test every channel type is listed."""
        types = [channel.type for channel in self.registry.available_channel_types()]

        self.assertEqual(types, ["email", "sms", "push", "whatsapp", "slack"])

    def test_collection_annotations_use_builtin_list(self):
        """Test return annotations are not shadowed by the list method."""
        for method in (ChannelRegistry.list_active, ChannelRegistry.available_channel_types):
            with self.subTest(method=method.__name__):
                self.assertIs(method.__annotations__["return"].__origin__, list)
