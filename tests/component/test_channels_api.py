"""Component tests for the channel endpoints."""

from uuid import uuid4

from core.enums import ChannelType
from core.models import Channel
from tests.base import BaseComponentTest
from tests.factories import create_channel, create_notification

URL = "/api/v1/channels"


class TestChannelEndpoints(BaseComponentTest):
    """Component tests for /channels."""

    def _post(self, **overrides):
        body = {
            "name": "Transactional email",
            "type": "email",
            "configuration": {"provider": "smtp", "fromEmail": "orders@example.com"},
        }
        body.update(overrides)
        return self.client.post(URL, body, content_type="application/json")

    def test_create(self):
        """Test a channel is registered with its normalized configuration."""
        response = self._post(description="Order mails")

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["type"], "email")
        self.assertTrue(data["isActive"])
        self.assertEqual(
            data["configuration"], {"provider": "smtp", "fromEmail": "orders@example.com"}
        )

    def test_create_with_wrong_configuration(self):
        """Test a configuration that does not fit the type is rejected."""
        response = self._post(type="sms")

        self.assertEqual(response.status_code, 400)
        self.assertIn("sms", response.json()["message"])
        self.assertFalse(Channel.objects.exists())

    def test_create_with_unknown_type(self):
        """Test unknown channel types are rejected."""
        self.assertEqual(self._post(type="fax").status_code, 400)

    def test_list_filters(self):
        """Test listing by type and activity."""
        create_channel(ChannelType.EMAIL)
        create_channel(ChannelType.SMS, is_active=False)

        self.assertEqual(self.client.get(URL).json()["meta"]["totalItems"], 2)
        sms = self.client.get(URL, {"type": "sms"}).json()["data"]
        self.assertEqual([channel["type"] for channel in sms], ["sms"])
        active = self.client.get(URL, {"isActive": "true"}).json()["data"]
        self.assertEqual([channel["type"] for channel in active], ["email"])

    def test_available_types(self):
        """Test the catalogue of channel types."""
        response = self.client.get(f"{URL}/available")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [channel["type"] for channel in response.json()["data"]],
            ["email", "sms", "push", "whatsapp", "slack"],
        )

    def test_get_update_and_delete(self):
        """Test a channel's lifecycle."""
        channel = create_channel(ChannelType.PUSH)
        url = f"{URL}/{channel.id}"

        self.assertEqual(self.client.get(url).json()["name"], channel.name)

        response = self.client.patch(
            url,
            {"isActive": False, "configuration": {"provider": "apns"}},
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["isActive"])
        self.assertEqual(response.json()["configuration"], {"provider": "apns"})

        self.assertEqual(self.client.delete(url).status_code, 204)
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_update_rejects_wrong_configuration(self):
        """Test an update is validated against the channel type."""
        channel = create_channel(ChannelType.EMAIL)

        response = self.client.patch(
            f"{URL}/{channel.id}",
            {"configuration": {"fromEmail": "broken"}},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)

    def test_delete_channel_in_use(self):
        """Test channels with notifications cannot be deleted."""
        channel = create_channel()
        create_notification(channel)

        response = self.client.delete(f"{URL}/{channel.id}")

        self.assertEqual(response.status_code, 409)
        self.assertTrue(Channel.objects.filter(pk=channel.pk).exists())

    def test_unknown_and_invalid_ids(self):
        """Test unknown IDs are 404 and malformed ones 400."""
        self.assertEqual(self.client.get(f"{URL}/{uuid4()}").status_code, 404)
        self.assertEqual(self.client.get(f"{URL}/nope").status_code, 400)
