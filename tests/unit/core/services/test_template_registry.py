"""Tests for TemplateRegistry."""

import uuid

from core.exceptions import ConflictError, TemplateNotFoundError
from core.schemas.template import TemplateCreate, TemplateQuery, TemplateUpdate
from core.services.template_registry import TemplateRegistry
from tests.base import BaseUnitTest
from tests.factories import create_template


class TestTemplateRegistry(BaseUnitTest):
    """Test suite for TemplateRegistry."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = TemplateRegistry()

    def test_create_template(self):
        """Test a template is created at version 1."""
        template = self.registry.create(
            TemplateCreate(
                name="welcome",
                channel="sms",
                body="Welcome ###name###",
                variables=["name"],
            )
        )

        self.assertEqual(template.version, 1)
        self.assertTrue(template.is_active)
        self.assertIsNone(template.subject)

    def test_duplicate_name_and_channel_conflicts(self):
        """Test only one live template may exist per (name, channel)."""
        create_template(name="welcome", channel="email")

        with self.assertRaises(ConflictError):
            self.registry.create(TemplateCreate(name="welcome", channel="email", body="x"))

    def test_same_name_on_other_channel_allowed(self):
        """Test uniqueness is per channel."""
        create_template(name="welcome", channel="email")

        template = self.registry.create(TemplateCreate(name="welcome", channel="push", body="x"))

        self.assertEqual(template.channel, "push")

    def test_update_bumps_version(self):
        """Test every update increments the version."""
        template = create_template()

        updated = self.registry.update(template.id, TemplateUpdate(body="New ###orderNumber###"))

        self.assertEqual(updated.version, 2)
        self.assertEqual(updated.body, "New ###orderNumber###")
        self.assertEqual(updated.subject, template.subject)

    def test_update_can_clear_subject(self):
        """Test an explicit null subject is applied."""
        template = create_template()

        updated = self.registry.update(template.id, TemplateUpdate(subject=None))

        self.assertIsNone(updated.subject)

    def test_rename_onto_existing_pair_conflicts(self):
        """Test a rename cannot collide with another live template."""
        create_template(name="taken", channel="email")
        template = create_template(name="free", channel="email")

        with self.assertRaises(ConflictError):
            self.registry.update(template.id, TemplateUpdate(name="taken"))

    def test_removed_template_can_be_recreated_but_not_restored(self):
        """Test soft delete frees the pair and restore checks it again."""
        template = create_template(name="promo", channel="email")
        self.registry.remove(template.id)

        self.registry.create(TemplateCreate(name="promo", channel="email", body="v2"))

        with self.assertRaises(ConflictError):
            self.registry.restore(template.id)

    def test_restore_removed_template(self):
        """Test a removed template comes back."""
        template = create_template()
        self.registry.remove(template.id)

        with self.assertRaises(TemplateNotFoundError):
            self.registry.get(template.id)

        restored = self.registry.restore(template.id)
        self.assertIsNone(restored.deleted_at)

    def test_get_active_ignores_inactive(self):
        """Test inactive templates are not used at send time."""
        create_template(name="paused", is_active=False)

        with self.assertRaises(TemplateNotFoundError):
            self.registry.get_active("paused", "email")
        self.assertIsNotNone(self.registry.find("paused", "email"))

    def test_list_filters(self):
        """Test list filters by channel and skips removed templates."""
        create_template(name="a", channel="email")
        create_template(name="b", channel="sms")
        removed = create_template(name="c", channel="sms")
        self.registry.remove(removed.id)

        page = self.registry.list(TemplateQuery(channel="sms"))

        self.assertEqual([t.name for t in page.items], ["b"])

    def test_get_unknown_template(self):
        """Test a missing template raises not found."""
        with self.assertRaises(TemplateNotFoundError):
            self.registry.get(uuid.uuid4())
