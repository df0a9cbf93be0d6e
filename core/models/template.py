"""Template model for placeholder-bearing message bodies."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import ChannelType


class Template(models.Model):
    """Message template addressed by its (name, channel) pair.

    Placeholders use the ``###key###`` syntax. ``variables`` lists the keys a
    render call must supply. Only one non-deleted template may exist per
    (name, channel) pair; soft-deleted rows keep their history.

    Attributes:
        id: Unique identifier for the template.
        name: Template code, e.g. ``order-created``.
        channel: Channel type the template renders for.
        subject: Optional subject (email) or title (push).
        body: Placeholder-bearing body text.
        variables: Names of the required template variables.
        version: Incremented on every update.
        is_active: Inactive templates are never used at send time.
        deleted_at: Soft delete marker.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    channel = models.CharField(
        max_length=20,
        choices=[(channel_type.value, channel_type.value) for channel_type in ChannelType],
    )
    subject = models.CharField(max_length=500, null=True, blank=True)
    body = models.TextField()
    variables = models.JSONField(default=list)
    metadata = models.JSONField(default=dict, blank=True)
    version = models.PositiveIntegerField(default=1)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "templates"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["name", "channel"],
                condition=models.Q(deleted_at__isnull=True),
                name="uniq_template_name_channel_live",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of template."""
        return f"{self.name} [{self.channel}] v{self.version}"

    def __repr__(self) -> str:
        """Return detailed representation of template."""
        return (
            f"<Template(id={self.id}, name={self.name}, "
            f"channel={self.channel}, version={self.version})>"
        )
