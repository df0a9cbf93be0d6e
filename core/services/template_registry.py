"""Template registry: CRUD for message templates.

Templates are addressed by (name, channel). At most one non-deleted template
may exist per pair; soft-deleted templates keep their row so they can be
restored later.
"""

from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

import structlog

from core.exceptions import ConflictError, TemplateNotFoundError
from core.models import Template
from core.pagination import Page, paginate
from core.schemas.template import TemplateCreate, TemplateQuery, TemplateUpdate

logger = structlog.get_logger(__name__)


class TemplateRegistry:
    """Create, look up and maintain templates."""

    def create(self, data: TemplateCreate) -> Template:
        """Create a template.

        Raises:
            ConflictError: If a live template with the same name and channel exists.
        """
        self._ensure_pair_free(data.name, data.channel)
        try:
            with transaction.atomic():
                template = Template.objects.create(**data.model_dump())
        except IntegrityError as e:
            raise self._pair_taken(data.name, data.channel) from e

        logger.info(
            "template_created",
            template_id=str(template.id),
            name=template.name,
            channel=template.channel,
        )
        return template

    def list(self, query: TemplateQuery) -> Page[Template]:
        """List live templates, newest first."""
        queryset = Template.objects.filter(deleted_at__isnull=True)
        if query.name:
            queryset = queryset.filter(name=query.name)
        if query.channel:
            queryset = queryset.filter(channel=query.channel)
        if query.is_active is not None:
            queryset = queryset.filter(is_active=query.is_active)
        queryset = queryset.order_by("-created_at", "-id")
        return paginate(queryset, query.page_request())

    def get(self, template_id: UUID, include_deleted: bool = False) -> Template:
        """Get a template by ID.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        queryset = Template.objects.all()
        if not include_deleted:
            queryset = queryset.filter(deleted_at__isnull=True)
        try:
            return queryset.get(pk=template_id)
        except Template.DoesNotExist:
            raise TemplateNotFoundError(resource_id=template_id) from None

    def find(self, name: str, channel: str) -> Template | None:
        """Return the live template for a pair, active or not."""
        return Template.objects.filter(name=name, channel=channel, deleted_at__isnull=True).first()

    def find_active(self, name: str, channel: str) -> Template | None:
        """Return the live, active template for a pair, if any."""
        return Template.objects.filter(
            name=name,
            channel=channel,
            is_active=True,
            deleted_at__isnull=True,
        ).first()

    def get_active(self, name: str, channel: str) -> Template:
        """Return the template used at send time for a pair.

        Raises:
            TemplateNotFoundError: If no live, active template exists.
        """
        template = self.find_active(name, channel)
        if template is None:
            raise TemplateNotFoundError(name=name, channel=channel)
        return template

    def update(self, template_id: UUID, data: TemplateUpdate) -> Template:
        """Apply a partial update and bump the template version.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            ConflictError: If a rename or channel change collides with another
                live template.
        """
        template = self.get(template_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "subject"
        }

        name = changes.get("name", template.name)
        channel = changes.get("channel", template.channel)
        if (name, channel) != (template.name, template.channel):
            self._ensure_pair_free(name, channel, exclude_id=template.id)

        for field, value in changes.items():
            setattr(template, field, value)
        template.version += 1

        try:
            with transaction.atomic():
                template.save()
        except IntegrityError as e:
            raise self._pair_taken(name, channel) from e

        logger.info(
            "template_updated",
            template_id=str(template.id),
            version=template.version,
            fields=sorted(changes),
        )
        return template

    def remove(self, template_id: UUID) -> Template:
        """Soft delete a template."""
        template = self.get(template_id)
        template.deleted_at = timezone.now()
        template.save(update_fields=["deleted_at", "updated_at"])
        logger.info("template_removed", template_id=str(template_id))
        return template

    def restore(self, template_id: UUID) -> Template:
        """Recover a soft-deleted template.

        Raises:
            ConflictError: If another live template took its name and channel.
        """
        template = self.get(template_id, include_deleted=True)
        if template.deleted_at is None:
            return template

        self._ensure_pair_free(template.name, template.channel, exclude_id=template.id)
        template.deleted_at = None
        try:
            with transaction.atomic():
                template.save(update_fields=["deleted_at", "updated_at"])
        except IntegrityError as e:
            raise self._pair_taken(template.name, template.channel) from e

        logger.info("template_restored", template_id=str(template_id))
        return template

    def _ensure_pair_free(self, name: str, channel: str, exclude_id: UUID | None = None) -> None:
        queryset = Template.objects.filter(name=name, channel=channel, deleted_at__isnull=True)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        if queryset.exists():
            raise self._pair_taken(name, channel)

    @staticmethod
    def _pair_taken(name: str, channel: str) -> ConflictError:
        return ConflictError(f"Template '{name}' already exists for channel '{channel}'")


template_registry = TemplateRegistry()
