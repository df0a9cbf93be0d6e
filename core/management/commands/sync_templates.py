"""Sync message templates from the file system into the database.

``NOTIFICATION_TEMPLATES_DIR/manifest.json`` lists the templates and the
file holding each body. Email subjects default to the ``<title>`` of the
HTML body. Missing templates are created; templates whose content changed
are updated, which bumps their version; unchanged ones are skipped.
"""

import json
import re
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError

import structlog

from core.exceptions import ConflictError
from core.schemas.template import TemplateCreate, TemplateUpdate
from core.services.template_registry import template_registry

logger = structlog.get_logger(__name__)

TITLE_PATTERN = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_COMPARED_FIELDS = ("subject", "body", "variables", "metadata")


class Command(BaseCommand):
    """Create or update templates from the templates directory."""

    help = "Sync templates from NOTIFICATION_TEMPLATES_DIR into the database"

    def add_arguments(self, parser):
        """Register the directory and dry-run options."""
        parser.add_argument(
            "--dir",
            dest="templates_dir",
            default=None,
            help="Templates directory (default: NOTIFICATION_TEMPLATES_DIR)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without writing",
        )

    def handle(self, *args, **options):
        """Sync every manifest entry and print a summary."""
        templates_dir = Path(options["templates_dir"] or settings.NOTIFICATION_TEMPLATES_DIR)
        entries = self._read_manifest(templates_dir)
        dry_run = options["dry_run"]

        stats = {"created": 0, "updated": 0, "skipped": 0, "errors": 0}
        for entry in entries:
            label = f"{entry.get('name')} ({entry.get('channel')})"
            try:
                template = self._load_template(templates_dir, entry)
                outcome = self._sync(template, dry_run)
            except (KeyError, OSError, ValidationError, ConflictError, CommandError) as e:
                self.stderr.write(self.style.ERROR(f"  Error: {label}: {e}"))
                logger.error("template_sync_failed", template=label, error=str(e))
                stats["errors"] += 1
                continue
            stats[outcome] += 1
            self.stdout.write(f"  {outcome.capitalize()}: {label}")

        summary = ", ".join(f"{count} {name}" for name, count in stats.items())
        if dry_run:
            summary += " (dry run)"
        if stats["errors"]:
            raise CommandError(f"Template sync finished with errors: {summary}")
        self.stdout.write(self.style.SUCCESS(f"Templates synced: {summary}"))

    def _read_manifest(self, templates_dir: Path) -> list[dict]:
        manifest_path = templates_dir / "manifest.json"
        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise CommandError(f"Template manifest not found: {manifest_path}") from None
        except json.JSONDecodeError as e:
            raise CommandError(f"Template manifest is not valid JSON: {e}") from e
        entries = manifest.get("templates")
        if not isinstance(entries, list):
            raise CommandError("Template manifest must contain a 'templates' list")
        return entries

    def _load_template(self, templates_dir: Path, entry: dict) -> TemplateCreate:
        """Build the template described by a manifest entry."""
        body = (templates_dir / entry["file"]).read_text(encoding="utf-8")
        subject = entry.get("subject")
        if subject is None and entry.get("channel") == "email":
            match = TITLE_PATTERN.search(body)
            if match is None:
                raise CommandError(f"No subject and no <title> in {entry['file']}")
            subject = match.group(1).strip()
        return TemplateCreate(
            name=entry.get("name"),
            channel=entry.get("channel"),
            subject=subject,
            body=body,
            variables=entry.get("variables", []),
            metadata=entry.get("metadata", {}),
        )

    def _sync(self, template: TemplateCreate, dry_run: bool) -> str:
        existing = template_registry.find(template.name, template.channel)
        if existing is None:
            if not dry_run:
                template_registry.create(template)
            return "created"

        changes = {
            field: getattr(template, field)
            for field in _COMPARED_FIELDS
            if getattr(existing, field) != getattr(template, field)
        }
        if not changes:
            return "skipped"
        if not dry_run:
            template_registry.update(existing.id, TemplateUpdate(**changes))
        return "updated"
