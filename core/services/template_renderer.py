"""Template renderer: fills ``###key###`` placeholders with notification data."""

import re
from typing import Any

import structlog

from core.enums import ChannelType
from core.exceptions import MissingVariablesError
from core.models import Template
from core.schemas.template import RenderedTemplate
from core.services.template_registry import TemplateRegistry, template_registry

logger = structlog.get_logger(__name__)

PLACEHOLDER_MARK = "###"


class TemplateRenderer:
    """Render registered templates for a channel type."""

    def __init__(self, registry: TemplateRegistry | None = None) -> None:
        """Initialize the renderer.

        Args:
            registry: Template lookup, defaults to the module registry
        """
        self.registry = registry or template_registry

    def render(
        self,
        template_name: str,
        channel: ChannelType | str,
        data: dict[str, Any],
    ) -> RenderedTemplate:
        """Render the active template for (name, channel) with ``data``.

        Args:
            template_name: Template name.
            channel: Channel type the template is registered for.
            data: Values for the placeholders.

        Returns:
            Rendered subject (or push title) and body.

        Raises:
            TemplateNotFoundError: If no live, active template exists.
            MissingVariablesError: If a required variable is absent from ``data``.
        """
        channel = ChannelType(channel).value
        template = self.registry.get_active(template_name, channel)
        rendered = self.render_template(template, data)
        logger.info(
            "template_rendered",
            template_name=template_name,
            channel=channel,
            template_version=template.version,
        )
        return rendered

    @classmethod
    def render_template(cls, template: Template, data: dict[str, Any]) -> RenderedTemplate:
        """Validate and render a template instance."""
        missing = cls.missing_variables(template.variables or [], data)
        if missing:
            raise MissingVariablesError(missing, template_name=template.name)

        return RenderedTemplate(
            subject=cls.render_text(template.subject, data) if template.subject else None,
            body=cls.render_text(template.body, data),
        )

    @staticmethod
    def missing_variables(required: list[str], data: dict[str, Any]) -> list[str]:
        """Required variable names that are not keys of ``data``."""
        return [name for name in required if name not in data]

    @staticmethod
    def render_text(text: str, data: dict[str, Any]) -> str:
        """Replace ``###key###`` for every key of ``data``.

        Keys are matched literally, so they may contain spaces or ``#``.
        ``None`` renders as an empty string; placeholders without data are
        left as is.
        """
        if not text or not data:
            return text or ""

        values = {str(key): value for key, value in data.items()}
        # Longest first: a key may itself contain another placeholder.
        keys = sorted(values, key=len, reverse=True)
        pattern = re.compile(
            "|".join(re.escape(f"{PLACEHOLDER_MARK}{key}{PLACEHOLDER_MARK}") for key in keys)
        )

        def substitute(match: re.Match) -> str:
            value = values[match.group(0)[len(PLACEHOLDER_MARK) : -len(PLACEHOLDER_MARK)]]
            return "" if value is None else str(value)

        return pattern.sub(substitute, text)


template_renderer = TemplateRenderer()
