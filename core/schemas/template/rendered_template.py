"""Result of rendering a template."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderedTemplate:
    """Subject and body with placeholders substituted."""

    subject: str | None
    body: str
