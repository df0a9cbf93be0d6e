"""Schema for updating templates."""

from typing import Any

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.template.template_create import TemplateChannel


class TemplateUpdate(BaseSchemaModel):
    """Partial template update. Every update bumps the template version."""

    name: str | None = Field(None, min_length=1, max_length=255)
    channel: TemplateChannel | None = None
    subject: str | None = Field(None, max_length=500)
    body: str | None = Field(None, min_length=1)
    variables: list[str] | None = None
    metadata: dict[str, Any] | None = None
    is_active: bool | None = None
