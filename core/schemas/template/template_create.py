"""Schema for creating templates."""

from typing import Any, Literal

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel

TemplateChannel = Literal["email", "sms", "push"]


class TemplateCreate(BaseSchemaModel):
    """Request body for creating a template."""

    name: str = Field(
        ..., min_length=1, max_length=255, description="Template name, unique per channel"
    )
    channel: TemplateChannel = Field(..., description="Channel type the template renders for")
    subject: str | None = Field(
        None, max_length=500, description="Subject line with ###placeholders###"
    )
    body: str = Field(..., min_length=1, description="Body with ###placeholders###")
    variables: list[str] = Field(
        default_factory=list, description="Variables required to render"
    )
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
