"""Template schemas."""

from core.schemas.template.rendered_template import RenderedTemplate
from core.schemas.template.template_create import TemplateChannel, TemplateCreate
from core.schemas.template.template_detail import TemplateDetail
from core.schemas.template.template_query import TemplateQuery
from core.schemas.template.template_update import TemplateUpdate

__all__ = [
    "RenderedTemplate",
    "TemplateChannel",
    "TemplateCreate",
    "TemplateDetail",
    "TemplateQuery",
    "TemplateUpdate",
]
