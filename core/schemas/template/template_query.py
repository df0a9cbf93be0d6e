"""Query parameters for listing templates."""

from core.schemas.page_query import PageQuery
from core.schemas.template.template_create import TemplateChannel


class TemplateQuery(PageQuery):
    """Optional filters for the template list."""

    name: str | None = None
    channel: TemplateChannel | None = None
    is_active: bool | None = None
