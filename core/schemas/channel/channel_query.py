"""Query parameters for listing channels."""

from core.enums import ChannelType
from core.schemas.page_query import PageQuery


class ChannelQuery(PageQuery):
    """Optional filters for the channel list."""

    type: ChannelType | None = None
    is_active: bool | None = None
