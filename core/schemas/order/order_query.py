"""Query parameters for listing orders."""

from core.enums import OrderStatus
from core.schemas.page_query import PageQuery


class OrderQuery(PageQuery):
    """Filters for the order list. ``search`` matches user id or order number."""

    search: str | None = None
    status: OrderStatus | None = None
    user_id: str | None = None
