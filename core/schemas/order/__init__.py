"""Order schemas."""

from core.schemas.order.channel_dispatch import ChannelDispatch
from core.schemas.order.order_create import OrderCreate
from core.schemas.order.order_created import OrderCreated
from core.schemas.order.order_detail import OrderDetail
from core.schemas.order.order_query import OrderQuery
from core.schemas.order.order_update import OrderUpdate

__all__ = [
    "ChannelDispatch",
    "OrderCreate",
    "OrderCreated",
    "OrderDetail",
    "OrderQuery",
    "OrderUpdate",
]
