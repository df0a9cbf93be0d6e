"""Response returned after creating an order."""

from pydantic import Field

from core.schemas.order.channel_dispatch import ChannelDispatch
from core.schemas.order.order_detail import OrderDetail


class OrderCreated(OrderDetail):
    """Created order together with its per-channel notification outcomes."""

    notifications: list[ChannelDispatch] = Field(default_factory=list)
