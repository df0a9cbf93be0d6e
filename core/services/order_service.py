"""Order workflow: persist orders and fan out their confirmations.

Creating an order writes the order, then for every target channel creates a
pending notification and publishes the channel's order event. A failure on
one channel is logged and reported in that channel's outcome; the remaining
channels are still notified.
"""

import time
from dataclasses import dataclass, field
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

import structlog

from core.broker import EventName
from core.enums import ChannelType, OrderStatus
from core.exceptions import OrderNotFoundError, UnsupportedChannelError
from core.models import Channel, Order
from core.pagination import Page, paginate
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.events import (
    EmailOrderConfirmationEvent,
    EventMetadata,
    PushNotificationEvent,
    SmsNotificationEvent,
)
from core.schemas.notification import NotificationCreate
from core.schemas.order import ChannelDispatch, OrderCreate, OrderQuery, OrderUpdate
from core.services.channel_registry import ChannelRegistry, channel_registry
from core.services.notification_store import NotificationStore, notification_store
from core.services.publisher import Publisher
from core.services.publisher import publisher as default_publisher

logger = structlog.get_logger(__name__)

# Order numbers are ``ORD-<epoch millis>``; a clash moves to the next millisecond.
_ORDER_NUMBER_ATTEMPTS = 5


@dataclass
class OrderCreation:
    """A created order and what happened on each of its channels."""

    order: Order
    dispatches: list[ChannelDispatch] = field(default_factory=list)


@dataclass(frozen=True)
class OrderNotificationPlan:
    """Notification row and event to publish for one channel."""

    template_name: str
    data: dict
    event: BaseSchemaModel
    event_name: str


class OrderService:
    """Create and maintain orders."""

    def __init__(
        self,
        store: NotificationStore | None = None,
        channels: ChannelRegistry | None = None,
        publisher: Publisher | None = None,
    ) -> None:
        """Initialize order service."""
        self.store = store or notification_store
        self.channels = channels or channel_registry
        self.publisher = publisher or default_publisher

    def create(self, data: OrderCreate) -> OrderCreation:
        """Persist an order and notify every target channel.

        Target channels are the active ones among ``channel_ids``, or every
        active channel when no IDs are given.

        Args:
            data: Order payload.

        Returns:
            The order and per-channel outcomes.
        """
        order = self._insert_order(data)
        logger.info("order_created", order_id=str(order.id), order_number=order.order_number)

        channels = self.channels.list_active(data.channel_ids)
        if not channels:
            logger.warning(
                "order_has_no_active_channels",
                order_id=str(order.id),
                requested_channel_ids=[str(channel_id) for channel_id in data.channel_ids or []],
            )
            return OrderCreation(order=order)

        creation = OrderCreation(order=order)
        for channel in channels:
            creation.dispatches.append(self._notify_channel(order, channel))

        logger.info(
            "order_notifications_dispatched",
            order_id=str(order.id),
            published=sum(1 for d in creation.dispatches if d.status == "published"),
            failed=sum(1 for d in creation.dispatches if d.status == "failed"),
            skipped=sum(1 for d in creation.dispatches if d.status == "skipped"),
        )
        return creation

    def list(self, query: OrderQuery) -> Page[Order]:
        """List live orders, newest first.

        ``search`` matches user IDs and order numbers case-insensitively.
        """
        queryset = Order.objects.filter(deleted_at__isnull=True)
        if query.search:
            queryset = queryset.filter(
                Q(user_id__icontains=query.search) | Q(order_number__icontains=query.search)
            )
        if query.status:
            queryset = queryset.filter(status=OrderStatus(query.status).value)
        if query.user_id:
            queryset = queryset.filter(user_id=query.user_id)
        queryset = queryset.order_by("-created_at", "-id")
        return paginate(queryset, query.page_request())

    def get(self, order_id: UUID) -> Order:
        """Get a live order by ID.

        Raises:
            OrderNotFoundError: If the order does not exist or was removed.
        """
        try:
            return Order.objects.get(pk=order_id, deleted_at__isnull=True)
        except Order.DoesNotExist:
            raise OrderNotFoundError(order_id) from None

    def update(self, order_id: UUID, data: OrderUpdate) -> Order:
        """Update the status, notes or metadata of an order."""
        order = self.get(order_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("status") is None:
            changes.pop("status", None)
        for field_name, value in changes.items():
            setattr(order, field_name, value)
        order.save()
        logger.info("order_updated", order_id=str(order.id), fields=sorted(changes))
        return order

    def remove(self, order_id: UUID) -> Order:
        """Soft delete an order."""
        order = self.get(order_id)
        order.deleted_at = timezone.now()
        order.save(update_fields=["deleted_at", "updated_at"])
        logger.info("order_removed", order_id=str(order_id))
        return order

    def _insert_order(self, data: OrderCreate) -> Order:
        millis = int(time.time() * 1000)
        attempt = 0
        while True:
            order_number = f"ORD-{millis + attempt}"
            try:
                with transaction.atomic():
                    return Order.objects.create(
                        user_id=data.user_id,
                        order_number=order_number,
                        status=OrderStatus.PENDING.value,
                        total=data.total,
                        metadata=data.metadata,
                        notes=data.notes,
                    )
            except IntegrityError:
                attempt += 1
                if attempt >= _ORDER_NUMBER_ATTEMPTS:
                    raise
                logger.warning("order_number_taken", order_number=order_number)

    def _notify_channel(self, order: Order, channel: Channel) -> ChannelDispatch:
        """Create the pending notification for one channel and publish its event."""
        channel_type = ChannelType(channel.channel_type)
        try:
            plan = self._plan(order, channel)
        except UnsupportedChannelError:
            logger.info(
                "order_channel_skipped",
                order_id=str(order.id),
                channel_id=str(channel.id),
                channel_type=channel_type.value,
            )
            return ChannelDispatch(
                channel_id=channel.id, channel_type=channel_type.value, status="skipped"
            )

        notification = None
        try:
            notification = self.store.create(
                NotificationCreate(
                    recipient_id=order.user_id,
                    channel_id=channel.id,
                    template_name=plan.template_name,
                    data=plan.data,
                    idempotency_key=(
                        f"order-{order.id}-{channel_type.value}-{channel.id}-{time.time_ns()}"
                    ),
                )
            )
            plan.event.metadata = EventMetadata(notification_id=notification.id, order_id=order.id)
            self.publisher.publish(plan.event, channel_type, plan.event_name)
        except Exception as e:
            logger.error(
                "order_channel_notification_failed",
                order_id=str(order.id),
                channel_id=str(channel.id),
                channel_type=channel_type.value,
                notification_id=str(notification.id) if notification else None,
                error=str(e),
            )
            return ChannelDispatch(
                channel_id=channel.id,
                channel_type=channel_type.value,
                status="failed",
                notification_id=notification.id if notification else None,
                error=str(e),
            )

        logger.info(
            "order_channel_notification_queued",
            order_id=str(order.id),
            channel_id=str(channel.id),
            channel_name=channel.name,
            notification_id=str(notification.id),
        )
        return ChannelDispatch(
            channel_id=channel.id,
            channel_type=channel_type.value,
            status="published",
            notification_id=notification.id,
        )

    @staticmethod
    def _plan(order: Order, channel: Channel) -> OrderNotificationPlan:
        """Template, data and event of an order confirmation on one channel.

        Raises:
            UnsupportedChannelError: If the channel type has no order event.
        """
        channel_type = ChannelType(channel.channel_type)
        total = f"{order.total:.2f}"

        if channel_type == ChannelType.EMAIL:
            data = {
                "orderNumber": order.order_number,
                "price": f"${total}",
                "notes": order.notes or "No additional notes",
            }
            event = EmailOrderConfirmationEvent(
                emails=[order.user_id],
                subject="Order Confirmation",
                body=f"Your order #{order.order_number} has been created successfully!",
                template_name="order-created",
                template_data=data,
                channel_id=channel.id,
                order_id=order.id,
            )
            return OrderNotificationPlan(
                "order-created", data, event, EventName.EMAIL_ORDER_CONFIRMATION
            )

        if channel_type == ChannelType.SMS:
            data = {"orderNumber": order.order_number, "total": total}
            event = SmsNotificationEvent(
                phone_numbers=[order.user_id],
                message=f"Order #{order.order_number} confirmed! Thank you for your purchase.",
                template_name="order-sms",
                template_data=data,
                channel_id=channel.id,
            )
            return OrderNotificationPlan("order-sms", data, event, EventName.SMS_NOTIFICATION)

        if channel_type == ChannelType.PUSH:
            data = {
                "orderId": str(order.id),
                "orderNumber": order.order_number,
                "total": total,
            }
            event = PushNotificationEvent(
                device_tokens=[order.user_id],
                title="Order Confirmation",
                body=f"Your order #{order.order_number} has been confirmed!",
                template_name="order-push",
                data=data,
                channel_id=channel.id,
            )
            return OrderNotificationPlan("order-push", data, event, EventName.PUSH_ORDER_UPDATE)

        raise UnsupportedChannelError(channel_type.value)


order_service = OrderService()
