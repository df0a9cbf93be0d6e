"""Email consumers."""

from typing import Any

from core.enums import ChannelType
from core.exceptions import PermanentDeliveryError
from core.handlers.base import ChannelHandler
from core.models import Order
from core.schemas.events import EmailNotificationEvent, EmailOrderConfirmationEvent
from core.schemas.template import RenderedTemplate

ORDER_CONFIRMATION_TEMPLATE = "order-created"


class EmailNotificationHandler(ChannelHandler):
    """Sends ``EmailNotificationEvent`` messages."""

    channel_type = ChannelType.EMAIL
    event_schema = EmailNotificationEvent

    def render(self, event: EmailNotificationEvent) -> RenderedTemplate:
        """Render the event's template, falling back to its literal body."""
        return self.render_or_fallback(
            event.template_name, event.template_data, event.subject, event.body
        )

    def send(
        self,
        event: EmailNotificationEvent,
        content: RenderedTemplate,
        configuration: dict[str, Any],
    ) -> dict[str, Any]:
        """Send to every address in ``emails``."""
        return self.provider.send(event.emails, content, configuration)


class EmailOrderConfirmationHandler(EmailNotificationHandler):
    """Sends order confirmations rendered from the order record."""

    event_schema = EmailOrderConfirmationEvent

    def render(self, event: EmailOrderConfirmationEvent) -> RenderedTemplate:
        """Render ``order-created`` (or the event's template) with order data.

        Raises:
            PermanentDeliveryError: If the order does not exist.
        """
        order = Order.objects.filter(pk=event.order_id).first()
        if order is None:
            raise PermanentDeliveryError(f"Order with ID {event.order_id} not found")

        data = {
            **event.template_data,
            "orderNumber": order.order_number,
            "price": f"${order.total:.2f}",
            "notes": order.notes or "No additional notes",
        }
        return self.render_or_fallback(
            event.template_name or ORDER_CONFIRMATION_TEMPLATE,
            data,
            event.subject,
            event.body,
        )
