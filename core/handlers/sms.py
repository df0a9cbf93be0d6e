"""SMS consumers."""

from typing import Any

from core.enums import ChannelType
from core.exceptions import PermanentDeliveryError
from core.handlers.base import ChannelHandler
from core.schemas.events import SmsNotificationEvent
from core.schemas.template import RenderedTemplate


class SmsNotificationHandler(ChannelHandler):
    """Sends ``SmsNotificationEvent`` messages."""

    channel_type = ChannelType.SMS
    event_schema = SmsNotificationEvent

    def render(self, event: SmsNotificationEvent) -> RenderedTemplate:
        """Render the event's template, falling back to its literal message."""
        return self.render_or_fallback(
            event.template_name, event.template_data, None, event.message
        )

    def send(
        self,
        event: SmsNotificationEvent,
        content: RenderedTemplate,
        configuration: dict[str, Any],
    ) -> dict[str, Any]:
        """Send to every number in ``phone_numbers``."""
        return self.provider.send(event.phone_numbers, content, configuration)


class SmsVerificationHandler(SmsNotificationHandler):
    """Sends verification codes. The message is always literal."""

    def render(self, event: SmsNotificationEvent) -> RenderedTemplate:
        """Substitute template data into the literal message.

        Raises:
            PermanentDeliveryError: If the event has no message.
        """
        if not event.message:
            raise PermanentDeliveryError("Verification SMS has no message")
        return RenderedTemplate(
            subject=None,
            body=self.renderer.render_text(event.message, event.template_data),
        )
