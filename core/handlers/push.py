"""Push consumers."""

from typing import Any

from core.enums import ChannelType
from core.handlers.base import ChannelHandler
from core.schemas.events import PushNotificationEvent
from core.schemas.template import RenderedTemplate


class PushNotificationHandler(ChannelHandler):
    """Sends ``PushNotificationEvent`` messages.

    The template subject becomes the push title.
    """

    channel_type = ChannelType.PUSH
    event_schema = PushNotificationEvent
    default_title: str | None = None

    def render(self, event: PushNotificationEvent) -> RenderedTemplate:
        """Render the event's template, falling back to its literal title and body."""
        rendered = self.render_or_fallback(
            event.template_name, event.data, event.title, event.body
        )
        if rendered.subject or not self.default_title:
            return rendered
        return RenderedTemplate(subject=self.default_title, body=rendered.body)

    def send(
        self,
        event: PushNotificationEvent,
        content: RenderedTemplate,
        configuration: dict[str, Any],
    ) -> dict[str, Any]:
        """Send to every token in ``device_tokens`` with the event data attached."""
        return self.provider.send(event.device_tokens, content, configuration, data=event.data)


class PushOrderUpdateHandler(PushNotificationHandler):
    """Sends order status pushes."""

    default_title = "Order Update"
