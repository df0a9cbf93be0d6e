"""SMS provider that only logs what it would send."""

from typing import Any

import structlog

from core.enums import ChannelType
from core.providers.base import NotificationProvider
from core.schemas.template import RenderedTemplate

logger = structlog.get_logger(__name__)


class LoggingSmsProvider(NotificationProvider):
    """Stand-in for Twilio/Nexmo; logs the message instead of sending it."""

    channel_type = ChannelType.SMS

    def send(
        self,
        recipients: list[str],
        content: RenderedTemplate,
        configuration: dict[str, Any],
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Log the SMS and report it as accepted."""
        logger.info(
            "sms_send_simulated",
            provider=configuration.get("provider"),
            from_number=configuration.get("fromNumber"),
            recipients=recipients,
            length=len(content.body),
        )
        return {
            "provider": configuration.get("provider"),
            "accepted": list(recipients),
            "simulated": True,
        }
