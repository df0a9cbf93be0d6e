"""Push provider that only logs what it would send."""

from typing import Any

import structlog

from core.enums import ChannelType
from core.providers.base import NotificationProvider
from core.schemas.template import RenderedTemplate

logger = structlog.get_logger(__name__)


class LoggingPushProvider(NotificationProvider):
    """Stand-in for FCM/APNs; logs the push instead of sending it."""

    channel_type = ChannelType.PUSH

    def send(
        self,
        recipients: list[str],
        content: RenderedTemplate,
        configuration: dict[str, Any],
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Log the push notification and report it as accepted."""
        logger.info(
            "push_send_simulated",
            provider=configuration.get("provider"),
            device_count=len(recipients),
            title=content.subject,
            data_keys=sorted(data or {}),
        )
        return {
            "provider": configuration.get("provider"),
            "accepted": len(recipients),
            "simulated": True,
        }
