"""SMTP email provider."""

import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any

from django.conf import settings

import structlog

from core.enums import ChannelType
from core.exceptions import PermanentDeliveryError
from core.providers.base import NotificationProvider
from core.schemas.template import RenderedTemplate

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class SMTPEmailProvider(NotificationProvider):
    """Send email via SMTP.

    Connection settings come from the channel configuration (``host``,
    ``port``, ``username``, ``password``) and fall back to the EMAIL_*
    settings. Every message is sent as HTML with a plain text alternative.
    """

    channel_type = ChannelType.EMAIL

    def send(
        self,
        recipients: list[str],
        content: RenderedTemplate,
        configuration: dict[str, Any],
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one message per recipient over a single SMTP connection.

        Raises:
            PermanentDeliveryError: If a recipient address is invalid.
            smtplib.SMTPException: If the SMTP conversation fails.
        """
        invalid = [address for address in recipients if not self._is_valid_email(address)]
        if invalid:
            raise PermanentDeliveryError(f"Invalid email address: {', '.join(invalid)}")

        sender_email = configuration.get("fromEmail") or settings.DEFAULT_FROM_EMAIL
        sender = formataddr((configuration.get("fromName") or "", sender_email))
        host = configuration.get("host") or settings.EMAIL_HOST
        port = configuration.get("port") or settings.EMAIL_PORT
        username = configuration.get("username") or settings.EMAIL_HOST_USER
        password = configuration.get("password") or settings.EMAIL_HOST_PASSWORD
        subject = content.subject or ""

        try:
            with smtplib.SMTP(host, port) as server:
                if settings.EMAIL_USE_TLS:
                    server.starttls()
                if username and password:
                    server.login(username, password)
                for address in recipients:
                    server.send_message(self._build_message(sender, address, subject, content.body))
        except smtplib.SMTPException as e:
            logger.error(
                "email_send_failed",
                recipients=recipients,
                subject=subject,
                error=str(e),
            )
            raise

        logger.info("email_sent", recipients=recipients, subject=subject)
        return {
            "provider": configuration.get("provider", "smtp"),
            "accepted": list(recipients),
            "host": host,
        }

    def _build_message(self, sender: str, to_email: str, subject: str, html: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = sender
        message["To"] = to_email
        message.attach(MIMEText(self._html_to_plain(html), "plain"))
        message.attach(MIMEText(html, "html"))
        return message

    def _is_valid_email(self, email: str) -> bool:
        return bool(EMAIL_PATTERN.match(email))

    def _html_to_plain(self, html: str) -> str:
        """Strip tags and decode the common entities."""
        text = re.sub(r"<[^>]+>", "", html)
        for entity, char in (
            ("&nbsp;", " "),
            ("&lt;", "<"),
            ("&gt;", ">"),
            ("&amp;", "&"),
            ("&quot;", '"'),
        ):
            text = text.replace(entity, char)
        return re.sub(r"\n\s*\n", "\n\n", text).strip()
