"""Base class of the channel consumers.

Each handler consumes one queue. For every message it parses the event,
moves the correlated notification to ``processing``, renders the content,
sends it through the channel's provider and reports the outcome:

- success: notification ``sent`` and a success delivery log;
- permanent failure (malformed payload, missing template or variables):
  notification ``failed``, failed delivery log, dead-lettered;
- anything else: failed delivery log, then retry or dead-letter through
  the retry error handler.

Messages whose notification already reached ``sent`` or ``failed`` are
acknowledged without sending, so redelivered messages are harmless.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

import structlog

from core.broker import Message
from core.enums import ChannelType, DeliveryOutcome, DeliveryStatus, NotificationStatus
from core.exceptions import (
    ConflictError,
    NotificationNotFoundError,
    PermanentDeliveryError,
    TemplateNotFoundError,
)
from core.logging import clear_message_id, set_message_id
from core.models import Notification
from core.providers import NotificationProvider, get_provider
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.template import RenderedTemplate
from core.services.channel_registry import ChannelRegistry, channel_registry
from core.services.notification_store import NotificationStore, notification_store
from core.services.retry_policy import RetryErrorHandler
from core.services.template_renderer import TemplateRenderer, template_renderer

logger = structlog.get_logger(__name__)


class ChannelHandler(ABC):
    """Consumes events of one (exchange, routing key) binding."""

    channel_type: ClassVar[ChannelType]
    event_schema: ClassVar[type[BaseSchemaModel]]

    def __init__(
        self,
        store: NotificationStore | None = None,
        channels: ChannelRegistry | None = None,
        renderer: TemplateRenderer | None = None,
        retry_handler: RetryErrorHandler | None = None,
        provider: NotificationProvider | None = None,
    ) -> None:
        """Initialize the handler with its collaborators.

        Args:
            store: Notification store, defaults to the module store
            channels: Channel registry for provider configuration
            renderer: Template renderer
            retry_handler: Error handler for failed deliveries
            provider: Provider override; defaults to NOTIFICATION_PROVIDERS
        """
        self.store = store or notification_store
        self.channels = channels or channel_registry
        self.renderer = renderer or template_renderer
        self.retry_handler = retry_handler or RetryErrorHandler(store=self.store)
        self._provider = provider

    @property
    def name(self) -> str:
        """Handler name, which is also its queue name."""
        return type(self).__name__

    @property
    def provider(self) -> NotificationProvider:
        """Provider used to send."""
        return self._provider or get_provider(self.channel_type)

    def handle(self, message: Message) -> DeliveryOutcome:
        """Process one message and settle it.

        Returns:
            How the message was settled.
        """
        set_message_id(message.message_id)
        try:
            return self._handle(message)
        finally:
            clear_message_id()

    def _handle(self, message: Message) -> DeliveryOutcome:
        notification = self._load_notification(self._notification_id(message.body))
        notification_id = notification.id if notification is not None else None
        log = logger.bind(
            handler=self.name,
            message_id=message.message_id,
            notification_id=str(notification_id) if notification_id else None,
            retry_count=message.retry_count,
        )

        if notification is not None and notification.is_terminal:
            log.info("notification_already_settled", status=notification.status)
            return DeliveryOutcome.SKIPPED

        try:
            event = self.event_schema.model_validate(message.body)
        except PydanticValidationError as e:
            log.error("event_payload_invalid", errors=e.errors(include_url=False))
            return self._fail_permanently(
                message,
                notification_id,
                PermanentDeliveryError("Malformed event payload", detail=str(e)),
            )

        if notification is not None:
            try:
                self.store.update_status(notification.id, NotificationStatus.PROCESSING)
            except ConflictError:
                log.warning("notification_claimed_concurrently")
                return DeliveryOutcome.SKIPPED

        log.info("message_processing_started")
        try:
            content = self.render(event)
            response = self.send(event, content, self._channel_configuration(event))
        except PermanentDeliveryError as e:
            return self._fail_permanently(message, notification_id, e)
        except Exception as e:
            log.error("message_delivery_failed", error=str(e), error_type=type(e).__name__)
            if notification_id is not None:
                self.store.append_delivery_log(
                    notification_id, DeliveryStatus.FAILED, error_message=str(e)
                )
            return self.retry_handler.handle(
                message, e, notification_id=notification_id, handler_name=self.name
            )

        if notification_id is not None:
            self.store.update_status(notification_id, NotificationStatus.SENT)
            self.store.append_delivery_log(
                notification_id, DeliveryStatus.SUCCESS, response_data=response
            )
        log.info("message_delivered")
        return DeliveryOutcome.SUCCESS

    @abstractmethod
    def render(self, event: Any) -> RenderedTemplate:
        """Produce the content to send for an event.

        Raises:
            PermanentDeliveryError: If the content cannot be produced.
        """

    @abstractmethod
    def send(
        self, event: Any, content: RenderedTemplate, configuration: dict[str, Any]
    ) -> dict[str, Any]:
        """Hand the content to the provider and return its response."""

    def render_or_fallback(
        self,
        template_name: str | None,
        data: dict[str, Any],
        subject: str | None,
        body: str | None,
    ) -> RenderedTemplate:
        """Render the named template, or the literal subject and body.

        The literal body is used when no template name is given or when no
        active template exists for it. Placeholders in the literal text are
        substituted from ``data`` as well.

        Raises:
            TemplateNotFoundError: If the template is missing and there is no body.
            MissingVariablesError: If the template's required variables are absent.
        """
        if template_name:
            try:
                return self.renderer.render(template_name, self.channel_type, data)
            except TemplateNotFoundError:
                if not body:
                    raise
                logger.warning(
                    "template_missing_using_literal_body",
                    handler=self.name,
                    template_name=template_name,
                )
        elif not body:
            raise PermanentDeliveryError("Event has neither a template name nor a body")

        return RenderedTemplate(
            subject=self.renderer.render_text(subject, data) if subject else subject,
            body=self.renderer.render_text(body, data),
        )

    def _fail_permanently(
        self,
        message: Message,
        notification_id: UUID | None,
        error: Exception,
    ) -> DeliveryOutcome:
        logger.error(
            "message_failed_permanently",
            handler=self.name,
            message_id=message.message_id,
            error=str(error),
            error_type=type(error).__name__,
        )
        if notification_id is not None:
            self.store.append_delivery_log(
                notification_id, DeliveryStatus.FAILED, error_message=str(error)
            )
        return self.retry_handler.dead_letter(message, error, notification_id)

    def _channel_configuration(self, event: Any) -> dict[str, Any]:
        """Configuration of the event's channel; empty when it is gone or inactive."""
        channel_id = getattr(event, "channel_id", None)
        if channel_id is None:
            return {}
        active = self.channels.list_active([channel_id])
        if not active:
            logger.warning(
                "channel_unavailable_using_defaults",
                handler=self.name,
                channel_id=str(channel_id),
            )
            return {}
        return active[0].configuration or {}

    def _load_notification(self, notification_id: UUID | None) -> Notification | None:
        if notification_id is None:
            return None
        try:
            return self.store.get(notification_id, include_deleted=True)
        except NotificationNotFoundError:
            logger.warning(
                "correlated_notification_missing",
                handler=self.name,
                notification_id=str(notification_id),
            )
            return None

    @staticmethod
    def _notification_id(body: dict[str, Any]) -> UUID | None:
        """``metadata.notificationId`` of a raw body, if it is a valid UUID."""
        metadata = body.get("metadata") if isinstance(body, dict) else None
        raw = metadata.get("notificationId") if isinstance(metadata, dict) else None
        if not raw:
            return None
        try:
            return UUID(str(raw))
        except ValueError:
            return None
