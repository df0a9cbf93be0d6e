"""Exceptions raised by the notification hub services.

The classes map onto the error taxonomy of the delivery pipeline:
conflicts and missing resources surface synchronously to API callers,
validation errors are permanent (never retried), and publish failures are
propagated to whoever asked for the publish.
"""

from collections.abc import Iterable


class NotificationHubError(Exception):
    """Base exception for notification hub errors."""

    def __init__(self, message: str, detail: str | None = None):
        """Initialize the error.

        Args:
            message: Error message
            detail: Additional details for the API response
        """
        self.detail = detail
        super().__init__(message)


class ConflictError(NotificationHubError):
    """Conflict error for operations that cannot be performed (409)."""


class NotFoundError(NotificationHubError):
    """A referenced resource does not exist (404)."""

    resource = "Resource"

    def __init__(self, resource_id: object, message: str | None = None):
        """Initialize not found error.

        Args:
            resource_id: Identifier of the missing resource
            message: Optional custom error message
        """
        self.resource_id = resource_id
        super().__init__(message or f"{self.resource} with ID {resource_id} not found")


class NotificationNotFoundError(NotFoundError):
    """Notification not found."""

    resource = "Notification"


class ChannelNotFoundError(NotFoundError):
    """Channel not found."""

    resource = "Channel"


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    resource = "Order"


class ValidationError(NotificationHubError):
    """Input failed validation (400). Never retried by consumers."""


class PermanentDeliveryError(ValidationError):
    """Delivery failure that retrying cannot fix."""


class TemplateNotFoundError(NotFoundError, PermanentDeliveryError):
    """No usable template exists for a (name, channel) pair."""

    resource = "Template"

    def __init__(
        self,
        resource_id: object = None,
        name: str | None = None,
        channel: str | None = None,
    ):
        """Initialize template not found error.

        Args:
            resource_id: Template ID when looked up by ID
            name: Template name when looked up by (name, channel)
            channel: Channel type when looked up by (name, channel)
        """
        self.name = name
        self.channel = channel
        message = None
        if name is not None:
            message = f"Template '{name}' not found for channel '{channel}'"
        NotFoundError.__init__(self, resource_id, message)


class MissingVariablesError(PermanentDeliveryError):
    """Render data lacks variables the template requires."""

    def __init__(self, missing: Iterable[str], template_name: str | None = None):
        """Initialize missing variables error.

        Args:
            missing: Names of the required variables absent from the data
            template_name: Template being rendered
        """
        self.missing = list(missing)
        self.template_name = template_name
        super().__init__(
            f"Missing required variables: {', '.join(self.missing)}",
            detail=f"template={template_name}" if template_name else None,
        )


class ChannelConfigurationError(ValidationError):
    """Channel configuration does not match the channel type."""

    def __init__(self, channel_type: str, errors: list | None = None):
        """Initialize channel configuration error.

        Args:
            channel_type: Channel type the configuration was checked against
            errors: Field-level validation errors
        """
        self.channel_type = channel_type
        self.errors = errors or []
        super().__init__(
            f"Invalid configuration for channel type '{channel_type}'",
            detail="; ".join(
                f"{'.'.join(str(loc) for loc in error.get('loc', ()))}: {error.get('msg')}"
                for error in self.errors
            )
            or None,
        )


class UnsupportedChannelError(ValidationError):
    """Channel type has no event shape and cannot be routed."""

    def __init__(self, channel_type: str):
        """Initialize unsupported channel error.

        Args:
            channel_type: The channel type that cannot be routed
        """
        self.channel_type = channel_type
        super().__init__(f"Channel type '{channel_type}' cannot be routed")


class InactiveChannelError(ValidationError):
    """Channel exists but is not active."""

    def __init__(self, channel_id: object):
        """Initialize inactive channel error.

        Args:
            channel_id: ID of the inactive channel
        """
        self.channel_id = channel_id
        super().__init__(f"Channel {channel_id} is not active")


class PublishError(NotificationHubError):
    """Publishing an event to the broker failed (503)."""

    def __init__(self, exchange: str, routing_key: str, cause: Exception | None = None):
        """Initialize publish error.

        Args:
            exchange: Exchange the event was addressed to
            routing_key: Routing key (event name) of the event
            cause: Underlying transport error
        """
        self.exchange = exchange
        self.routing_key = routing_key
        super().__init__(
            f"Failed to publish {routing_key} to {exchange}",
            detail=str(cause) if cause else None,
        )
