"""API views for core application."""

from typing import Any
from uuid import UUID

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import Page
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.channel import (
    ChannelCreate,
    ChannelDetail,
    ChannelQuery,
    ChannelUpdate,
)
from core.schemas.notification import (
    DeliveryLogDetail,
    NotificationCreate,
    NotificationDetail,
    NotificationQuery,
    NotificationUpdate,
)
from core.schemas.order import (
    OrderCreate,
    OrderCreated,
    OrderDetail,
    OrderQuery,
    OrderUpdate,
)
from core.schemas.pagination import PaginatedResponse, PaginationMeta
from core.schemas.template import (
    TemplateCreate,
    TemplateDetail,
    TemplateQuery,
    TemplateUpdate,
)
from core.services import (
    channel_registry,
    health_service,
    notification_service,
    order_service,
    template_registry,
)

logger = structlog.get_logger(__name__)


def _dump(schema: BaseSchemaModel) -> dict[str, Any]:
    """Serialize a schema into its camelCase JSON form."""
    return schema.model_dump(mode="json", by_alias=True)


def _invalid(message: str, error: ValidationError) -> Response:
    """400 response carrying pydantic's field errors."""
    return Response(
        {
            "error": "bad_request",
            "message": message,
            "errors": error.errors(include_url=False, include_context=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _invalid_id(resource: str, value: str) -> Response:
    logger.warning(f"Invalid {resource} ID format", resource_id=value)
    return Response(
        {
            "error": "bad_request",
            "message": f"Invalid {resource} ID format",
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _parse_id(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


def _paginated(page: Page, schema: type[BaseSchemaModel]) -> Response:
    """``{data, meta}`` response for a page of model instances."""
    body = PaginatedResponse(
        data=[_dump(schema.model_validate(item)) for item in page.items],
        meta=PaginationMeta.from_page(page),
    )
    return Response(_dump(body), status=status.HTTP_200_OK)


class LivenessCheckView(APIView):
    """Liveness probe endpoint for Kubernetes.

    Returns 200 if the service is alive and running.
    This should not check external dependencies.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check.

        Args:
            _request: HTTP request object (unused).

        Returns:
            Response object with status OK if service is alive.
        """
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint for Kubernetes.

    Returns 200 if the service is ready to serve traffic.
    Returns degraded status (200 OK) when the database or the broker is
    unavailable, so the service stays alive while they recover.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check.

        Args:
            _request: HTTP request object (unused).

        Returns:
            Response object with status OK if service is ready or degraded.
        """
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(), status=status.HTTP_200_OK)


class NotificationListView(APIView):
    """API endpoint for creating and listing notifications.

    POST: Create a notification and publish it to its channel
    GET: Paginated list of notifications
    """

    def post(self, request):
        """Handle POST request to create a notification.

        Args:
            request: HTTP request object containing recipientId, channelId,
                templateName, data and an optional idempotencyKey

        Returns:
            201 Created with the pending notification
            400 Bad Request if validation fails or the channel is inactive
            404 Not Found if the channel does not exist
            409 Conflict if the idempotency key was used before
            503 Service Unavailable if the event could not be published
        """
        logger.info("Notification creation request received")

        try:
            notification_request = NotificationCreate.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for notification creation",
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _invalid("Invalid request parameters", e)

        notification = notification_service.create(notification_request)

        logger.info(
            "Notification created successfully",
            notification_id=str(notification.id),
        )
        return Response(
            _dump(NotificationDetail.model_validate(notification)),
            status=status.HTTP_201_CREATED,
        )

    def get(self, request):
        """Handle GET request to list notifications.

        Query parameters:
        - page, limit: pagination (limit is capped at 100)
        - search: substring of the recipient
        - status, recipientId, channelId, templateName: exact filters

        Returns:
            200 OK with ``{data, meta}``
            400 Bad Request if a query parameter is invalid
        """
        try:
            query = NotificationQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            logger.warning("Invalid notification list query parameters")
            return _invalid("Invalid query parameters", e)

        page = notification_service.list(query)
        return _paginated(page, NotificationDetail)


class NotificationDetailView(APIView):
    """API endpoint for retrieving, updating and removing individual notifications.

    GET: Retrieve notification details
    PATCH: Update the delivery status
    DELETE: Soft delete a notification
    """

    def get(self, _request, notification_id):
        """Retrieve notification by ID.

        Args:
            _request: HTTP request (unused)
            notification_id: UUID of the notification

        Returns:
            Response with notification details
        """
        notification_uuid = _parse_id(notification_id)
        if notification_uuid is None:
            return _invalid_id("notification", notification_id)

        notification = notification_service.get(notification_uuid)
        return Response(
            _dump(NotificationDetail.model_validate(notification)),
            status=status.HTTP_200_OK,
        )

    def patch(self, request, notification_id):
        """Update the status or error message of a notification.

        Sent and failed notifications are returned unchanged.

        Returns:
            200 OK with the notification as stored
            400 Bad Request if validation fails
            404 Not Found if the notification does not exist
            409 Conflict if a concurrent update won
        """
        logger.info(
            "Notification update request received",
            notification_id=notification_id,
        )
        notification_uuid = _parse_id(notification_id)
        if notification_uuid is None:
            return _invalid_id("notification", notification_id)

        try:
            notification_update = NotificationUpdate.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for notification update",
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _invalid("Invalid request parameters", e)

        notification = notification_service.update_status(notification_uuid, notification_update)

        logger.info(
            "Notification updated successfully",
            notification_id=notification_id,
            status=notification.status,
        )
        return Response(
            _dump(NotificationDetail.model_validate(notification)),
            status=status.HTTP_200_OK,
        )

    def delete(self, _request, notification_id):
        """Soft delete notification by ID.

        Returns:
            Response with 204 No Content on success
        """
        logger.info(
            "Notification deletion request received",
            notification_id=notification_id,
        )
        notification_uuid = _parse_id(notification_id)
        if notification_uuid is None:
            return _invalid_id("notification", notification_id)

        notification_service.remove(notification_uuid)

        logger.info(
            "Notification deleted successfully",
            notification_id=notification_id,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationRestoreView(APIView):
    """API endpoint for recovering a soft-deleted notification."""

    def post(self, _request, notification_id):
        """Restore a notification.

        Returns:
            200 OK with the restored notification
            404 Not Found if the notification does not exist
        """
        notification_uuid = _parse_id(notification_id)
        if notification_uuid is None:
            return _invalid_id("notification", notification_id)

        notification = notification_service.restore(notification_uuid)

        logger.info(
            "Notification restored successfully",
            notification_id=notification_id,
        )
        return Response(
            _dump(NotificationDetail.model_validate(notification)),
            status=status.HTTP_200_OK,
        )


class NotificationDeliveryLogView(APIView):
    """API endpoint listing the delivery attempts of a notification."""

    def get(self, _request, notification_id):
        """Return the delivery logs ordered by attempt number.

        Returns:
            200 OK with ``{data: [...]}``
            404 Not Found if the notification does not exist
        """
        notification_uuid = _parse_id(notification_id)
        if notification_uuid is None:
            return _invalid_id("notification", notification_id)

        logs = notification_service.delivery_logs(notification_uuid)
        return Response(
            {"data": [_dump(DeliveryLogDetail.model_validate(log)) for log in logs]},
            status=status.HTTP_200_OK,
        )


class OrderListView(APIView):
    """API endpoint for creating and listing orders.

    POST: Create an order and notify its channels
    GET: Paginated list of orders
    """

    def post(self, request):
        """Handle POST request to create an order.

        A confirmation is published on every target channel. The response
        reports the outcome per channel; a failing channel does not fail
        the request.

        Returns:
            201 Created with the order and its channel outcomes
            400 Bad Request if validation fails
        """
        logger.info("Order creation request received")

        try:
            order_request = OrderCreate.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for order creation",
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _invalid("Invalid request parameters", e)

        creation = order_service.create(order_request)
        response_data = OrderCreated.model_validate(
            {
                **OrderDetail.model_validate(creation.order).model_dump(),
                "notifications": creation.dispatches,
            }
        )

        logger.info(
            "Order created successfully",
            order_id=str(creation.order.id),
            notified_channels=len(creation.dispatches),
        )
        return Response(_dump(response_data), status=status.HTTP_201_CREATED)

    def get(self, request):
        """Handle GET request to list orders.

        Query parameters:
        - page, limit: pagination
        - search: substring of the user ID or order number
        - status, userId: exact filters
        """
        try:
            query = OrderQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            logger.warning("Invalid order list query parameters")
            return _invalid("Invalid query parameters", e)

        return _paginated(order_service.list(query), OrderDetail)


class OrderDetailView(APIView):
    """API endpoint for a single order.

    GET: Retrieve order details
    PATCH: Update status, notes or metadata
    DELETE: Soft delete the order
    """

    def get(self, _request, order_id):
        """Retrieve order by ID."""
        order_uuid = _parse_id(order_id)
        if order_uuid is None:
            return _invalid_id("order", order_id)

        order = order_service.get(order_uuid)
        return Response(_dump(OrderDetail.model_validate(order)), status=status.HTTP_200_OK)

    def patch(self, request, order_id):
        """Update an order.

        Returns:
            200 OK with the updated order
            400 Bad Request if validation fails
            404 Not Found if the order does not exist
        """
        order_uuid = _parse_id(order_id)
        if order_uuid is None:
            return _invalid_id("order", order_id)

        try:
            order_update = OrderUpdate.model_validate(request.data)
        except ValidationError as e:
            return _invalid("Invalid request parameters", e)

        order = order_service.update(order_uuid, order_update)
        return Response(_dump(OrderDetail.model_validate(order)), status=status.HTTP_200_OK)

    def delete(self, _request, order_id):
        """Soft delete an order."""
        order_uuid = _parse_id(order_id)
        if order_uuid is None:
            return _invalid_id("order", order_id)

        order_service.remove(order_uuid)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ChannelListView(APIView):
    """API endpoint for registering and listing channels."""

    def post(self, request):
        """Register a channel.

        The configuration is validated against the channel type.

        Returns:
            201 Created with the channel
            400 Bad Request if the body or the configuration is invalid
        """
        logger.info("Channel creation request received")

        try:
            channel_request = ChannelCreate.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for channel creation",
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _invalid("Invalid request parameters", e)

        channel = channel_registry.create(channel_request)

        logger.info(
            "Channel created successfully",
            channel_id=str(channel.id),
            channel_type=channel.channel_type,
        )
        return Response(
            _dump(ChannelDetail.model_validate(channel)),
            status=status.HTTP_201_CREATED,
        )

    def get(self, request):
        """List channels, optionally filtered by ``type`` and ``isActive``."""
        try:
            query = ChannelQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _invalid("Invalid query parameters", e)

        return _paginated(channel_registry.list(query), ChannelDetail)


class AvailableChannelListView(APIView):
    """API endpoint listing the channel types that can be registered."""

    def get(self, _request):
        """Return the channel type catalogue."""
        return Response(
            {"data": [_dump(channel) for channel in channel_registry.available_channel_types()]},
            status=status.HTTP_200_OK,
        )


class ChannelDetailView(APIView):
    """API endpoint for a single channel.

    GET: Retrieve channel details
    PATCH: Update name, configuration, description or activity
    DELETE: Delete the channel (409 while notifications reference it)
    """

    def get(self, _request, channel_id):
        """Retrieve channel by ID."""
        channel_uuid = _parse_id(channel_id)
        if channel_uuid is None:
            return _invalid_id("channel", channel_id)

        channel = channel_registry.get(channel_uuid)
        return Response(_dump(ChannelDetail.model_validate(channel)), status=status.HTTP_200_OK)

    def patch(self, request, channel_id):
        """Update a channel; a new configuration is validated again."""
        channel_uuid = _parse_id(channel_id)
        if channel_uuid is None:
            return _invalid_id("channel", channel_id)

        try:
            channel_update = ChannelUpdate.model_validate(request.data)
        except ValidationError as e:
            return _invalid("Invalid request parameters", e)

        channel = channel_registry.update(channel_uuid, channel_update)
        return Response(_dump(ChannelDetail.model_validate(channel)), status=status.HTTP_200_OK)

    def delete(self, _request, channel_id):
        """Delete a channel."""
        channel_uuid = _parse_id(channel_id)
        if channel_uuid is None:
            return _invalid_id("channel", channel_id)

        channel_registry.remove(channel_uuid)
        logger.info("Channel deleted successfully", channel_id=channel_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TemplateListView(APIView):
    """API endpoint for creating and listing templates."""

    def post(self, request):
        """Create a template.

        Returns:
            201 Created with the template
            400 Bad Request if validation fails
            409 Conflict if a live template has the same name and channel
        """
        try:
            template_request = TemplateCreate.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for template creation",
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _invalid("Invalid request parameters", e)

        template = template_registry.create(template_request)

        logger.info(
            "Template created successfully",
            template_id=str(template.id),
            template_name=template.name,
        )
        return Response(
            _dump(TemplateDetail.model_validate(template)),
            status=status.HTTP_201_CREATED,
        )

    def get(self, request):
        """List live templates, optionally filtered by name, channel and activity."""
        try:
            query = TemplateQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _invalid("Invalid query parameters", e)

        return _paginated(template_registry.list(query), TemplateDetail)


class TemplateDetailView(APIView):
    """API endpoint for a single template.

    GET: Retrieve template details
    PATCH: Update the template (bumps its version)
    DELETE: Soft delete the template
    """

    def get(self, _request, template_id):
        """Retrieve template by ID."""
        template_uuid = _parse_id(template_id)
        if template_uuid is None:
            return _invalid_id("template", template_id)

        template = template_registry.get(template_uuid)
        return Response(_dump(TemplateDetail.model_validate(template)), status=status.HTTP_200_OK)

    def patch(self, request, template_id):
        """Update a template."""
        template_uuid = _parse_id(template_id)
        if template_uuid is None:
            return _invalid_id("template", template_id)

        try:
            template_update = TemplateUpdate.model_validate(request.data)
        except ValidationError as e:
            return _invalid("Invalid request parameters", e)

        template = template_registry.update(template_uuid, template_update)
        return Response(_dump(TemplateDetail.model_validate(template)), status=status.HTTP_200_OK)

    def delete(self, _request, template_id):
        """Soft delete a template."""
        template_uuid = _parse_id(template_id)
        if template_uuid is None:
            return _invalid_id("template", template_id)

        template_registry.remove(template_uuid)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TemplateRestoreView(APIView):
    """API endpoint for recovering a soft-deleted template."""

    def post(self, _request, template_id):
        """Restore a template.

        Returns:
            200 OK with the restored template
            404 Not Found if the template does not exist
            409 Conflict if another live template took its name and channel
        """
        template_uuid = _parse_id(template_id)
        if template_uuid is None:
            return _invalid_id("template", template_id)

        template = template_registry.restore(template_uuid)
        return Response(_dump(TemplateDetail.model_validate(template)), status=status.HTTP_200_OK)
