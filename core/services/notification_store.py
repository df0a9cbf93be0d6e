"""Notification store: persistence and status tracking for notifications.

This module owns every write to the ``notifications`` and ``delivery_logs``
tables. Creation is idempotent on ``idempotency_key``; status transitions
are compare-and-set on the ``version`` column so that two consumers racing
on the same notification cannot both win.
"""

from typing import Any
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Max, QuerySet
from django.utils import timezone

import structlog

from core.enums import DeliveryStatus, NotificationStatus
from core.exceptions import ConflictError, NotificationNotFoundError
from core.models import DeliveryLog, Notification
from core.pagination import Page, paginate
from core.schemas.notification import NotificationCreate, NotificationQuery

logger = structlog.get_logger(__name__)

# Concurrent appends for the same notification collide on the unique
# (notification, attempt_number) constraint; retry with the next number.
_DELIVERY_LOG_APPEND_ATTEMPTS = 3


class NotificationStore:
    """Persistence operations on notifications and their delivery logs."""

    def create(self, data: NotificationCreate) -> Notification:
        """Create a pending notification.

        Args:
            data: Validated creation payload; ``idempotency_key`` must be set.

        Returns:
            The created notification.

        Raises:
            ConflictError: If a notification with the same idempotency key exists.
        """
        if not data.idempotency_key:
            raise ValueError("idempotency_key is required")

        if Notification.objects.filter(idempotency_key=data.idempotency_key).exists():
            raise self._duplicate_key(data.idempotency_key)

        try:
            with transaction.atomic():
                notification = Notification.objects.create(
                    recipient_id=data.recipient_id,
                    channel_id=data.channel_id,
                    template_name=data.template_name,
                    data=data.data,
                    idempotency_key=data.idempotency_key,
                    status=NotificationStatus.PENDING.value,
                    retry_count=0,
                )
        except IntegrityError as e:
            # Lost the race against a concurrent create with the same key.
            raise self._duplicate_key(data.idempotency_key) from e

        logger.info(
            "notification_created",
            notification_id=str(notification.id),
            channel_id=str(data.channel_id),
            template_name=data.template_name,
        )
        return notification

    def get(self, notification_id: UUID, include_deleted: bool = False) -> Notification:
        """Get a notification by ID.

        Args:
            notification_id: Notification ID.
            include_deleted: Also return soft-deleted notifications.

        Raises:
            NotificationNotFoundError: If the notification does not exist.
        """
        queryset = Notification.objects.all()
        if not include_deleted:
            queryset = queryset.filter(deleted_at__isnull=True)
        try:
            return queryset.get(pk=notification_id)
        except Notification.DoesNotExist:
            raise NotificationNotFoundError(notification_id) from None

    def update_status(
        self,
        notification_id: UUID,
        status: NotificationStatus | str,
        error_message: str | None = None,
        retry_count: int | None = None,
    ) -> Notification:
        """Move a notification to a new status.

        ``sent`` and ``failed`` are terminal: once reached, further updates
        return the stored notification unchanged.

        Args:
            notification_id: Notification ID.
            status: Target status.
            error_message: Error to store, mainly for ``failed``.
            retry_count: New retry count, if it changed.

        Returns:
            The notification as stored after the update.

        Raises:
            NotificationNotFoundError: If the notification does not exist.
            ConflictError: If a concurrent non-terminal update won the race.
        """
        status = NotificationStatus(status)
        notification = self.get(notification_id, include_deleted=True)
        if notification.is_terminal:
            logger.info(
                "notification_status_unchanged",
                notification_id=str(notification_id),
                current_status=notification.status,
                requested_status=status.value,
            )
            return notification

        now = timezone.now()
        fields: dict[str, Any] = {"status": status.value}
        if status == NotificationStatus.SENT:
            fields["sent_at"] = now
        elif status == NotificationStatus.FAILED:
            fields["failed_at"] = now
        if error_message is not None:
            fields["error_message"] = error_message
        if retry_count is not None:
            fields["retry_count"] = retry_count

        updated = self._compare_and_set(notification, now, **fields)
        logger.info(
            "notification_status_updated",
            notification_id=str(notification_id),
            previous_status=notification.status,
            status=updated.status,
        )
        return updated

    def record_retry(self, notification_id: UUID, attempt: int, error: str) -> Notification:
        """Store the retry count and last error of a notification being retried.

        The notification stays ``processing``.
        """
        return self.update_status(
            notification_id,
            NotificationStatus.PROCESSING,
            error_message=error,
            retry_count=attempt,
        )

    def append_delivery_log(
        self,
        notification_id: UUID,
        status: DeliveryStatus | str,
        response_data: dict[str, Any] | None = None,
        error_message: str | None = None,
    ) -> DeliveryLog:
        """Append a delivery attempt to the notification's audit trail.

        Args:
            notification_id: Notification ID.
            status: Outcome of the attempt.
            response_data: Provider response, if any.
            error_message: Error of a failed attempt.

        Returns:
            The created log entry, numbered after the previous attempt.
        """
        status = DeliveryStatus(status)
        attempt = 0
        while True:
            attempt += 1
            try:
                with transaction.atomic():
                    last = DeliveryLog.objects.filter(
                        notification_id=notification_id
                    ).aggregate(last=Max("attempt_number"))["last"]
                    return DeliveryLog.objects.create(
                        notification_id=notification_id,
                        attempt_number=(last or 0) + 1,
                        status=status.value,
                        response_data=response_data,
                        error_message=error_message,
                    )
            except IntegrityError:
                if attempt >= _DELIVERY_LOG_APPEND_ATTEMPTS:
                    raise
                logger.warning(
                    "delivery_log_attempt_number_taken",
                    notification_id=str(notification_id),
                    attempt=attempt,
                )

    def delivery_logs(self, notification_id: UUID) -> QuerySet[DeliveryLog]:
        """Delivery attempts of a notification ordered by attempt number."""
        self.get(notification_id, include_deleted=True)
        return DeliveryLog.objects.filter(notification_id=notification_id).order_by(
            "attempt_number"
        )

    def list(self, query: NotificationQuery) -> Page[Notification]:
        """List notifications, newest first.

        Args:
            query: Filters and paging parameters.

        Returns:
            The requested page.
        """
        queryset = Notification.objects.filter(deleted_at__isnull=True)
        if query.status:
            queryset = queryset.filter(status=NotificationStatus(query.status).value)
        if query.recipient_id:
            queryset = queryset.filter(recipient_id=query.recipient_id)
        if query.channel_id:
            queryset = queryset.filter(channel_id=query.channel_id)
        if query.template_name:
            queryset = queryset.filter(template_name=query.template_name)
        if query.search:
            queryset = queryset.filter(recipient_id__icontains=query.search)
        queryset = queryset.order_by("-created_at", "-id")
        return paginate(queryset, query.page_request())

    def remove(self, notification_id: UUID) -> Notification:
        """Soft delete a notification."""
        notification = self.get(notification_id)
        notification.deleted_at = timezone.now()
        notification.save(update_fields=["deleted_at", "updated_at"])
        logger.info("notification_removed", notification_id=str(notification_id))
        return notification

    def restore(self, notification_id: UUID) -> Notification:
        """Recover a soft-deleted notification."""
        notification = self.get(notification_id, include_deleted=True)
        if notification.deleted_at is not None:
            notification.deleted_at = None
            notification.save(update_fields=["deleted_at", "updated_at"])
            logger.info("notification_restored", notification_id=str(notification_id))
        return notification

    def _compare_and_set(self, notification: Notification, now, **fields: Any) -> Notification:
        """Apply ``fields`` only if nobody changed the row since it was read."""
        updated = Notification.objects.filter(
            pk=notification.pk, version=notification.version
        ).update(version=notification.version + 1, updated_at=now, **fields)
        current = Notification.objects.get(pk=notification.pk)
        if updated:
            return current

        if current.is_terminal:
            logger.info(
                "notification_update_lost_to_terminal_state",
                notification_id=str(notification.pk),
                status=current.status,
            )
            return current
        raise ConflictError(
            f"Notification {notification.pk} was modified concurrently",
            detail=f"expected version {notification.version}, found {current.version}",
        )

    @staticmethod
    def _duplicate_key(idempotency_key: str) -> ConflictError:
        logger.warning("notification_duplicate_idempotency_key", idempotency_key=idempotency_key)
        return ConflictError(
            "Notification with this idempotency key already exists",
            detail=f"idempotency_key={idempotency_key}",
        )


notification_store = NotificationStore()
