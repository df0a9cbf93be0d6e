"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    AvailableChannelListView,
    ChannelDetailView,
    ChannelListView,
    LivenessCheckView,
    NotificationDeliveryLogView,
    NotificationDetailView,
    NotificationListView,
    NotificationRestoreView,
    OrderDetailView,
    OrderListView,
    ReadinessCheckView,
    TemplateDetailView,
    TemplateListView,
    TemplateRestoreView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Notification endpoints (specific routes before generic)
    path("notifications", NotificationListView.as_view(), name="notification-list"),
    path(
        "notifications/<str:notification_id>/restore",
        NotificationRestoreView.as_view(),
        name="notification-restore",
    ),
    path(
        "notifications/<str:notification_id>/delivery-logs",
        NotificationDeliveryLogView.as_view(),
        name="notification-delivery-logs",
    ),
    path(
        "notifications/<str:notification_id>",
        NotificationDetailView.as_view(),
        name="notification-detail",
    ),
    # Order endpoints
    path("orders", OrderListView.as_view(), name="order-list"),
    path("orders/<str:order_id>", OrderDetailView.as_view(), name="order-detail"),
    # Channel endpoints (available must come before channels/<channel_id>)
    path("channels", ChannelListView.as_view(), name="channel-list"),
    path(
        "channels/available",
        AvailableChannelListView.as_view(),
        name="channel-available",
    ),
    path(
        "channels/<str:channel_id>",
        ChannelDetailView.as_view(),
        name="channel-detail",
    ),
    # Template endpoints
    path("templates", TemplateListView.as_view(), name="template-list"),
    path(
        "templates/<str:template_id>/restore",
        TemplateRestoreView.as_view(),
        name="template-restore",
    ),
    path(
        "templates/<str:template_id>",
        TemplateDetailView.as_view(),
        name="template-detail",
    ),
]
