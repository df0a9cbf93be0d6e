"""Django settings for the notification hub.

All deployment-specific values are read from environment variables so the
same module serves local development, containers and CI. Test runs use
``notification_hub.settings_test`` which overrides storage, cache and broker.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-notification-hub-dev-key")
DEBUG = _env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "django_rq",
    "core",
]

MIDDLEWARE = [
    "core.middleware.RequestIDMiddleware",
    "core.middleware.ProcessTimeMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "notification_hub.urls"
WSGI_APPLICATION = "notification_hub.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {},
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "notification_hub"),
        "USER": os.getenv("DB_USER", "postgres"),
        "PASSWORD": os.getenv("DB_PASSWORD", "postgres"),
        "HOST": os.getenv("DB_HOST", "localhost"),
        "PORT": os.getenv("DB_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", "60")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD") or None

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": f"redis://{REDIS_HOST}:{REDIS_PORT}/{REDIS_DB}",
    }
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "EXCEPTION_HANDLER": "core.exceptions.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# SMTP defaults; an email channel's configuration overrides them per send.
EMAIL_HOST = os.getenv("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = _env_bool("EMAIL_USE_TLS", True)
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "noreply@example.com")

# Delivery pipeline
NOTIFICATION_BROKER_BACKEND = os.getenv(
    "NOTIFICATION_BROKER_BACKEND", "core.broker.rq_broker.RQBroker"
)
NOTIFICATION_MAX_RETRIES = int(os.getenv("NOTIFICATION_MAX_RETRIES", "3"))
NOTIFICATION_RETRY_BASE_DELAY_SECONDS = float(
    os.getenv("NOTIFICATION_RETRY_BASE_DELAY_SECONDS", "1")
)
NOTIFICATION_CONSUMER_PREFETCH = int(os.getenv("NOTIFICATION_CONSUMER_PREFETCH", "3"))
NOTIFICATION_DEFAULT_PAGE_SIZE = 10
NOTIFICATION_MAX_PAGE_SIZE = 100
NOTIFICATION_TEMPLATES_DIR = Path(
    os.getenv("NOTIFICATION_TEMPLATES_DIR", str(BASE_DIR / "templates"))
)
NOTIFICATION_PROVIDERS = {
    "email": "core.providers.email.SMTPEmailProvider",
    "sms": "core.providers.sms.LoggingSmsProvider",
    "push": "core.providers.push.LoggingPushProvider",
}

# One RQ queue per subscriber queue declared in the broker topology.
_RQ_CONNECTION = {
    "HOST": REDIS_HOST,
    "PORT": REDIS_PORT,
    "DB": REDIS_DB,
    "PASSWORD": REDIS_PASSWORD,
    "DEFAULT_TIMEOUT": int(os.getenv("RQ_DEFAULT_TIMEOUT", "300")),
}
RQ_QUEUES = {
    queue_name: dict(_RQ_CONNECTION)
    for queue_name in (
        "default",
        "EmailNotificationHandler",
        "EmailOrderConfirmationHandler",
        "SmsNotificationHandler",
        "SmsVerificationHandler",
        "PushNotificationHandler",
        "PushOrderUpdateHandler",
    )
}

SERVICE_NAME = os.getenv("SERVICE_NAME", "notification-hub")

