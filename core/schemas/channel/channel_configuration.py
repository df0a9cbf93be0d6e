"""Per-type channel configuration schemas.

A channel's ``configuration`` payload is a tagged variant keyed by the
channel type. ``validate_channel_configuration`` picks the schema for the
type and returns the normalized camelCase payload that gets stored.
"""

from typing import Any, Literal

from pydantic import EmailStr, Field, HttpUrl
from pydantic import ValidationError as PydanticValidationError

from core.enums import ChannelType
from core.exceptions import ChannelConfigurationError
from core.schemas.base_schema_model import BaseSchemaModel


class EmailChannelConfiguration(BaseSchemaModel):
    """Email provider settings. SMTP fields fall back to the EMAIL_* settings."""

    provider: Literal["sendgrid", "mailgun", "smtp"] = "smtp"
    api_key: str | None = None
    from_email: EmailStr = Field(..., description="Sender address")
    from_name: str | None = Field(None, description="Sender display name")
    host: str | None = None
    port: int | None = Field(None, ge=1, le=65535)
    username: str | None = None
    password: str | None = None


class SmsChannelConfiguration(BaseSchemaModel):
    """SMS provider credentials."""

    provider: Literal["twilio", "nexmo"]
    account_sid: str = Field(..., min_length=1)
    auth_token: str = Field(..., min_length=1)
    from_number: str = Field(..., min_length=1)


class PushChannelConfiguration(BaseSchemaModel):
    """Push provider settings."""

    provider: Literal["fcm", "apns"]
    server_key: str | None = None
    certificate_path: str | None = None


class WhatsAppChannelConfiguration(BaseSchemaModel):
    """WhatsApp (Twilio) credentials."""

    provider: Literal["twilio"] = "twilio"
    account_sid: str = Field(..., min_length=1)
    auth_token: str = Field(..., min_length=1)
    from_number: str = Field(..., min_length=1)


class SlackChannelConfiguration(BaseSchemaModel):
    """Slack incoming webhook settings."""

    webhook_url: HttpUrl
    channel: str | None = None
    username: str | None = None
    icon_emoji: str | None = None


CHANNEL_CONFIGURATION_SCHEMAS: dict[ChannelType, type[BaseSchemaModel]] = {
    ChannelType.EMAIL: EmailChannelConfiguration,
    ChannelType.SMS: SmsChannelConfiguration,
    ChannelType.PUSH: PushChannelConfiguration,
    ChannelType.WHATSAPP: WhatsAppChannelConfiguration,
    ChannelType.SLACK: SlackChannelConfiguration,
}


def parse_channel_configuration(
    channel_type: ChannelType | str, configuration: dict[str, Any] | None
) -> BaseSchemaModel:
    """Validate a configuration payload against the schema of its channel type.

    Args:
        channel_type: Channel type the configuration belongs to
        configuration: Raw configuration payload

    Returns:
        The typed configuration model.

    Raises:
        ChannelConfigurationError: If the payload does not match the type.
    """
    channel_type = ChannelType(channel_type)
    schema = CHANNEL_CONFIGURATION_SCHEMAS[channel_type]
    try:
        return schema.model_validate(configuration or {})
    except PydanticValidationError as e:
        raise ChannelConfigurationError(
            channel_type.value,
            errors=e.errors(include_url=False, include_context=False),
        ) from e


def validate_channel_configuration(
    channel_type: ChannelType | str, configuration: dict[str, Any] | None
) -> dict[str, Any]:
    """Validate a configuration payload and return its stored form."""
    parsed = parse_channel_configuration(channel_type, configuration)
    return parsed.model_dump(mode="json", by_alias=True, exclude_none=True)
