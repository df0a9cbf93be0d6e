"""Schema for the catalogue of supported channel types."""

from core.schemas.base_schema_model import BaseSchemaModel


class AvailableChannel(BaseSchemaModel):
    """A channel type that can be registered."""

    name: str
    description: str
    icon: str
    type: str
    needs_configuration: bool = True
