"""Base schema utilities."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class FrozenSchema(BaseModel):
    """Immutable value schema."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )
