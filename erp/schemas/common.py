"""Shared schema base and small response bodies."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API schemas: camelCase aliases on the wire, snake_case in Python.

    Accepts either key style on input; responses are emitted by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

    def to_storage(self) -> dict:
        """Fields the client actually sent, snake_case, for storage create/update."""
        return self.model_dump(exclude_unset=True)


class EntityResponse(CamelModel):
    """Columns every audited entity carries."""

    id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class SuccessResponse(CamelModel):
    """Body of DELETE responses."""

    success: bool = True
