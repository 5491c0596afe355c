"""Shared API schema base classes and types."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Money amounts are exchanged as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Schema serialized with camelCase keys (storefront JSON convention).

    Accepts both camelCase and snake_case keys on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error body for endpoints that report failures outside HTTPException."""

    error: str
    message: str
