"""Shared schema pieces: camelCase models and the response envelope."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Model exposed to clients with camelCase keys (isAdmin, startDate...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope every endpoint answers with."""

    status: Literal["success", "error"] = "success"
    message: str | None = None
    data: T | None = None
    error: str | None = None
