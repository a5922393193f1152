"""Licitation schemas."""

from datetime import datetime

from pydantic import Field

from strix.schemas.common import CamelModel


class LicitationCreate(CamelModel):
    """Create a licitation. Dates are ISO-8601 strings validated by the service."""

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_lowest_price: bool | None = None


class LicitationUpdate(CamelModel):
    """Partial update; omitted fields keep their stored value."""

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_lowest_price: bool | None = None


class CreatorResponse(CamelModel):
    id: int
    username: str
    email: str


class LicitationResponse(CamelModel):
    """Licitation response."""

    id: int
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    is_lowest_price: bool
    user_id: int | None
    creator: CreatorResponse | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
