"""Supplier and warehouse reference entities."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class Supplier(BaseModel):
    """A vendor materials are purchased from."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    rating: float = Field(default=5.0, ge=0, le=5)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Warehouse(BaseModel):
    """A storage location materials are kept in."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    capacity: float | None = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
