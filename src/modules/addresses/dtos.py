"""Address DTOs for the Service Layer."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateAddressDTO(BaseModel):
    """Immutable DTO for address creation requests."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    street: str
    label: str = ""
    reference: str = ""
    lat: Optional[Decimal] = Field(default=None, ge=-90, le=90)
    lng: Optional[Decimal] = Field(default=None, ge=-180, le=180)
    is_default: bool = False

    @field_validator("street")
    @classmethod
    def street_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Street is required.")
        return v.strip()
