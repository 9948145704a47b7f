"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation (also used for PUT).
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation and full replacement.

    Validates:
    - ``name`` is not blank.
    - ``price`` is greater than zero with at most 2 decimal places.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    capacity_liters: Optional[Decimal] = Field(default=None, gt=0)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required.")
        return v.strip()


class UpdateProductDTO(BaseModel):
    """Immutable DTO for partial product updates.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    capacity_liters: Optional[Decimal] = Field(default=None, gt=0)
    is_active: Optional[bool] = None
