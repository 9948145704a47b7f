"""Pricing DTOs for the Service Layer.

- ``UpsertPriceOverrideDTO``: create-or-replace a customer's price for a product.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UpsertPriceOverrideDTO(BaseModel):
    """Immutable DTO for override upserts.

    ``is_active`` defaults to ``True``: posting a price switches it on.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    product_id: UUID
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    is_active: bool = True
