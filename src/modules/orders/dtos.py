"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: a single order line (product + quantity).
- ``CreateOrderDTO``: order creation input (nested items).
- ``AssignOrderDTO``: driver assignment input.
- ``UpdateStatusDTO``: generic status transition input.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.orders.constants import MAX_ITEM_QUANTITY, OrderStatus


class CreateOrderItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int = Field(ge=1, le=MAX_ITEM_QUANTITY)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation.

    Validates:
    - ``items`` is non-empty and each quantity is between 1 and
      ``MAX_ITEM_QUANTITY``.

    The same product may appear on several lines; each line is priced
    independently.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    address_id: UUID
    items: List[CreateOrderItemDTO]
    scheduled_at: Optional[datetime] = None
    notes: str = ""

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must contain at least one item.")
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def notes_default_blank(cls, v: Optional[str]) -> str:
        return (v or "").strip()


class AssignOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    driver_id: UUID


class UpdateStatusDTO(BaseModel):
    """Immutable DTO for a generic status transition.

    ``new_status`` must be a known status; whether it is reachable from
    the order's current status is decided by the service.
    """

    model_config = ConfigDict(frozen=True)

    new_status: str
    changed_by: UUID
    note: str = ""

    @field_validator("new_status")
    @classmethod
    def status_must_exist(cls, v: str) -> str:
        if v not in OrderStatus.values:
            allowed = ", ".join(OrderStatus.values)
            raise ValueError(f"Unknown status '{v}'. Expected one of: {allowed}.")
        return v

    @field_validator("note", mode="before")
    @classmethod
    def note_default_blank(cls, v: Optional[str]) -> str:
        return (v or "").strip()
