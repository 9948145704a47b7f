"""Price override repository interface.

The resolver's precedence rule (active override, else base price) lives
behind ``effective_prices``; the point read ``effective_price`` must be
derived from the same query so bulk listings and order pricing can never
disagree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Tuple

from django.db import models

if TYPE_CHECKING:
    from modules.pricing.models import CustomerProductPrice
    from modules.products.models import Product


class IPriceOverrideRepository(ABC):
    """Repository contract for ``CustomerProductPrice`` rows."""

    @abstractmethod
    def effective_prices(
        self, customer_id: Optional[str] = None
    ) -> "models.QuerySet[Product]":
        """Active products annotated with ``effective_price`` for the customer."""

    @abstractmethod
    def effective_price(self, customer_id: str, product_id: str) -> Optional[Decimal]:
        """Effective price of one active product, or ``None`` if not orderable."""

    @abstractmethod
    def list_for_customer(
        self, customer_id: str
    ) -> "models.QuerySet[CustomerProductPrice]":
        """Every override (active or not) of a customer, by product."""

    @abstractmethod
    def upsert(
        self, customer_id: str, product_id: str, price: Decimal, is_active: bool
    ) -> Tuple[CustomerProductPrice, bool]:
        """Insert or overwrite the single row for the key.

        Returns the row and whether anything was written.
        """

    @abstractmethod
    def delete(self, customer_id: str, product_id: str) -> bool:
        """Remove the row for the key. Returns ``False`` if there was none."""
