"""Pricing service layer: the effective-price resolver.

Resolution rule, applied identically for catalogue listings and order
pricing: an **active** override for (customer, product) wins; otherwise
the product's current base price applies.  Inactive products have no
effective price and cannot be ordered.

Override maintenance:
- ``set_override`` creates or replaces the single row per key and is
  idempotent (identical values write nothing).
- ``remove_override`` on an absent key is a successful no-op.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

import structlog
from django.db import models

from modules.core.db import atomic_unit
from modules.products.exceptions import ProductNotFound
from modules.users.exceptions import CustomerNotFound

if TYPE_CHECKING:
    from modules.pricing.dtos import UpsertPriceOverrideDTO
    from modules.pricing.models import CustomerProductPrice
    from modules.pricing.repositories.interfaces import IPriceOverrideRepository
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class PricingService:
    """Application service for price resolution and customer overrides."""

    def __init__(
        self,
        override_repository: IPriceOverrideRepository,
        product_repository: IProductRepository,
        user_repository: IUserRepository,
    ) -> None:
        self._override_repo = override_repository
        self._product_repo = product_repository
        self._user_repo = user_repository

    # ------------------------------------------------------------------
    # Resolution (pure reads)
    # ------------------------------------------------------------------

    def resolve_effective_price(self, customer_id: str, product_id: str) -> Decimal:
        """Return the unit price *customer_id* pays for *product_id*.

        Raises:
            ProductNotFound: the product does not exist or is inactive.
        """
        price = self._override_repo.effective_price(str(customer_id), str(product_id))
        if price is None:
            raise ProductNotFound(f"Product {product_id} not found or inactive.")
        return price

    def list_effective_prices(
        self, customer_id: Optional[str] = None
    ) -> models.QuerySet[Product]:
        """Active products annotated with ``effective_price``.

        Without a customer every product carries its base price.

        Raises:
            CustomerNotFound: *customer_id* is given but unknown.
        """
        if customer_id is not None:
            self._require_customer(customer_id)
            customer_id = str(customer_id)
        return self._override_repo.effective_prices(customer_id)

    def list_overrides(self, customer_id: str) -> models.QuerySet[CustomerProductPrice]:
        """Raises ``CustomerNotFound`` if the customer is unknown."""
        self._require_customer(customer_id)
        return self._override_repo.list_for_customer(str(customer_id))

    # ------------------------------------------------------------------
    # Override maintenance
    # ------------------------------------------------------------------

    @atomic_unit
    def set_override(self, dto: UpsertPriceOverrideDTO) -> CustomerProductPrice:
        """Create or replace the override for (customer, product).

        Raises:
            CustomerNotFound: the customer does not exist.
            ProductNotFound: the product does not exist (inactive is allowed).
        """
        self._require_customer(dto.customer_id)
        if not self._product_repo.exists(str(dto.product_id)):
            raise ProductNotFound(f"Product {dto.product_id} not found.")

        override, changed = self._override_repo.upsert(
            str(dto.customer_id), str(dto.product_id), dto.price, dto.is_active
        )
        logger.info(
            "pricing.override_upserted" if changed else "pricing.override_unchanged",
            customer_id=str(dto.customer_id),
            product_id=str(dto.product_id),
            price=str(dto.price),
            is_active=dto.is_active,
        )
        return override

    def remove_override(self, customer_id: str, product_id: str) -> None:
        removed = self._override_repo.delete(str(customer_id), str(product_id))
        logger.info(
            "pricing.override_removed",
            customer_id=str(customer_id),
            product_id=str(product_id),
            existed=removed,
        )

    def _require_customer(self, customer_id) -> None:
        if not self._user_repo.exists(str(customer_id)):
            raise CustomerNotFound(f"Customer {customer_id} not found.")
