"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Effective per-customer prices are not computed here; catalogue
listings with prices go through ``PricingService`` so there is a
single price-resolution rule.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        product = Product(
            name=dto.name,
            price=dto.price,
            capacity_liters=dto.capacity_liters,
            is_active=dto.is_active,
        )
        return self._repo.save(product)

    @transaction.atomic
    def replace_product(self, id: str, dto: CreateProductDTO) -> Product:
        """Full (PUT) update: every field is overwritten.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get(id)
        product.name = dto.name
        product.price = dto.price
        product.capacity_liters = dto.capacity_liters
        product.is_active = dto.is_active
        product = self._repo.save(product)
        logger.info("product.replaced", product_id=str(id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Partial update with the supplied fields.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get(id)
        for field in ("name", "price", "capacity_liters", "is_active"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)
        product = self._repo.save(product)
        logger.info("product.updated", product_id=str(id))
        return product

    def delete_product(self, id: str) -> None:
        """Logical delete: the product stops being orderable.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.deactivate(id):
            raise ProductNotFound(f"Product {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: str) -> Product:
        """Raises ``ProductNotFound`` if the product does not exist."""
        return self._get(id)

    def _get(self, id: str) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
