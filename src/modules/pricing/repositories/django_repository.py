"""Django ORM implementation of the price override repository.

Effective prices are computed in SQL with
``COALESCE((SELECT price FROM overrides WHERE active ...), products.price)``
so that listing and point reads share one expression.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction
from django.db.models import DecimalField, F, OuterRef, Subquery
from django.db.models.functions import Coalesce

from modules.pricing.models import CustomerProductPrice
from modules.pricing.repositories.interfaces import IPriceOverrideRepository
from modules.products.models import Product

logger = structlog.get_logger(__name__)

_PRICE_FIELD = DecimalField(max_digits=10, decimal_places=2)


class PriceOverrideDjangoRepository(IPriceOverrideRepository):
    """Concrete price override repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Effective price resolution
    # ------------------------------------------------------------------

    def effective_prices(
        self, customer_id: Optional[str] = None
    ) -> models.QuerySet[Product]:
        products = Product.objects.filter(is_active=True)
        if customer_id is None:
            return products.annotate(
                effective_price=F("price"),
                base_price=F("price"),
            )

        override = CustomerProductPrice.objects.filter(
            customer_id=customer_id,
            product_id=OuterRef("pk"),
            is_active=True,
        ).values("price")[:1]

        return products.annotate(
            effective_price=Coalesce(
                Subquery(override, output_field=_PRICE_FIELD),
                F("price"),
                output_field=_PRICE_FIELD,
            ),
            base_price=F("price"),
        )

    def effective_price(self, customer_id: str, product_id: str) -> Optional[Decimal]:
        try:
            return (
                self.effective_prices(customer_id)
                .filter(pk=product_id)
                .values_list("effective_price", flat=True)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    # ------------------------------------------------------------------
    # Override rows
    # ------------------------------------------------------------------

    def list_for_customer(
        self, customer_id: str
    ) -> models.QuerySet[CustomerProductPrice]:
        return CustomerProductPrice.objects.filter(customer_id=customer_id).order_by(
            "product_id"
        )

    @transaction.atomic
    def upsert(
        self, customer_id: str, product_id: str, price: Decimal, is_active: bool
    ) -> Tuple[CustomerProductPrice, bool]:
        rows = CustomerProductPrice.objects.select_for_update()
        override = rows.filter(customer_id=customer_id, product_id=product_id).first()

        if override is None:
            try:
                with transaction.atomic():
                    override = CustomerProductPrice.objects.create(
                        customer_id=customer_id,
                        product_id=product_id,
                        price=price,
                        is_active=is_active,
                    )
                return override, True
            except IntegrityError:
                # A concurrent request inserted the key first; fall through
                # and overwrite its row instead.
                override = rows.get(customer_id=customer_id, product_id=product_id)

        if override.price == price and override.is_active == is_active:
            return override, False

        override.price = price
        override.is_active = is_active
        override.save(update_fields=["price", "is_active"])
        return override, True

    def delete(self, customer_id: str, product_id: str) -> bool:
        try:
            deleted, _ = CustomerProductPrice.objects.filter(
                customer_id=customer_id, product_id=product_id
            ).delete()
        except (ValueError, ValidationError):
            return False
        return deleted > 0
