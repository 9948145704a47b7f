"""Per-customer price overrides.

Business rules implemented:
- At most one override row per (customer, product): enforced by a
  unique constraint, never by application bookkeeping.
- An inactive override is kept (soft toggle) so it can be re-enabled
  without re-entering the price; price resolution ignores it.
- Override prices are positive with 2 decimal places.
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal

from modules.core.models import BaseModel


class CustomerProductPrice(BaseModel):
    customer = models.ForeignKey(
        "users.User",
        on_delete=models.CASCADE,
        related_name="price_overrides",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="price_overrides",
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "customer_product_prices"
        ordering = ["product_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer", "product"],
                name="cpp_customer_product_uniq",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="cpp_price_positive",
            ),
        ]

    def __str__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"{self.customer_id}/{self.product_id}: {self.price} ({state})"
