"""Product catalogue: water containers and related items.

Business rules implemented:
- Base price must be greater than zero (2 decimal places).
- Inactive products cannot be ordered or priced for a customer
  (enforced by the pricing resolver).
- Deleting a product is logical (``is_active=False``) so past order
  lines keep their product reference.
- Changing ``price`` never touches placed orders: order lines store a
  snapshot of the effective price.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    name = models.CharField(max_length=255)
    capacity_liters = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active"], name="products_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info("product.created", product_id=str(self.id), name=self.name)

    def __str__(self) -> str:
        if self.capacity_liters is not None:
            return f"{self.name} ({self.capacity_liters} L)"
        return self.name
