"""Order, OrderItem, and OrderStatusHistory models.

Business rules implemented:
- Status only moves along the edges in ``constants.VALID_TRANSITIONS``
  (enforced by the service layer under a row lock).
- Every accepted transition, including creation and assignment, appends
  one ``OrderStatusHistory`` row.
- ``OrderItem.unit_price`` is a frozen snapshot of the effective price at
  creation time; ``line_total`` is always ``quantity * unit_price``.
- Items and history rows are write-once.
- Customer, address and product FKs use PROTECT to preserve financial
  history.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel, WriteOnceModel
from modules.orders.constants import (
    INITIAL_STATUS,
    MAX_ITEM_QUANTITY,
    TERMINAL_STATES,
    OrderStatus,
    can_transition,
)


class Order(BaseModel):
    """Order aggregate root.

    ``subtotal`` is fixed when the order is created.  Afterwards only
    ``status``, ``assigned_driver`` and ``delivered_at`` change, and only
    through the state machine.
    """

    customer = models.ForeignKey(
        "users.User",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    address = models.ForeignKey(
        "addresses.Address",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    assigned_driver = models.ForeignKey(
        "users.User",
        on_delete=models.PROTECT,
        related_name="assigned_orders",
        null=True,
        blank=True,
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=INITIAL_STATUS,
    )
    subtotal = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    delivery_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    notes = models.TextField(blank=True, default="")
    scheduled_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["customer", "-created_at"], name="orders_customer_idx"),
            models.Index(fields=["assigned_driver", "status"], name="orders_driver_idx"),
        ]

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.delivery_fee

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        return can_transition(self.status, new_status)

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(WriteOnceModel):
    """Line item linking an Order to a Product at a frozen unit price."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_ITEM_QUANTITY)]
    )
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    line_total = models.DecimalField(max_digits=12, decimal_places=2, editable=False)

    class Meta:
        db_table = "order_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.line_total = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.unit_price}"


class OrderStatusHistory(WriteOnceModel):
    """Append-only audit trail for order status transitions.

    ``old_status`` is ``None`` only for the creation entry.  ``changed_by``
    is nulled, not cascaded, if the acting user is ever removed.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status = models.CharField(max_length=20, choices=OrderStatus.choices)
    changed_by = models.ForeignKey(
        "users.User",
        on_delete=models.SET_NULL,
        related_name="status_changes",
        null=True,
        blank=True,
    )
    note = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["order", "created_at"], name="osh_order_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id}: {self.old_status} -> {self.new_status}"
