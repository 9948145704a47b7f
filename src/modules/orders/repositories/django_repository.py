"""Django ORM implementation of the Order repository.

Concurrency control on transitions is two-fold: the caller first reads
the row with ``select_for_update()`` and then writes with
``UPDATE ... WHERE id = %s AND status = <status read>``.  On backends
with row locks the second statement always matches; on backends without
them (SQLite) a zero row count still exposes a concurrent writer.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(
        self,
        customer_id: str,
        address_id: str,
        lines: List[Tuple[str, int, Decimal]],
        scheduled_at: Optional[datetime] = None,
        notes: str = "",
    ) -> Order:
        order = Order(
            customer_id=customer_id,
            address_id=address_id,
            scheduled_at=scheduled_at,
            notes=notes,
        )
        order.save()

        subtotal = Decimal("0.00")
        for product_id, quantity, unit_price in lines:
            item = OrderItem(
                order=order,
                product_id=product_id,
                quantity=quantity,
                unit_price=unit_price,
            )
            item.save()
            subtotal += item.line_total

        order.subtotal = subtotal
        order.save(update_fields=["subtotal"])

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            item_count=len(lines),
            subtotal=str(subtotal),
        )
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its items (and their products) prefetched.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_related("customer", "address", "assigned_driver")
                .prefetch_related("items__product")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def exists(self, id: str) -> bool:
        try:
            return Order.objects.filter(id=id).exists()
        except (ValueError, ValidationError):
            return False

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """List orders, newest first.

        Supported filter keys include ``customer_id``,
        ``assigned_driver_id`` and ``status``.
        """
        queryset = Order.objects.select_related("customer", "assigned_driver")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def get_for_update(self, id: str) -> Optional[Order]:
        """Must be called inside a transaction. ``None`` for missing or invalid IDs."""
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def history(self, order_id: str) -> models.QuerySet[OrderStatusHistory]:
        return OrderStatusHistory.objects.filter(order_id=order_id).order_by(
            "created_at", "id"
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Generic ``IRepository`` write. Order use-cases write through
        ``create`` and ``apply_transition`` instead."""
        entity.save()
        logger.info("order.saved", order_id=str(entity.id))
        return entity

    def apply_transition(
        self, id: str, expected_status: str, changes: Dict[str, Any]
    ) -> bool:
        # ``update()`` skips ``auto_now``.
        updated = Order.objects.filter(id=id, status=expected_status).update(
            updated_at=timezone.now(), **changes
        )
        return updated == 1

    def add_history(
        self,
        order_id: str,
        old_status: Optional[str],
        new_status: str,
        changed_by_id: Optional[str],
        note: str = "",
    ) -> OrderStatusHistory:
        entry = OrderStatusHistory(
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            changed_by_id=changed_by_id,
            note=note,
        )
        entry.save()

        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=new_status,
        )
        return entry
