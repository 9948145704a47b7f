"""Order repository interface.

Extends ``IRepository[Order]`` with the operations the order engine
needs: atomic creation with items, a locked read, a guarded status
write and the history trail.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes OrderItem children and
    OrderStatusHistory records.  Mutations must be atomic.
    """

    @abstractmethod
    def create(
        self,
        customer_id: str,
        address_id: str,
        lines: List[Tuple[str, int, Decimal]],
        scheduled_at: Optional[datetime] = None,
        notes: str = "",
    ) -> Order:
        """Insert the order header and one item per ``(product_id, quantity, unit_price)``.

        The subtotal is the sum of the persisted line totals.
        """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Read an order while holding its row lock until the transaction ends."""

    @abstractmethod
    def apply_transition(
        self, id: str, expected_status: str, changes: Dict[str, Any]
    ) -> bool:
        """Write *changes* only if the stored status still equals *expected_status*.

        Returns ``False`` when another writer moved the order first.
        """

    @abstractmethod
    def add_history(
        self,
        order_id: str,
        old_status: Optional[str],
        new_status: str,
        changed_by_id: Optional[str],
        note: str = "",
    ) -> OrderStatusHistory:
        """Append one row to the order's audit trail."""

    @abstractmethod
    def history(self, order_id: str) -> models.QuerySet[OrderStatusHistory]:
        """Audit trail of an order, oldest first."""
