"""Order service layer (Use Cases).

Owns order creation and the order state machine.  Every write is one
unit of work (``atomic_unit``): the order header, its items and the
history entry commit together or not at all.

Business rules enforced:
- Customer and delivery address must exist; the address must belong
  to the customer.
- Each line is priced once through ``PricingService`` and the price is
  frozen on the item.  Any pricing failure aborts the whole order.
- Transitions follow ``constants.VALID_TRANSITIONS`` and are applied
  under a row lock plus a status-guarded update, so two concurrent
  requests can never both move an order from the same status.
- ``delivered_at`` is set if and only if the order becomes ``delivered``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import models
from django.utils import timezone

from modules.addresses.exceptions import AddressNotFound
from modules.core.db import atomic_unit
from modules.core.exceptions import ValidationFailed
from modules.orders.constants import (
    DRIVER_ASSIGNED_NOTE,
    INITIAL_STATUS,
    ORDER_CREATED_NOTE,
    OrderStatus,
)
from modules.orders.exceptions import InvalidTransition, OrderNotFound, TransitionConflict
from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.users.exceptions import CustomerNotFound, DriverNotFound, UserNotFound

if TYPE_CHECKING:
    from modules.addresses.repositories.interfaces import IAddressRepository
    from modules.orders.dtos import AssignOrderDTO, CreateOrderDTO, UpdateStatusDTO
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.pricing.services import PricingService
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


def _exceeds_column(model: type[models.Model], field_name: str, amount: Decimal) -> bool:
    """True when *amount* has more integer digits than the decimal column allows."""
    field = model._meta.get_field(field_name)
    return abs(amount) >= Decimal(10) ** (field.max_digits - field.decimal_places)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and the pricing service via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        user_repository: IUserRepository,
        address_repository: IAddressRepository,
        pricing_service: PricingService,
    ) -> None:
        self._order_repo = order_repository
        self._user_repo = user_repository
        self._address_repo = address_repository
        self._pricing = pricing_service

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @atomic_unit
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create a pending order with prices frozen at creation time.

        Raises:
            CustomerNotFound: customer does not exist.
            AddressNotFound: address does not exist or is not the customer's.
            ProductNotFound: a product does not exist or is inactive.
            ValidationFailed: a line total or the subtotal does not fit its column.
        """
        customer_id = str(dto.customer_id)
        log = logger.bind(customer_id=customer_id)
        log.info("order.creation_started", item_count=len(dto.items))

        if not self._user_repo.exists(customer_id):
            raise CustomerNotFound(f"Customer {customer_id} not found.")
        if not self._address_repo.get_for_user(str(dto.address_id), customer_id):
            raise AddressNotFound(
                f"Address {dto.address_id} not found for customer {customer_id}."
            )

        lines = [
            (
                str(item.product_id),
                item.quantity,
                self._pricing.resolve_effective_price(customer_id, str(item.product_id)),
            )
            for item in dto.items
        ]

        subtotal = Decimal("0.00")
        for _, quantity, unit_price in lines:
            line_total = quantity * unit_price
            if _exceeds_column(OrderItem, "line_total", line_total):
                raise ValidationFailed(f"Line total {line_total} is too large for one order.")
            subtotal += line_total
        if _exceeds_column(Order, "subtotal", subtotal):
            raise ValidationFailed(f"Order subtotal {subtotal} is too large for one order.")

        order = self._order_repo.create(
            customer_id=customer_id,
            address_id=str(dto.address_id),
            lines=lines,
            scheduled_at=dto.scheduled_at,
            notes=dto.notes,
        )
        self._order_repo.add_history(
            order_id=str(order.id),
            old_status=None,
            new_status=INITIAL_STATUS,
            changed_by_id=customer_id,
            note=ORDER_CREATED_NOTE,
        )

        log.info("order.created", order_id=str(order.id), subtotal=str(order.subtotal))
        return self.get_order(str(order.id))

    @atomic_unit
    def assign_order(self, order_id: str, dto: AssignOrderDTO) -> Order:
        """Move a pending order to ``assigned`` and record its driver.

        Raises:
            OrderNotFound: order does not exist.
            DriverNotFound: driver does not exist, is inactive or is not a driver.
            InvalidTransition: the order is not ``pending``.
            TransitionConflict: a concurrent request changed the order first.
        """
        order = self._lock(order_id)
        driver_id = str(dto.driver_id)
        if not self._user_repo.get_active_driver(driver_id):
            raise DriverNotFound(f"Active driver {driver_id} not found.")

        return self._apply(
            order,
            OrderStatus.ASSIGNED,
            actor_id=driver_id,
            note=DRIVER_ASSIGNED_NOTE,
            assigned_driver_id=driver_id,
        )

    @atomic_unit
    def update_status(self, order_id: str, dto: UpdateStatusDTO) -> Order:
        """Apply a generic transition on behalf of ``dto.changed_by``.

        Raises:
            OrderNotFound: order does not exist.
            UserNotFound: the acting user does not exist.
            InvalidTransition: *new_status* is not reachable from the current one.
            TransitionConflict: a concurrent request changed the order first.
        """
        order = self._lock(order_id)
        actor_id = str(dto.changed_by)
        if not self._user_repo.exists(actor_id):
            raise UserNotFound(f"User {actor_id} not found.")

        changes: Dict[str, Any] = {}
        if dto.new_status == OrderStatus.DELIVERED:
            changes["delivered_at"] = timezone.now()

        return self._apply(order, dto.new_status, actor_id=actor_id, note=dto.note, **changes)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Raises ``OrderNotFound`` if the order does not exist."""
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        return self._order_repo.list(filters)

    def get_history(self, order_id: str) -> models.QuerySet[OrderStatusHistory]:
        """Chronological audit trail. Raises ``OrderNotFound`` for unknown orders."""
        if not self._order_repo.exists(str(order_id)):
            raise OrderNotFound(f"Order {order_id} not found.")
        return self._order_repo.history(str(order_id))

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _lock(self, order_id: str) -> Order:
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def _apply(
        self,
        order: Order,
        new_status: str,
        actor_id: str,
        note: str = "",
        **changes: Any,
    ) -> Order:
        old_status = order.status
        log = logger.bind(
            order_id=str(order.id),
            current_status=old_status,
            new_status=new_status,
        )

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidTransition(old_status, new_status)

        if not self._order_repo.apply_transition(
            str(order.id), old_status, {"status": new_status, **changes}
        ):
            log.warning("order.transition_conflict")
            raise TransitionConflict(
                f"Order {order.id} was modified concurrently; reload and retry."
            )

        self._order_repo.add_history(
            order_id=str(order.id),
            old_status=old_status,
            new_status=new_status,
            changed_by_id=actor_id,
            note=note,
        )
        log.info("order.status_updated", actor_id=actor_id)
        return self.get_order(str(order.id))
