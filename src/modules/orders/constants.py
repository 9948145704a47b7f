"""Order domain constants.

Defines status choices and the transition table of the order state
machine::

    pending -> assigned -> en_route -> delivered
    pending, assigned -> cancelled

``delivered`` and ``cancelled`` are terminal.
"""

from __future__ import annotations

from typing import FrozenSet

from django.core.exceptions import ImproperlyConfigured
from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ASSIGNED = "assigned", "Assigned"
    EN_ROUTE = "en_route", "En route"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


INITIAL_STATUS = OrderStatus.PENDING

VALID_TRANSITIONS: dict[str, FrozenSet[str]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.ASSIGNED, OrderStatus.CANCELLED}),
    OrderStatus.ASSIGNED: frozenset({OrderStatus.EN_ROUTE, OrderStatus.CANCELLED}),
    OrderStatus.EN_ROUTE: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATES: FrozenSet[str] = frozenset(
    status for status, targets in VALID_TRANSITIONS.items() if not targets
)

if set(VALID_TRANSITIONS) != set(OrderStatus.values):
    raise ImproperlyConfigured(
        "VALID_TRANSITIONS must list every OrderStatus exactly once."
    )


def allowed_transitions(status: str) -> FrozenSet[str]:
    """Statuses reachable from *status* in one step (empty if unknown)."""
    return VALID_TRANSITIONS.get(status, frozenset())


def can_transition(current: str, new: str) -> bool:
    return new in allowed_transitions(current)


ORDER_CREATED_NOTE = "order created"
DRIVER_ASSIGNED_NOTE = "assigned to driver"

# Upper bound for a single line; larger requests are rejected as malformed.
MAX_ITEM_QUANTITY = 10_000
