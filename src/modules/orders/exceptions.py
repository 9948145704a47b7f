"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
the standard error envelope.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, InvalidTransitionError, NotFoundError


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""


class InvalidTransition(InvalidTransitionError):
    """The state machine does not allow the requested status change."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot transition order from '{current}' to '{requested}'."
        )


class TransitionConflict(ConflictError):
    """Another request changed the order's status between read and write."""
