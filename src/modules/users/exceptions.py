"""User domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError


class UserAlreadyExists(ConflictError):
    """Another user already uses the given email."""


class UserNotFound(NotFoundError):
    """The referenced user does not exist."""


class CustomerNotFound(UserNotFound):
    """The customer referenced by an order or price override does not exist."""


class DriverNotFound(UserNotFound):
    """The user does not exist, is inactive, or is not a driver."""
