"""User repository interface.

Extends ``IRepository[User]`` with the narrow read look-ups other
bounded contexts need: customer existence for pricing and ordering,
active-driver look-up for order assignment.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.users.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by email address."""

    @abstractmethod
    def get_active_driver(self, id: str) -> Optional[User]:
        """Retrieve an active user with the ``driver`` role, or ``None``."""
