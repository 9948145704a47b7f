"""Address repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.addresses.models import Address


class IAddressRepository(IRepository["Address"]):
    """Repository contract for user addresses."""

    @abstractmethod
    def get_for_user(self, id: str, user_id: str) -> Optional[Address]:
        """Retrieve an address only if it belongs to ``user_id``."""

    @abstractmethod
    def clear_default(self, user_id: str) -> int:
        """Unset ``is_default`` on every address of the user."""
