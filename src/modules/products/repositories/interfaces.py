"""Product repository interface.

Besides the generic contract, exposes the narrow reads the pricing
resolver and order engine rely on: existence and active look-up.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_active(self, id: str) -> Optional[Product]:
        """Retrieve a product only if it exists and is active."""

    @abstractmethod
    def deactivate(self, id: str) -> bool:
        """Logically delete a product. Returns ``False`` if it does not exist."""
