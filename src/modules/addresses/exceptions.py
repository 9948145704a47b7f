"""Address domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class AddressNotFound(NotFoundError):
    """The address does not exist or does not belong to the given user."""
