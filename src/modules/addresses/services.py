"""Address service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import models, transaction

from modules.addresses.models import Address
from modules.users.exceptions import UserNotFound

if TYPE_CHECKING:
    from modules.addresses.dtos import CreateAddressDTO
    from modules.addresses.repositories.interfaces import IAddressRepository
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class AddressService:
    def __init__(
        self,
        address_repository: IAddressRepository,
        user_repository: IUserRepository,
    ) -> None:
        self._repo = address_repository
        self._user_repo = user_repository

    @transaction.atomic
    def create_address(self, dto: CreateAddressDTO) -> Address:
        """Register an address for a user.

        A new default address demotes the user's previous default in the
        same transaction.

        Raises:
            UserNotFound: the owning user does not exist.
        """
        if not self._user_repo.exists(str(dto.user_id)):
            raise UserNotFound(f"User {dto.user_id} not found.")

        if dto.is_default:
            self._repo.clear_default(str(dto.user_id))

        address = Address(
            user_id=dto.user_id,
            label=dto.label,
            street=dto.street,
            reference=dto.reference,
            lat=dto.lat,
            lng=dto.lng,
            is_default=dto.is_default,
        )
        address = self._repo.save(address)
        logger.info("address.created", address_id=str(address.id))
        return address

    def list_addresses(self, user_id: str) -> models.QuerySet[Address]:
        return self._repo.list({"user_id": user_id})
