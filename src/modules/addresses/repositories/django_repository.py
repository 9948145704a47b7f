"""Django ORM implementation of the Address repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.addresses.models import Address
from modules.addresses.repositories.interfaces import IAddressRepository

logger = structlog.get_logger(__name__)


class AddressDjangoRepository(IAddressRepository):
    def get_by_id(self, id: str) -> Optional[Address]:
        try:
            return Address.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def exists(self, id: str) -> bool:
        try:
            return Address.objects.filter(id=id).exists()
        except (ValueError, ValidationError):
            return False

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Address]:
        queryset = Address.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def save(self, entity: Address) -> Address:
        entity.save()
        logger.info(
            "address.saved", address_id=str(entity.id), user_id=str(entity.user_id)
        )
        return entity

    def get_for_user(self, id: str, user_id: str) -> Optional[Address]:
        try:
            return Address.objects.filter(id=id, user_id=user_id).first()
        except (ValueError, ValidationError):
            return None

    def clear_default(self, user_id: str) -> int:
        return Address.objects.filter(user_id=user_id, is_default=True).update(
            is_default=False
        )
