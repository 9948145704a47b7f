"""Pricing repositories package."""

from modules.pricing.repositories.django_repository import PriceOverrideDjangoRepository
from modules.pricing.repositories.interfaces import IPriceOverrideRepository

__all__ = ["IPriceOverrideRepository", "PriceOverrideDjangoRepository"]
