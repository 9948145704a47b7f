"""Customer price override API.

One resource keyed by ``(customer_id, product_id)``, so the endpoints
address it through query parameters rather than a path id:

- ``GET    /customer_prices/?customer_id=``
- ``POST   /customer_prices/``  (upsert)
- ``DELETE /customer_prices/?customer_id=&product_id=``
"""

from __future__ import annotations

from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.exceptions import error_response, validation_error_response
from modules.pricing.dtos import UpsertPriceOverrideDTO
from modules.pricing.repositories import PriceOverrideDjangoRepository
from modules.pricing.serializers import (
    CustomerPriceSerializer,
    CustomerPriceWriteSerializer,
)
from modules.pricing.services import PricingService
from modules.products.exceptions import ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.users.exceptions import CustomerNotFound
from modules.users.repositories.django_repository import UserDjangoRepository


def build_pricing_service() -> PricingService:
    return PricingService(
        override_repository=PriceOverrideDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        user_repository=UserDjangoRepository(),
    )


def _uuid_params(request: Request, *names: str):
    """Read required UUID query parameters, raising ``ValueError`` on bad input."""
    values = []
    for name in names:
        raw = request.query_params.get(name)
        if not raw:
            raise ValueError(f"Query parameter '{name}' is required.")
        try:
            values.append(UUID(raw))
        except ValueError:
            raise ValueError(f"Query parameter '{name}' must be a valid UUID.")
    return values


class CustomerPriceView(APIView):
    """List, upsert and delete customer-specific prices."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_pricing_service()

    def get(self, request: Request) -> Response:
        try:
            (customer_id,) = _uuid_params(request, "customer_id")
        except ValueError as exc:
            return validation_error_response(exc)

        try:
            overrides = self._service.list_overrides(str(customer_id))
        except CustomerNotFound as exc:
            return error_response(exc)

        overrides = overrides.select_related("product")
        return Response(CustomerPriceSerializer(overrides, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = CustomerPriceWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            dto = UpsertPriceOverrideDTO(
                customer_id=data["customer_id"],
                product_id=data["product_id"],
                price=data["price"],
                is_active=data["is_active"],
            )
        except (PydanticValidationError, ValueError) as exc:
            return validation_error_response(exc)

        try:
            override = self._service.set_override(dto)
        except (CustomerNotFound, ProductNotFound) as exc:
            return error_response(exc)

        return Response(CustomerPriceSerializer(override).data)

    def delete(self, request: Request) -> Response:
        try:
            customer_id, product_id = _uuid_params(request, "customer_id", "product_id")
        except ValueError as exc:
            return validation_error_response(exc)

        self._service.remove_override(str(customer_id), str(product_id))
        return Response(status=status.HTTP_204_NO_CONTENT)
