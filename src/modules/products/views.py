"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
The listing goes through ``PricingService`` so that ``?customer_id=``
returns the same prices an order for that customer would be charged.
"""

from __future__ import annotations

from uuid import UUID

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response, validation_error_response
from modules.pricing.views import build_pricing_service
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    EffectivePriceSerializer,
    ProductSerializer,
    ProductWriteSerializer,
)
from modules.products.services import ProductService
from modules.users.exceptions import CustomerNotFound


class ProductViewSet(GenericViewSet):
    """ViewSet for Product operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    filterset_class = ProductFilter
    search_fields = ["name"]
    ordering_fields = ["name", "price", "capacity_liters"]
    ordering = ["name", "id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    pagination_class = None
    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())
        self._pricing = build_pricing_service()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?customer_id=<uuid>

        Active products only, each with the effective price for the
        customer (base price when no customer is given).
        """
        customer_id = request.query_params.get("customer_id") or None
        if customer_id is not None:
            try:
                customer_id = str(UUID(customer_id))
            except ValueError:
                return validation_error_response(
                    ValueError("Query parameter 'customer_id' must be a valid UUID.")
                )

        try:
            products = self._pricing.list_effective_prices(customer_id)
        except CustomerNotFound as exc:
            return error_response(exc)

        products = self.filter_queryset(products)
        return Response(EffectivePriceSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(str(pk))
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = self._create_dto(serializer.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return validation_error_response(exc)

        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/

        Every field is replaced; an omitted ``is_active`` means active.
        """
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = self._create_dto(serializer.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return validation_error_response(exc)

        try:
            product = self._service.replace_product(str(pk), dto)
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            dto = UpdateProductDTO(
                name=data.get("name"),
                price=data.get("price"),
                capacity_liters=data.get("capacity_liters"),
                is_active=data.get("is_active"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return validation_error_response(exc)

        try:
            product = self._service.update_product(str(pk), dto)
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/ (logical delete)."""
        try:
            self._service.delete_product(str(pk))
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @staticmethod
    def _create_dto(data) -> CreateProductDTO:
        is_active = data.get("is_active")
        return CreateProductDTO(
            name=data.get("name", ""),
            price=data.get("price"),
            capacity_liters=data.get("capacity_liters"),
            is_active=True if is_active is None else is_active,
        )
