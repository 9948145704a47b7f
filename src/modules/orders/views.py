"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into the standard error
envelope; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.addresses.exceptions import AddressNotFound
from modules.addresses.repositories.django_repository import AddressDjangoRepository
from modules.core.exceptions import StorageUnavailable, ValidationFailed, error_response
from modules.core.pagination import StandardResultsSetPagination
from modules.orders.dtos import (
    AssignOrderDTO,
    CreateOrderDTO,
    CreateOrderItemDTO,
    UpdateStatusDTO,
)
from modules.orders.exceptions import (
    InvalidTransition,
    OrderNotFound,
    TransitionConflict,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    AssignOrderSerializer,
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    StatusHistorySerializer,
    UpdateStatusSerializer,
)
from modules.orders.services import OrderService
from modules.pricing.views import build_pricing_service
from modules.products.exceptions import ProductNotFound
from modules.users.exceptions import UserNotFound
from modules.users.repositories.django_repository import UserDjangoRepository


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "subtotal", "status", "scheduled_at"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    pagination_class = StandardResultsSetPagination

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            user_repository=UserDjangoRepository(),
            address_repository=AddressDjangoRepository(),
            pricing_service=build_pricing_service(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttle scope per action."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve", "history"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        return self._service.list_orders()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Returns ``{"order_id": ...}`` with 201.
        """
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        dto = CreateOrderDTO(
            customer_id=data["customer_id"],
            address_id=data["address_id"],
            items=[
                CreateOrderItemDTO(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                )
                for item in data["items"]
            ],
            scheduled_at=data.get("scheduled_at"),
            notes=data.get("notes") or "",
        )

        try:
            order = self._service.create_order(dto)
        except (
            UserNotFound,
            AddressNotFound,
            ProductNotFound,
            ValidationFailed,
            StorageUnavailable,
        ) as exc:
            return error_response(exc)

        return Response({"order_id": str(order.id)}, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?customer_id=&driver_id=&status=

        Newest first, paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(str(pk))
        except OrderNotFound as exc:
            return error_response(exc)
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["get"])
    def history(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/history/ (oldest first)."""
        try:
            entries = self._service.get_history(str(pk))
        except OrderNotFound as exc:
            return error_response(exc)
        return Response(StatusHistorySerializer(entries, many=True).data)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"])
    def assign(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/assign/  body: ``{"driver_id": ...}``"""
        serializer = AssignOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = AssignOrderDTO(driver_id=serializer.validated_data["driver_id"])

        try:
            order = self._service.assign_order(str(pk), dto)
        except (
            OrderNotFound,
            UserNotFound,
            InvalidTransition,
            TransitionConflict,
            StorageUnavailable,
        ) as exc:
            return error_response(exc)

        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/

        Body: ``{"new_status": ..., "changed_by": ..., "note": ...}``.
        """
        serializer = UpdateStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        dto = UpdateStatusDTO(
            new_status=data["new_status"],
            changed_by=data["changed_by"],
            note=data.get("note") or "",
        )

        try:
            order = self._service.update_status(str(pk), dto)
        except (
            OrderNotFound,
            UserNotFound,
            InvalidTransition,
            TransitionConflict,
            StorageUnavailable,
        ) as exc:
            return error_response(exc)

        return Response(OrderSerializer(order).data)
