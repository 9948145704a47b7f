"""Order DRF serializers for API input/output.

Input serializers validate request shape only; the view converts the
validated data into Pydantic DTOs for the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import MAX_ITEM_QUANTITY, OrderStatus
from modules.orders.models import Order, OrderItem, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_ITEM_QUANTITY)


class CreateOrderSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField()
    address_id = serializers.UUIDField()
    items = CreateOrderItemSerializer(many=True, allow_empty=False)
    scheduled_at = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(
        required=False, default="", allow_blank=True, allow_null=True
    )


class AssignOrderSerializer(serializers.Serializer):
    driver_id = serializers.UUIDField()


class UpdateStatusSerializer(serializers.Serializer):
    """``assigned`` is excluded: assignment needs a driver and has its own endpoint."""

    new_status = serializers.ChoiceField(choices=OrderStatus.choices)
    changed_by = serializers.UUIDField()
    note = serializers.CharField(
        required=False, default="", allow_blank=True, allow_null=True
    )

    def validate_new_status(self, value: str) -> str:
        if value == OrderStatus.ASSIGNED:
            raise serializers.ValidationError(
                "Use PATCH /orders/{id}/assign/ to assign a driver."
            )
        return value


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    capacity_liters = serializers.DecimalField(
        source="product.capacity_liters",
        max_digits=6,
        decimal_places=2,
        read_only=True,
    )

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "capacity_liters",
            "quantity",
            "unit_price",
            "line_total",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    changed_by = serializers.UUIDField(source="changed_by_id", read_only=True)
    changed_at = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = OrderStatusHistory
        fields = ["id", "old_status", "new_status", "changed_by", "changed_at", "note"]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Order header without nested items."""

    customer_id = serializers.UUIDField(read_only=True)
    address_id = serializers.UUIDField(read_only=True)
    assigned_driver_id = serializers.UUIDField(read_only=True, allow_null=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_id",
            "address_id",
            "assigned_driver_id",
            "status",
            "subtotal",
            "delivery_fee",
            "total",
            "notes",
            "scheduled_at",
            "delivered_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderSerializer(OrderListSerializer):
    """Order header with its line items."""

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta(OrderListSerializer.Meta):
        fields = OrderListSerializer.Meta.fields + ["items"]
        read_only_fields = fields
