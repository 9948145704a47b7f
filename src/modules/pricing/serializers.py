"""Pricing DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.pricing.models import CustomerProductPrice


class CustomerPriceWriteSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    is_active = serializers.BooleanField(required=False, default=True)


class CustomerPriceSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = CustomerProductPrice
        fields = [
            "customer_id",
            "product_id",
            "product_name",
            "price",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
