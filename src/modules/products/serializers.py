"""Product DRF serializers for API input/output.

Business logic lives in the Service Layer, which receives Pydantic
DTOs from ``dtos.py``.  The input serializer only checks request shape
and types; business rules are applied by the DTO.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class ProductWriteSerializer(serializers.Serializer):
    """Body of POST and PUT; PATCH validates it with ``partial=True``."""

    name = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    capacity_liters = serializers.DecimalField(
        max_digits=6, decimal_places=2, required=False, allow_null=True
    )
    is_active = serializers.BooleanField(required=False, allow_null=True)


# ---------------------------------------------------------------------------
# Output Serializers
# ---------------------------------------------------------------------------


class ProductSerializer(serializers.ModelSerializer):
    """Catalogue view of a product at its base price."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "capacity_liters",
            "price",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class EffectivePriceSerializer(serializers.ModelSerializer):
    """Product row annotated by the pricing resolver.

    ``price`` is what the customer pays; ``base_price`` is the catalogue
    price it was resolved from.
    """

    price = serializers.DecimalField(
        source="effective_price", max_digits=10, decimal_places=2, read_only=True
    )
    base_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = Product
        fields = ["id", "name", "capacity_liters", "price", "base_price", "is_active"]
        read_only_fields = fields
