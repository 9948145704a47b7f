from __future__ import annotations

from rest_framework import serializers

from modules.addresses.models import Address


class AddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = [
            "id",
            "user_id",
            "label",
            "street",
            "reference",
            "lat",
            "lng",
            "is_default",
            "created_at",
        ]
        read_only_fields = fields


class AddressWriteSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    street = serializers.CharField(allow_blank=True)
    label = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    reference = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    lat = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True
    )
    lng = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True
    )
    is_default = serializers.BooleanField(required=False, default=False)
