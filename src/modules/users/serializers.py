"""User DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.users.models import User


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "full_name",
            "role",
            "phone",
            "email",
            "num_doc",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserWriteSerializer(serializers.Serializer):
    """Body of POST and PUT; PATCH validates it with ``partial=True``.

    Only shape and types are checked here; ``CreateUserDTO`` and
    ``UpdateUserDTO`` apply the business rules.
    """

    full_name = serializers.CharField(allow_blank=True)
    role = serializers.CharField(allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    num_doc = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(required=False, allow_null=True)
