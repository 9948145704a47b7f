"""Address API views."""

from __future__ import annotations

from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.addresses.dtos import CreateAddressDTO
from modules.addresses.repositories.django_repository import AddressDjangoRepository
from modules.addresses.serializers import AddressSerializer, AddressWriteSerializer
from modules.addresses.services import AddressService
from modules.core.exceptions import error_response, validation_error_response
from modules.users.exceptions import UserNotFound
from modules.users.repositories.django_repository import UserDjangoRepository


class AddressViewSet(ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = AddressService(
            address_repository=AddressDjangoRepository(),
            user_repository=UserDjangoRepository(),
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/addresses/?user_id=<uuid>"""
        user_id = request.query_params.get("user_id")
        if not user_id:
            return validation_error_response(ValueError("user_id is required."))
        try:
            UUID(user_id)
        except ValueError as exc:
            return validation_error_response(exc)

        addresses = self._service.list_addresses(user_id)
        return Response(AddressSerializer(addresses, many=True).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/addresses/"""
        serializer = AddressWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            dto = CreateAddressDTO(
                user_id=data["user_id"],
                street=data["street"],
                label=data.get("label") or "",
                reference=data.get("reference") or "",
                lat=data.get("lat"),
                lng=data.get("lng"),
                is_default=data["is_default"],
            )
        except (PydanticValidationError, ValueError) as exc:
            return validation_error_response(exc)

        try:
            address = self._service.create_address(dto)
        except UserNotFound as exc:
            return error_response(exc)

        return Response(AddressSerializer(address).data, status=status.HTTP_201_CREATED)
