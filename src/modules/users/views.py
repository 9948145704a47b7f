"""User API views.

Exposes the ``UserService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into the standard
error envelope; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response, validation_error_response
from modules.core.pagination import StandardResultsSetPagination
from modules.users.dtos import CreateUserDTO, UpdateUserDTO
from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.filters import UserFilter
from modules.users.models import User
from modules.users.repositories.django_repository import UserDjangoRepository
from modules.users.serializers import UserSerializer, UserWriteSerializer
from modules.users.services import UserService


class UserViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for User operations (list, retrieve, create, update)."""

    filterset_class = UserFilter
    search_fields = ["full_name", "email", "phone"]
    ordering_fields = ["full_name", "created_at"]
    ordering = ["full_name", "id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    pagination_class = StandardResultsSetPagination
    queryset = User.objects.all()
    serializer_class = UserSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(repository=UserDjangoRepository())

    def get_queryset(self):
        return self._service.list_users()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/users/{pk}/"""
        try:
            user = self._service.get_user(str(pk))
        except UserNotFound as exc:
            return error_response(exc)
        return Response(UserSerializer(user).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/users/"""
        serializer = UserWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            dto = CreateUserDTO(
                full_name=data.get("full_name", ""),
                role=data.get("role", ""),
                phone=data.get("phone") or "",
                email=data.get("email") or None,
                num_doc=data.get("num_doc") or "",
            )
        except (PydanticValidationError, ValueError) as exc:
            return validation_error_response(exc)

        try:
            user = self._service.create_user(dto)
        except UserAlreadyExists as exc:
            return error_response(exc)

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/users/{pk}/"""
        return self._update(request, pk, partial=False)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/users/{pk}/"""
        return self._update(request, pk, partial=True)

    def _update(self, request: Request, pk: str | None, partial: bool) -> Response:
        serializer = UserWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            dto = UpdateUserDTO(
                full_name=data.get("full_name"),
                role=data.get("role"),
                phone=data.get("phone"),
                email=data.get("email") or None,
                num_doc=data.get("num_doc"),
                is_active=data.get("is_active"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return validation_error_response(exc)

        try:
            user = self._service.update_user(str(pk), dto, partial=partial)
        except (UserNotFound, UserAlreadyExists) as exc:
            return error_response(exc)

        return Response(UserSerializer(user).data)
