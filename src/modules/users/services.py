"""User service layer (Use Cases).

Business rules enforced here:
- Email must be unique across users.
- A full update (PUT) with no ``is_active`` re-activates the user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import models, transaction

from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.models import User

if TYPE_CHECKING:
    from modules.users.dtos import CreateUserDTO, UpdateUserDTO
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)

_UPDATABLE_FIELDS = ("full_name", "role", "phone", "email", "num_doc", "is_active")


class UserService:
    """Application service for User use-cases."""

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_user(self, dto: CreateUserDTO) -> User:
        """Create a new user.

        Raises:
            UserAlreadyExists: if the email is already taken.
        """
        log = logger.bind(role=dto.role)
        if dto.email and self._repo.get_by_email(dto.email):
            log.warning("user.duplicate_email")
            raise UserAlreadyExists("Email already registered.")

        user = User(
            full_name=dto.full_name,
            role=dto.role,
            phone=dto.phone,
            email=dto.email,
            num_doc=dto.num_doc,
        )
        user = self._repo.save(user)
        log.info("user.created", user_id=str(user.id))
        return user

    @transaction.atomic
    def update_user(self, id: str, dto: UpdateUserDTO, partial: bool = True) -> User:
        """Update a user with the supplied fields.

        With ``partial=False`` (PUT semantics) an omitted ``is_active``
        means active.

        Raises:
            UserNotFound: if the user does not exist.
            UserAlreadyExists: if the new email collides with another user.
        """
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")

        log = logger.bind(user_id=str(id))

        if dto.email is not None and dto.email != user.email:
            other = self._repo.get_by_email(dto.email)
            if other and other.id != user.id:
                log.warning("user.duplicate_email")
                raise UserAlreadyExists("Email already registered.")

        for field in _UPDATABLE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(user, field, value)
        if not partial and dto.is_active is None:
            user.is_active = True

        user = self._repo.save(user)
        log.info("user.updated")
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_users(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[User]:
        return self._repo.list(filters)

    def get_user(self, id: str) -> User:
        """Raises ``UserNotFound`` if the user does not exist."""
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")
        return user
