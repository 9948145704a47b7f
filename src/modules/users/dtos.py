"""User DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateUserDTO``: input for user creation.
- ``UpdateUserDTO``: input for full (PUT) or partial (PATCH) updates.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from modules.users.models import UserRole


def _check_role(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in UserRole.values:
        raise ValueError(f"Role must be one of: {', '.join(UserRole.values)}.")
    return v


class CreateUserDTO(BaseModel):
    """Immutable DTO for user creation requests."""

    model_config = ConfigDict(frozen=True)

    full_name: str
    role: str
    phone: str = ""
    email: Optional[EmailStr] = None
    num_doc: str = ""

    @field_validator("full_name")
    @classmethod
    def full_name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Full name is required.")
        return v.strip()

    @field_validator("role")
    @classmethod
    def role_must_be_known(cls, v: str) -> str:
        return _check_role(v)


class UpdateUserDTO(BaseModel):
    """Immutable DTO for user update requests.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True)

    full_name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    num_doc: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("full_name")
    @classmethod
    def full_name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Full name must not be blank.")
        return v.strip() if v is not None else v

    @field_validator("role")
    @classmethod
    def role_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        return _check_role(v)
