"""User model: managers, delivery drivers and customers.

Business rules implemented:
- A user has exactly one role; only ``driver`` users can be assigned orders
  (enforced at the order service layer).
- Email is unique when present (NULL allowed for phone-only customers).
- Document number and phone are masked in ``__str__`` and logs.
- Credentials are never stored here; API authentication uses JWT.
"""

from __future__ import annotations

import structlog
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class UserRole(models.TextChoices):
    MANAGER = "manager", "Manager"
    DRIVER = "driver", "Driver"
    CUSTOMER = "customer", "Customer"


class User(BaseModel):
    """A person the delivery business deals with."""

    full_name = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=UserRole.choices)
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(max_length=254, unique=True, null=True, blank=True)
    num_doc = models.CharField(max_length=20, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "users"
        ordering = ["full_name"]
        indexes = [
            models.Index(fields=["role", "is_active"], name="users_role_active_idx"),
        ]

    @property
    def is_driver(self) -> bool:
        return self.role == UserRole.DRIVER

    def save(self, *args, **kwargs) -> None:
        if self.email == "":
            self.email = None
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        suffix = self.num_doc[-3:] if self.num_doc else "???"
        return f"{self.full_name} ({self.role}, doc ***{suffix})"
