"""Delivery address owned by a user.

At most one address per user carries ``is_default`` (maintained by the
service layer when a new default is registered).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Address(BaseModel):
    user = models.ForeignKey(
        "users.User",
        on_delete=models.CASCADE,
        related_name="addresses",
    )
    label = models.CharField(max_length=60, blank=True, default="")
    street = models.CharField(max_length=255)
    reference = models.CharField(max_length=255, blank=True, default="")
    lat = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    lng = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    is_default = models.BooleanField(default=False)

    class Meta:
        db_table = "addresses"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["user", "is_default"], name="addresses_user_default_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.label or 'address'}: {self.street}"
