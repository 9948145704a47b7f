"""Base abstract models shared by every bounded context.

Provides:
- ``BaseModel``: UUIDv7 primary key + created_at / updated_at timestamps.
- ``WriteOnceModel``: BaseModel whose rows can be inserted but never updated.
  Used for order line items and the status audit trail.
"""

from __future__ import annotations

import uuid6
from django.db import models

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Write-once records
# ---------------------------------------------------------------------------


class RecordImmutable(Exception):
    """An already-persisted write-once record was saved again."""


class WriteOnceModel(BaseModel):
    """Abstract model for append-only rows.

    ``save()`` only inserts.  Re-saving a row loaded from the database
    raises ``RecordImmutable`` instead of issuing an UPDATE.
    """

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        if not self._state.adding:
            raise RecordImmutable(
                f"{self._meta.label} {self.pk} is write-once and cannot be updated."
            )
        kwargs["force_insert"] = True
        super().save(*args, **kwargs)
