"""Transaction helpers for multi-record writes."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar, cast

import structlog
from django.db import OperationalError, transaction

from modules.core.exceptions import StorageUnavailable

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def atomic_unit(func: F) -> F:
    """Run *func* inside ``transaction.atomic()`` as one unit of work.

    Either every write commits or none does.  ``OperationalError`` (lock
    wait timeout, deadlock victim, dropped connection) surfaces as
    ``StorageUnavailable`` so callers can retry; domain errors propagate
    untouched after the rollback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            with transaction.atomic():
                return func(*args, **kwargs)
        except OperationalError as exc:
            logger.error(
                "db.transaction_failed",
                operation=func.__qualname__,
                error=str(exc),
            )
            raise StorageUnavailable(
                "The operation could not be completed; please retry."
            ) from exc

    return cast(F, wrapper)
