"""Domain error hierarchy and the standard API error envelope.

Every domain exception carries a ``kind`` that tells callers what went
wrong without parsing the message:

- ``validation_error``: malformed or missing input, rejected before any write.
- ``not_found``: a referenced record is absent.
- ``invalid_transition``: the order state machine refused the change.
- ``conflict``: a concurrent writer won the race for the same record.
- ``storage_error``: transactional failure; safe to retry.

Errors leave the API in one shape::

    {"type": "not_found", "errors": [{"code": "not_found", "detail": "...", "attr": null}]}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class DomainError(Exception):
    """Base class for business-rule failures raised by the service layer."""

    kind = "domain_error"
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationFailed(DomainError):
    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DomainError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(DomainError):
    kind = "invalid_transition"
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(DomainError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class StorageUnavailable(DomainError):
    """The database refused or dropped the transaction; the call can be retried."""

    kind = "storage_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


def error_response(
    exc: DomainError, status_code: Optional[int] = None, attr: Optional[str] = None
) -> Response:
    """Render a domain error in the standard envelope."""
    return Response(
        {
            "type": exc.kind,
            "errors": [{"code": exc.kind, "detail": str(exc), "attr": attr}],
        },
        status=status_code or exc.status_code,
    )


def _flatten(data: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Turn DRF's nested ``ErrorDetail`` structure into a flat error list."""
    if isinstance(data, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in data.items():
            if key == "detail" and attr is None:
                errors.extend(_flatten(value, None))
            else:
                name = key if attr is None else f"{attr}.{key}"
                errors.extend(_flatten(value, name))
        return errors
    if isinstance(data, list):
        errors = []
        for index, value in enumerate(data):
            if isinstance(value, (dict, list)):
                errors.extend(_flatten(value, f"{attr}.{index}" if attr else str(index)))
            else:
                errors.extend(_flatten(value, attr))
        return errors
    return [
        {
            "code": getattr(data, "code", "error"),
            "detail": str(data),
            "attr": attr,
        }
    ]


def standardized_exception_handler(exc: Exception, context: Dict[str, Any]):
    """DRF ``EXCEPTION_HANDLER`` producing the standard error envelope.

    Domain errors that a view did not translate itself are rendered here
    with the status code their ``kind`` implies.
    """
    if isinstance(exc, DomainError):
        logger.warning("api.domain_error", kind=exc.kind, detail=str(exc))
        return error_response(exc)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        error_type = "validation_error"
    elif response.status_code == status.HTTP_404_NOT_FOUND:
        error_type = "not_found"
    elif response.status_code >= 500:
        error_type = "server_error"
    else:
        error_type = "client_error"

    response.data = {"type": error_type, "errors": _flatten(response.data)}
    return response


def validation_error_response(exc: Exception) -> Response:
    """Render a Pydantic ``ValidationError`` (or plain ``ValueError``) as a 400."""
    errors_fn = getattr(exc, "errors", None)
    if callable(errors_fn):
        errors = [
            {
                "code": "invalid",
                "detail": str(error.get("msg", "")).removeprefix("Value error, "),
                "attr": ".".join(str(part) for part in error.get("loc", ())) or None,
            }
            for error in errors_fn()
        ]
    else:
        errors = [{"code": "invalid", "detail": str(exc), "attr": None}]
    return Response(
        {"type": "validation_error", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )
