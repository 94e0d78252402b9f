"""Shared error taxonomy and the DRF exception handler.

Services raise ``DomainError`` subclasses; the API layer catches them and
translates them into a ``Result`` (see ``modules.core.results``).  Each class
carries a ``kind`` so the translation needs no per-class branching.

``api_exception_handler`` renders DRF's own exceptions (authentication,
permissions, throttling, malformed JSON) in the same envelope.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, Optional

import structlog
from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class ErrorKind(StrEnum):
    VALIDATION_FAILED = "validation_failed"
    UNAUTHENTICATED = "unauthenticated"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_STATE_TRANSITION = "invalid_state_transition"
    INVENTORY_UNAVAILABLE = "inventory_unavailable"
    TRANSACTION_ABORTED = "transaction_aborted"
    THROTTLED = "throttled"


class DomainError(Exception):
    """Base class for every error a service may raise to its caller."""

    kind: ErrorKind = ErrorKind.TRANSACTION_ABORTED
    default_message = "Request failed."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(DomainError):
    """Input failed schema or business validation. Nothing was mutated."""

    kind = ErrorKind.VALIDATION_FAILED
    default_message = "Validation failed."

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None) -> None:
        self.errors = dict(errors)
        super().__init__(message)


class Unauthenticated(DomainError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required"


class AccessDenied(DomainError):
    kind = ErrorKind.ACCESS_DENIED
    default_message = "Access denied"


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class Conflict(DomainError):
    kind = ErrorKind.CONFLICT
    default_message = "Conflict"


class TransactionAborted(DomainError):
    """Infrastructure failure inside an atomic phase; state was rolled back."""

    kind = ErrorKind.TRANSACTION_ABORTED
    default_message = "The operation could not be completed. Please retry."


# ---------------------------------------------------------------------------
# DRF integration
# ---------------------------------------------------------------------------

_DRF_KINDS = {
    drf_exceptions.NotAuthenticated: ErrorKind.UNAUTHENTICATED,
    drf_exceptions.AuthenticationFailed: ErrorKind.UNAUTHENTICATED,
    drf_exceptions.PermissionDenied: ErrorKind.ACCESS_DENIED,
    drf_exceptions.NotFound: ErrorKind.NOT_FOUND,
    drf_exceptions.Throttled: ErrorKind.THROTTLED,
}


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Render DRF exceptions with the ``{"success": false, ...}`` envelope."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        response.data = {"success": False, "errors": _flatten(exc.detail)}
        return response

    kind = next(
        (kind for cls, kind in _DRF_KINDS.items() if isinstance(exc, cls)),
        ErrorKind.VALIDATION_FAILED,
    )
    detail = getattr(exc, "detail", str(exc))
    logger.info("api.request_rejected", kind=kind.value, status_code=response.status_code)
    response.data = {"success": False, "error": str(detail), "kind": kind.value}
    return response


def _flatten(detail: Any, prefix: str = "") -> Dict[str, str]:
    """Flatten nested DRF error details into ``{"a.b.0": "message"}``."""
    if isinstance(detail, dict):
        flat: Dict[str, str] = {}
        for key, value in detail.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            flat.update(_flatten(value, path))
        return flat
    if isinstance(detail, list):
        if all(not isinstance(item, (dict, list)) for item in detail):
            return {prefix or "_error": str(detail[0]) if detail else ""}
        flat = {}
        for index, item in enumerate(detail):
            path = f"{prefix}.{index}" if prefix else str(index)
            flat.update(_flatten(item, path))
        return flat
    return {prefix or "_error": str(detail)}
