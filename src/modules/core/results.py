"""Discriminated result type returned at the API boundary.

Every endpoint answers with exactly one of:

- ``Ok(payload)``            -> ``{"success": true, "data": payload}``
- ``Invalid(errors)``        -> ``{"success": false, "errors": {path: message}}``
- ``Failure(kind, message)`` -> ``{"success": false, "error": message, "kind": kind}``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from rest_framework import status
from rest_framework.response import Response

from modules.core.exceptions import DomainError, ErrorKind, ValidationFailed

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_STATE_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVENTORY_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.TRANSACTION_ABORTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.THROTTLED: status.HTTP_429_TOO_MANY_REQUESTS,
}


@dataclass(frozen=True)
class Ok:
    payload: Any
    status_code: int = status.HTTP_200_OK

    def to_response(self) -> Response:
        return Response({"success": True, "data": self.payload}, status=self.status_code)


@dataclass(frozen=True)
class Invalid:
    errors: Dict[str, str] = field(default_factory=dict)

    def to_response(self) -> Response:
        return Response(
            {"success": False, "errors": self.errors},
            status=status.HTTP_400_BAD_REQUEST,
        )


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND.get(self.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def to_response(self) -> Response:
        return Response(
            {"success": False, "error": self.message, "kind": self.kind.value},
            status=self.status_code,
        )


Result = Union[Ok, Invalid, Failure]


def from_error(exc: DomainError) -> Result:
    """Translate a domain error into its result variant."""
    if isinstance(exc, ValidationFailed):
        return Invalid(exc.errors)
    return Failure(exc.kind, exc.message)
