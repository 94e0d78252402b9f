"""Schema validation collaborator.

``validate(schema, raw)`` runs a Pydantic model against untrusted input and
never raises: it returns a ``ValidationResult`` carrying either the parsed
DTO or a field-path-keyed error map (``{"items.0.quantity": "..."}``).

It is a pure function, independent of storage, so services can run it before
touching the database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T", bound=BaseModel)

GENERIC_ERROR_KEY = "_error"


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    success: bool
    data: Optional[T] = None
    errors: Dict[str, str] = field(default_factory=dict)


def validate(schema: Type[T], raw: Any) -> ValidationResult[T]:
    """Validate *raw* against *schema*."""
    try:
        data = schema.model_validate(raw)
    except PydanticValidationError as exc:
        return ValidationResult(success=False, errors=format_errors(exc))
    return ValidationResult(success=True, data=data)


def format_errors(exc: PydanticValidationError) -> Dict[str, str]:
    """Key each error by its dotted location; the first message per path wins."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or GENERIC_ERROR_KEY
        errors.setdefault(path, error["msg"])
    return errors
