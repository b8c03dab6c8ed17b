"""
Schema validation for incoming request bodies.

Wraps a pydantic model so callers get back either the normalized model or
the complete list of field violations, never just the first one.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult(Generic[ModelT]):
    value: Optional[ModelT] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def field_errors(exc: ValidationError) -> List[FieldError]:
    """Flatten a pydantic ValidationError into FieldErrors keyed by JSON field name."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "body"
        message = error["msg"]
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        errors.append(FieldError(loc, message))
    return errors


class SchemaValidator(Generic[ModelT]):
    """Validates raw JSON payloads against ``model``."""

    def __init__(self, model: Type[ModelT]):
        self.model = model

    def validate(self, payload: Any) -> ValidationResult[ModelT]:
        if not isinstance(payload, dict):
            return ValidationResult(errors=[FieldError("body", "Expected a JSON object")])
        try:
            return ValidationResult(value=self.model.model_validate(payload))
        except ValidationError as exc:
            return ValidationResult(errors=field_errors(exc))
