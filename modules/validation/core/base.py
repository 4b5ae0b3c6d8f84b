"""
Base classes and data models for the validation engine.

This module provides the foundation shared by the engine and capabilities:
- ValidationResult: per-run accumulator of field values and field errors
- ValidationStep: one normalized plan entry
- Exception hierarchy separating user input errors from plan definition errors
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from shared.contracts.responses import ValidationErrorResponse


class ValidationResult:
    """
    Holds validated field values and any associated field errors.

    Capabilities update this object in place: they record sanitized values via
    set_value() and failures via add_error(). Error lists keep every message in
    the order it was raised.
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._errors: Dict[str, List[str]] = {}

    def set_value(self, field: str, value: Any) -> "ValidationResult":
        """Store (or overwrite) the value for a field."""
        self._values[field] = value
        return self

    def get_value(self, field: str, default: Any = None) -> Any:
        """Get the recorded value for a field, or default if none."""
        return self._values.get(field, default)

    def has_field_value(self, field: str) -> bool:
        """True if any value, including None, has been recorded for the field."""
        return field in self._values

    def add_error(self, field: str, message: str) -> "ValidationResult":
        """Append an error message to the field's error list."""
        self._errors.setdefault(field, []).append(message)
        return self

    def get_field_errors(self, field: str) -> List[str]:
        """Get a copy of the error messages recorded for one field."""
        return list(self._errors.get(field, []))

    def has_field_errors(self, field: str) -> bool:
        """True if the field has at least one error."""
        return bool(self._errors.get(field))

    def has_errors(self) -> bool:
        """True if any field has at least one error."""
        return any(self._errors.values())

    def get_all_errors(self) -> Dict[str, List[str]]:
        """Snapshot of all errors as {field: [messages]}."""
        return {field: list(messages) for field, messages in self._errors.items()}

    @property
    def values(self) -> Dict[str, Any]:
        """Snapshot of all recorded values."""
        return dict(self._values)

    def __repr__(self) -> str:
        return f"ValidationResult(values={self._values!r}, errors={self._errors!r})"


@dataclass(frozen=True)
class ValidationStep:
    """
    One normalized validation plan entry.

    `field` is the canonical output/error key; `fields` are the raw input keys
    read for this step (several for composite fields such as date ranges).
    """
    field: str
    fields: Tuple[str, ...]
    method: str
    capability: Callable[..., Any]
    required_msg: str
    args: Tuple[Any, ...] = ()
    required: bool = False

    @property
    def is_composite(self) -> bool:
        return len(self.fields) != 1

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation, used for logging."""
        return {
            'field': self.field,
            'fields': list(self.fields),
            'method': self.method,
            'args': list(self.args),
            'required': self.required,
            'required_msg': self.required_msg,
        }


class ValidationEngineException(Exception):
    """Base exception for the validation engine."""
    pass


class PlanDefinitionError(ValidationEngineException):
    """Raised when a validation plan is malformed (a bug in the plan, not bad input)."""

    def __init__(self, message: str, step_index: Optional[int] = None):
        super().__init__(message)
        self.step_index = step_index


class UnknownCapabilityError(PlanDefinitionError):
    """Raised when a plan step names a capability missing from the registry."""

    def __init__(self, method: str, step_index: Optional[int] = None):
        super().__init__(
            f"Capability '{method}' is not registered (step index {step_index})",
            step_index
        )
        self.method = method


class ValidationException(ValidationEngineException):
    """
    Raised once per failed validation pass with the full error payload.

    The payload maps field (or composite prefix) to message(s) and is built
    only after every plan step has run.
    """

    def __init__(self, message: str = "Validation failed.", errors: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})

    @property
    def messages(self) -> Dict[str, Any]:
        """Get the detailed validation error messages."""
        return self.errors

    def to_response(self, data: Optional[Dict[str, Any]] = None) -> ValidationErrorResponse:
        """
        Build the controller-facing error response.

        Args:
            data: Submitted input to echo back for form re-rendering

        Returns:
            ValidationErrorResponse
        """
        return ValidationErrorResponse(
            error_message=str(self),
            errors=self.errors,
            input=dict(data or {})
        )
