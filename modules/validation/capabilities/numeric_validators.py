"""
Numeric capabilities.

Contains capabilities that check integer and float inputs:
- validate_integer / validate_float: type coercion
- validate_integer_range / validate_float_range: bound checks
- validate_number_in_range: integer coercion + bounds in one step
- validate_short_program_number_field, validate_obs_app_id_field,
  validate_unix_timestamp: application-specific wrappers

Submitted form values usually arrive as strings; every capability accepts
numeric strings and stores the converted number.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from modules.validation.core.base import ValidationResult
from modules.validation.core.registry import register_capability

Number = Union[int, float]

MAX_UNIX_TIMESTAMP = 253402300799  # 9999-12-31 23:59:59 UTC


def to_number(value: Any) -> Optional[Decimal]:
    """Parse a submitted value as a finite number, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == '':
            return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def to_integer(value: Any) -> Optional[int]:
    """Parse a submitted value as an integer (1.0 and "1e2" count, 1.5 does not)."""
    number = to_number(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


def _check_range(
    result: ValidationResult,
    value: Number,
    field_key: str,
    min_value: Optional[Number],
    max_value: Optional[Number]
) -> bool:
    if min_value is not None and max_value is not None:
        if value < min_value or value > max_value:
            result.add_error(field_key, f"Invalid value: Must be between {min_value} and {max_value}.")
            return False
        return True

    if min_value is not None and value < min_value:
        result.add_error(field_key, f"Value must be at least {min_value}.")
        return False

    if max_value is not None and value > max_value:
        result.add_error(field_key, f"Value must not exceed {max_value}.")
        return False

    return True


@register_capability("validate_integer")
def validate_integer(result: ValidationResult, value: Any, field_key: str) -> None:
    """Validate that a value is an integer and store it as int."""
    integer = to_integer(value)
    if integer is None:
        result.add_error(field_key, "Value must be a valid integer.")
        return

    result.set_value(field_key, integer)


@register_capability("validate_integer_range")
def validate_integer_range(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None
) -> None:
    """
    Validate an integer against optional bounds.

    With both bounds the message names the full range; with one bound the
    message names only that bound.
    """
    validate_integer(result, value, field_key)
    if result.has_field_errors(field_key):
        return

    integer = result.get_value(field_key)
    if not _check_range(result, integer, field_key, min_value, max_value):
        return

    result.set_value(field_key, integer)


@register_capability("validate_float")
def validate_float(result: ValidationResult, value: Any, field_key: str) -> None:
    """Validate that a value is numeric and store it as float."""
    number = to_number(value)
    if number is None:
        result.add_error(field_key, "Value must be a valid number.")
        return

    result.set_value(field_key, float(number))


@register_capability("validate_float_range")
def validate_float_range(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None
) -> None:
    """Validate a float against optional bounds."""
    validate_float(result, value, field_key)
    if result.has_field_errors(field_key):
        return

    _check_range(result, result.get_value(field_key), field_key, min_value, max_value)


@register_capability("validate_number_in_range")
def validate_number_in_range(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_number: Optional[int] = None,
    max_number: Optional[int] = None,
    error_message: Optional[str] = None
) -> None:
    """
    Validate an integer within [min_number, max_number] (default 1..9999).

    A custom error_message replaces the default range message.

    Example plan step:
        {'field': 'uid', 'method': 'validate_number_in_range',
         'args': [1, 20000, 'Invalid uid.'], 'required': True}
    """
    min_number = 1 if min_number is None else min_number
    max_number = 9999 if max_number is None else max_number

    integer = to_integer(value)
    if integer is None or integer < min_number or integer > max_number:
        result.add_error(
            field_key,
            error_message or f"Invalid number: Must be between {min_number} and {max_number}."
        )
        return

    result.set_value(field_key, integer)


@register_capability("validate_short_program_number_field")
def validate_short_program_number_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_number: Optional[int] = None,
    max_number: Optional[int] = None
) -> None:
    """Validate a short program number; bounds are clamped to 1..999."""
    min_number = max(1, min_number if min_number is not None else 1)
    max_number = min(999, max_number if max_number is not None else 999)
    validate_integer_range(result, value, field_key, min_number, max_number)


@register_capability("validate_obs_app_id_field")
def validate_obs_app_id_field(result: ValidationResult, value: Any, field_key: str) -> None:
    """Validate an application ID as a positive integer."""
    validate_integer_range(result, value, field_key, 1, None)


@register_capability("validate_unix_timestamp")
def validate_unix_timestamp(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_timestamp: int = 0,
    max_timestamp: int = MAX_UNIX_TIMESTAMP
) -> None:
    """Validate a unix timestamp; bounds are clamped to 0..9999-12-31."""
    min_timestamp = max(0, min_timestamp)
    max_timestamp = min(MAX_UNIX_TIMESTAMP, max_timestamp)
    validate_integer_range(result, value, field_key, min_timestamp, max_timestamp)
