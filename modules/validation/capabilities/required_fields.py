"""
Required field capability.

Used by the required-field gate for every input key of every plan step.
"""

from typing import Any

from modules.validation.core.base import ValidationResult
from modules.validation.core.registry import register_capability


def is_empty(value: Any) -> bool:
    """
    Determine whether a submitted value should be considered empty.

    Empty means: None, a whitespace-only string, an empty collection, or False.
    Numeric zero is a real value.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


@register_capability("validate_required_field")
def validate_required_field(
    result: ValidationResult,
    value: Any,
    required: bool,
    field_key: str,
    error_message: str
) -> None:
    """
    Validate that a required field is set and contains meaningful content.

    If required and the value is empty, the error is recorded under field_key
    and nothing is stored. Otherwise the submitted value is stored, including
    None for optional inputs that were not submitted.
    """
    if required and is_empty(value):
        result.add_error(field_key, error_message)
        return

    result.set_value(field_key, value)
