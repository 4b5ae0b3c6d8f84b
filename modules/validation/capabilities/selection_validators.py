"""
Selection capabilities.

Checks submitted options against allowed sets: multi-selects (instruments,
staff lists), star ratings and binary radio options.
"""

from typing import Any, Iterable, List, Mapping, Union

from modules.validation.capabilities.numeric_validators import to_integer
from modules.validation.core.base import ValidationResult
from modules.validation.core.registry import register_capability

AllowedOptions = Union[Mapping[Any, Any], Iterable[Any]]

BINARY_OPTIONS = {0: 'No', 1: 'Yes'}


def _allowed_set(allowed_values: AllowedOptions, validate_by_key: bool) -> List[str]:
    if isinstance(allowed_values, Mapping):
        options = allowed_values.keys() if validate_by_key else allowed_values.values()
    else:
        options = allowed_values
    return [str(option) for option in options]


@register_capability("validate_selection")
def validate_selection(
    result: ValidationResult,
    values: Any,
    field_key: str,
    allowed_values: AllowedOptions,
    validate_by_key: bool = True
) -> None:
    """
    Validate one or more selected options.

    Mapping allowed_values are matched by key (default) or by value; plain
    iterables are matched by member. Options compare as strings, since form
    submissions are strings. Every invalid option gets its own message and the
    list of selected options is stored only when all of them are valid.

    Example plan step:
        {'field': 'instruments', 'method': 'validate_selection',
         'args': [context['instruments']], 'required': True}
    """
    if values is None:
        selected: List[Any] = []
    elif isinstance(values, (list, tuple, set)):
        selected = list(values)
    else:
        selected = [values]

    allowed = _allowed_set(allowed_values, validate_by_key)

    validated: List[str] = []
    failed = False
    for option in selected:
        if str(option) not in allowed:
            result.add_error(field_key, f"Invalid option: '{option}'.")
            failed = True
        else:
            validated.append(str(option))

    if not failed:
        result.set_value(field_key, validated)


def _validate_integer_option(
    result: ValidationResult,
    value: Any,
    field_key: str,
    allowed: Iterable[int]
) -> None:
    integer = to_integer(value)
    if integer is None:
        result.add_error(field_key, "Value must be a valid integer.")
        return

    if integer not in list(allowed):
        result.add_error(field_key, f"Invalid option: '{integer}'.")
        return

    result.set_value(field_key, integer)


@register_capability("validate_rating")
def validate_rating(result: ValidationResult, value: Any, field_key: str, add_na: bool = False) -> None:
    """Validate a 1-5 rating; with add_na, 0 (not applicable) is accepted too."""
    allowed = range(0, 6) if add_na else range(1, 6)
    _validate_integer_option(result, value, field_key, allowed)


@register_capability(
    "validate_binary_option",
    "validate_location",
    "validate_emails_send_type",
    "validate_interval_unit_type",
    "validate_on_off_radio",
)
def validate_binary_option(result: ValidationResult, value: Any, field_key: str) -> None:
    """
    Validate a two-way radio option (0 or 1).

    Registered under the form-specific names too: location (remote/onsite),
    email send type (real/dummy), interval unit (days/weeks), on/off switches.
    """
    _validate_integer_option(result, value, field_key, BINARY_OPTIONS.keys())
