"""
Text capabilities.

Base string checks (length, email format, allowed set, alphanumeric) and the
composite text fields built from them: names, unix usernames, shells, email
addresses, semesters, program numbers and session codes.

Composite text fields validate their parts under derived keys
("<field>_year", "<field>_tag", "<field>_number") so the error formatter can
aggregate them by prefix.
"""

import re
from datetime import date
from typing import Any, Iterable, Optional

from modules.validation.capabilities.numeric_validators import validate_short_program_number_field
from modules.validation.core.base import ValidationResult
from modules.validation.core.registry import register_capability
from shared.utils.config import settings

# Practical subset of RFC 5322: local@domain.tld without quoting or comments
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)

DEFAULT_SHELLS = ('/bin/bash', '/bin/csh', '/bin/sh', '/bin/tcsh', '/bin/zsh')
SEMESTER_TAGS = ('A', 'B')

# Year, tag letter and program sequence number: digits only, no signs or exponents
SEMESTER_PATTERN = re.compile(r"([0-9]{4})([A-Z])")
PROGRAM_NUMBER_PATTERN = re.compile(r"([0-9]{4})([A-Z])([0-9]{3})")
ENGINEERING_SESSION_CODES = ('tisanpwd', 'wbtcorar')

SHORT_TEXT_LENGTH = 70
LONG_TEXT_LENGTH = 500


def _as_text(value: Any) -> str:
    return '' if value is None else str(value)


@register_capability("validate_string_length")
def validate_string_length(result: ValidationResult, value: Any, field_key: str, max_length: int) -> None:
    """Validate that a string is at most max_length characters."""
    text = _as_text(value)
    if len(text) > max_length:
        result.add_error(field_key, f"Invalid value. Must be 1-{max_length} characters.")
        return

    result.set_value(field_key, text)


@register_capability("validate_email_format")
def validate_email_format(result: ValidationResult, value: Any, field_key: str) -> None:
    """Validate email address syntax."""
    text = _as_text(value).strip()
    if not EMAIL_PATTERN.match(text) or '..' in text:
        result.add_error(field_key, "Invalid email format.")
        return

    result.set_value(field_key, text)


@register_capability("validate_string_in_set")
def validate_string_in_set(
    result: ValidationResult,
    value: Any,
    field_key: str,
    allowed_values: Iterable[str]
) -> None:
    """Validate that a string is one of the allowed values."""
    text = _as_text(value)
    if text not in list(allowed_values):
        result.add_error(field_key, "Invalid value.")
        return

    result.set_value(field_key, text)


@register_capability("validate_alphanumeric")
def validate_alphanumeric(result: ValidationResult, value: Any, field_key: str) -> None:
    """Validate that a string contains only ASCII letters and digits."""
    text = _as_text(value)
    if not (text.isascii() and text.isalnum()):
        result.add_error(field_key, "Invalid value. Must be alphanumeric.")
        return

    result.set_value(field_key, text)


@register_capability("validate_text_field")
def validate_text_field(result: ValidationResult, value: Any, field_key: str, max_length: int) -> None:
    validate_string_length(result, value, field_key, max_length)


@register_capability("validate_short_text_field")
def validate_short_text_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    max_length: int = SHORT_TEXT_LENGTH
) -> None:
    validate_string_length(result, value, field_key, max_length)


@register_capability("validate_long_text_field")
def validate_long_text_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    max_length: int = LONG_TEXT_LENGTH
) -> None:
    """Validate free text. Optional long text fields may be None, stored as ''."""
    validate_string_length(result, value, field_key, max_length)


@register_capability("validate_name_field")
def validate_name_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    max_length: int = SHORT_TEXT_LENGTH
) -> None:
    validate_string_length(result, _as_text(value).strip(), field_key, max_length)


@register_capability("validate_unix_username_field", "validate_username")
def validate_unix_username_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    max_length: int = 12
) -> None:
    """Validate a unix account name: short and alphanumeric."""
    validate_string_length(result, value, field_key, max_length)
    if result.has_field_errors(field_key):
        return

    validate_alphanumeric(result, value, field_key)


@register_capability("validate_shell_field")
def validate_shell_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    allowed_values: Optional[Iterable[str]] = None
) -> None:
    """Validate a login shell against the known shells."""
    validate_string_in_set(result, value, field_key, allowed_values or DEFAULT_SHELLS)


@register_capability("validate_email_field")
def validate_email_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    max_length: Optional[int] = None,
    is_alphanumeric: bool = False
) -> None:
    """
    Validate an email address with an optional length limit.

    Each check short-circuits on its own failure so only the first problem
    is reported.
    """
    validate_email_format(result, value, field_key)
    if result.has_field_errors(field_key):
        return

    if max_length is not None:
        validate_string_length(result, result.get_value(field_key), field_key, max_length)
        if result.has_field_errors(field_key):
            return

    if is_alphanumeric:
        validate_alphanumeric(result, result.get_value(field_key), field_key)


@register_capability("validate_semester_tag_field")
def validate_semester_tag_field(result: ValidationResult, value: Any, field_key: str) -> None:
    """Validate a one-letter semester tag (A or B), stored upper-case."""
    validate_string_length(result, value, field_key, 1)
    if result.has_field_errors(field_key):
        return

    validate_string_in_set(result, _as_text(value).upper(), field_key, SEMESTER_TAGS)


def _validate_year_part(
    result: ValidationResult,
    value: str,
    field_key: str,
    min_year: int,
    max_year: Optional[int]
) -> None:
    # Imported here: datetime_validators imports this module
    from modules.validation.capabilities.datetime_validators import validate_year

    validate_year(result, value, field_key, min_year, max_year)


@register_capability("validate_semester_field")
def validate_semester_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_year: Optional[int] = None,
    max_year: Optional[int] = None
) -> None:
    """
    Validate a semester string such as "2025B".

    The year part is checked under "<field>_year" and the tag under
    "<field>_tag"; the full upper-cased value is stored under field_key.
    """
    if min_year is None:
        min_year = settings.VALIDATION_MIN_YEAR

    text = _as_text(value).strip().upper()
    match = SEMESTER_PATTERN.fullmatch(text)
    if match is None:
        result.add_error(field_key, "Invalid semester. Must look like 2025A.")
        return

    year, tag = match.groups()
    _validate_year_part(result, year, f"{field_key}_year", min_year, max_year)
    if result.has_field_errors(f"{field_key}_year"):
        return

    validate_semester_tag_field(result, tag, f"{field_key}_tag")
    if result.has_field_errors(f"{field_key}_tag"):
        return

    result.set_value(field_key, text)


@register_capability("validate_program_number_field")
def validate_program_number_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_year: Optional[int] = None,
    max_year: Optional[int] = None
) -> None:
    """
    Validate a program number such as "2025B001".

    Parts are checked under "<field>_year", "<field>_tag" and
    "<field>_number"; the full upper-cased value is stored under field_key.
    """
    if min_year is None:
        min_year = settings.VALIDATION_MIN_YEAR
    if max_year is None:
        max_year = date.today().year + 1

    text = _as_text(value).strip().upper()
    match = PROGRAM_NUMBER_PATTERN.fullmatch(text)
    if match is None:
        result.add_error(field_key, "Invalid program number. Must look like 2025B001.")
        return

    year, tag, number = match.groups()
    _validate_year_part(result, year, f"{field_key}_year", min_year, max_year)
    if result.has_field_errors(f"{field_key}_year"):
        return

    validate_semester_tag_field(result, tag, f"{field_key}_tag")
    if result.has_field_errors(f"{field_key}_tag"):
        return

    validate_short_program_number_field(result, number, f"{field_key}_number")
    if result.has_field_errors(f"{field_key}_number"):
        return

    result.set_value(field_key, text)


@register_capability("validate_session_code_field")
def validate_session_code_field(
    result: ValidationResult,
    value: Any,
    field_key: str,
    engineering_codes: Optional[Iterable[str]] = None
) -> None:
    """
    Validate a login session code.

    Known engineering codes are accepted as-is; guest codes must be exactly
    10 alphanumeric characters.
    """
    text = _as_text(value)
    if text in (engineering_codes or ENGINEERING_SESSION_CODES):
        result.set_value(field_key, text)
        return

    if len(text) != 10:
        result.add_error(field_key, "Invalid session code. Must be 10 characters.")
        return

    validate_alphanumeric(result, text, field_key)
