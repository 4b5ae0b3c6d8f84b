"""
Date and time capabilities.

Component checks (year, month, day, hour, minute, second) and the composite
date capabilities built from them. Composite capabilities validate each
component under a derived key ("<field>_year", "<field>_month", ...) and, on
success, store:

    <field>             {'timestamp': int, 'components': {...}}
    <field>_timestamp   int (UTC unix timestamp)
    <field>_components  {'year': ..., 'month': ..., ...}
"""

import calendar
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from modules.validation.capabilities.numeric_validators import validate_integer_range
from modules.validation.capabilities.text_validators import validate_semester_field
from modules.validation.core.base import ValidationResult
from modules.validation.core.registry import register_capability
from shared.utils.config import settings

MIN_YEAR_FLOOR = 1900


@register_capability("validate_year")
def validate_year(
    result: ValidationResult,
    value: Any,
    field_key: str,
    min_year: Optional[int] = None,
    max_year: Optional[int] = None
) -> None:
    """
    Validate a year.

    min_year defaults to settings.VALIDATION_MIN_YEAR and is never below 1900;
    max_year defaults to settings.VALIDATION_FUTURE_YEARS past the current year.
    """
    if min_year is None:
        min_year = settings.VALIDATION_MIN_YEAR
    if max_year is None:
        max_year = date.today().year + settings.VALIDATION_FUTURE_YEARS
    validate_integer_range(result, value, field_key, max(MIN_YEAR_FLOOR, min_year), max_year)


@register_capability("validate_month")
def validate_month(result: ValidationResult, value: Any, field_key: str, min_month: int = 1, max_month: int = 12) -> None:
    validate_integer_range(result, value, field_key, max(1, min_month), min(12, max_month))


@register_capability("validate_day")
def validate_day(result: ValidationResult, value: Any, field_key: str, min_day: int = 1, max_day: int = 31) -> None:
    validate_integer_range(result, value, field_key, max(1, min_day), min(31, max_day))


@register_capability("validate_hour")
def validate_hour(result: ValidationResult, value: Any, field_key: str, min_hour: int = 0, max_hour: int = 23) -> None:
    validate_integer_range(result, value, field_key, max(0, min_hour), min(23, max_hour))


@register_capability("validate_minute")
def validate_minute(result: ValidationResult, value: Any, field_key: str, min_minute: int = 0, max_minute: int = 59) -> None:
    validate_integer_range(result, value, field_key, max(0, min_minute), min(59, max_minute))


@register_capability("validate_second")
def validate_second(result: ValidationResult, value: Any, field_key: str, min_second: int = 0, max_second: int = 59) -> None:
    validate_integer_range(result, value, field_key, max(0, min_second), min(59, max_second))


def _components_failed(result: ValidationResult, field_key: str, parts) -> bool:
    return any(result.has_field_errors(f"{field_key}_{part}") for part in parts)


def _store_composite(result: ValidationResult, field_key: str, moment: datetime, components: Dict[str, int]) -> None:
    timestamp = calendar.timegm(moment.utctimetuple())
    result.set_value(field_key, {'timestamp': timestamp, 'components': components})
    result.set_value(f"{field_key}_timestamp", timestamp)
    result.set_value(f"{field_key}_components", components)


@register_capability("validate_full_date")
def validate_full_date(
    result: ValidationResult,
    year_value: Any,
    month_value: Any,
    day_value: Any,
    field_key: str
) -> None:
    """Validate a year/month/day triple as a real calendar date."""
    validate_year(result, year_value, f"{field_key}_year")
    validate_month(result, month_value, f"{field_key}_month")
    validate_day(result, day_value, f"{field_key}_day")
    if _components_failed(result, field_key, ('year', 'month', 'day')):
        return

    year = result.get_value(f"{field_key}_year")
    month = result.get_value(f"{field_key}_month")
    day = result.get_value(f"{field_key}_day")
    try:
        moment = datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        result.add_error(field_key, f"Invalid date: {year}-{month}-{day}.")
        return

    _store_composite(result, field_key, moment, {'year': year, 'month': month, 'day': day})


@register_capability("validate_full_date_time")
def validate_full_date_time(
    result: ValidationResult,
    year_value: Any,
    month_value: Any,
    day_value: Any,
    hour_value: Any,
    minute_value: Any,
    second_value: Any,
    field_key: str
) -> None:
    """Validate a full date and time given as six components."""
    validate_year(result, year_value, f"{field_key}_year")
    validate_month(result, month_value, f"{field_key}_month")
    validate_day(result, day_value, f"{field_key}_day")
    validate_hour(result, hour_value, f"{field_key}_hour")
    validate_minute(result, minute_value, f"{field_key}_minute")
    validate_second(result, second_value, f"{field_key}_second")
    parts = ('year', 'month', 'day', 'hour', 'minute', 'second')
    if _components_failed(result, field_key, parts):
        return

    components = {part: result.get_value(f"{field_key}_{part}") for part in parts}
    try:
        moment = datetime(tzinfo=timezone.utc, **components)
    except ValueError:
        result.add_error(
            field_key,
            f"Invalid date: {components['year']}-{components['month']}-{components['day']}."
        )
        return

    _store_composite(result, field_key, moment, components)


@register_capability("validate_date_range")
def validate_date_range(
    result: ValidationResult,
    start_year: Any,
    start_month: Any,
    start_day: Any,
    end_year: Any,
    end_month: Any,
    end_day: Any,
    field_key: str
) -> None:
    """
    Validate a start/end date pair.

    Dates are checked under "<field>_start" and "<field>_end"; an end before
    the start is recorded under field_key. On success (start_ts, end_ts) is
    stored under field_key.

    Example plan step:
        {'field': 'dates',
         'fields': ['startyear', 'startmonth', 'startday',
                    'endyear', 'endmonth', 'endday'],
         'method': 'validate_date_range', 'required': True}
    """
    validate_full_date(result, start_year, start_month, start_day, f"{field_key}_start")
    validate_full_date(result, end_year, end_month, end_day, f"{field_key}_end")
    if not (result.has_field_value(f"{field_key}_start_timestamp")
            and result.has_field_value(f"{field_key}_end_timestamp")):
        return

    start_timestamp = result.get_value(f"{field_key}_start_timestamp")
    end_timestamp = result.get_value(f"{field_key}_end_timestamp")
    if end_timestamp < start_timestamp:
        result.add_error(field_key, "End date cannot be before start date.")
        return

    result.set_value(field_key, (start_timestamp, end_timestamp))


def semester_for_date(year: int, month: int, day: int) -> str:
    """
    Semester containing a date.

    Semester A runs Feb 1 - Jul 31, semester B runs Aug 1 - Jan 31; January
    dates belong to the previous year's B semester.
    """
    if month == 1:
        return f"{year - 1}B"
    if month < 8:
        return f"{year}A"
    return f"{year}B"


@register_capability("validate_date_semester")
def validate_date_semester(
    result: ValidationResult,
    year_value: Any,
    month_value: Any,
    day_value: Any,
    semester_value: Any,
    field_key: str
) -> None:
    """Validate that a date falls inside the given semester (e.g. "2025A")."""
    validate_full_date(result, year_value, month_value, day_value, f"{field_key}_date")
    validate_semester_field(result, semester_value, f"{field_key}_semester")
    if not (result.has_field_value(f"{field_key}_date_components")
            and result.has_field_value(f"{field_key}_semester")):
        return

    components = result.get_value(f"{field_key}_date_components")
    semester = result.get_value(f"{field_key}_semester")
    if semester_for_date(components['year'], components['month'], components['day']) != semester:
        result.add_error(field_key, f"Date must fall within {semester} semester.")
        return

    result.set_value(field_key, result.get_value(f"{field_key}_date"))
