"""
Error and value formatting.

Turns the accumulated ValidationResult into the structures handed back to
callers: the error payload (field or composite prefix -> message(s)) and the
clean value set (canonical field -> validated value).
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from modules.validation.core.base import ValidationResult, ValidationStep
from shared.utils.config import settings

ErrorPayload = Dict[str, Union[str, List[str]]]


def collect_composite_field_errors(
    result: ValidationResult,
    field_prefix: str,
    delimiter: Optional[str] = None
) -> str:
    """
    Combine every error recorded under keys starting with a prefix.

    Used when a logical field (e.g. "dates") is validated through several
    keys (e.g. "dates_start", "dates_end") and the caller wants one message
    for the logical field.

    Args:
        result: Accumulator to read errors from
        field_prefix: Prefix matched against error keys
        delimiter: Separator between messages (default from settings, "; ")

    Returns:
        Combined message string, empty if no key matches
    """
    if delimiter is None:
        delimiter = settings.VALIDATION_COMPOSITE_DELIMITER

    messages: List[str] = []
    for key, errors in result.get_all_errors().items():
        if key.startswith(field_prefix):
            messages.extend(errors)
    return delimiter.join(messages)


def format_std_errors(plan: Sequence[ValidationStep], result: ValidationResult) -> ErrorPayload:
    """
    Standard error payload.

    - every input key with errors maps to its full message list
    - composite steps map the canonical field to the combined message of
      every key sharing its prefix
    - single-input steps map the canonical field to the list of its own
      messages plus those of derived keys ("<field>_year", "<field>_tag", ...)
    """
    input_keys = {key for step in plan for key in step.fields}
    formatted: ErrorPayload = {}
    for step in plan:
        for key in step.fields:
            errors = result.get_field_errors(key)
            if errors:
                formatted[key] = errors

        if step.is_composite:
            combined = collect_composite_field_errors(result, step.field)
            if combined:
                formatted[step.field] = combined
            continue

        existing = formatted.get(step.field)
        messages = list(existing) if isinstance(existing, list) else []
        if step.field not in step.fields:
            messages.extend(result.get_field_errors(step.field))
        for key, errors in result.get_all_errors().items():
            if key.startswith(f"{step.field}_") and key not in input_keys:
                messages.extend(errors)
        if messages:
            formatted[step.field] = messages
    return formatted


def format_std_valid_data(plan: Sequence[ValidationStep], result: ValidationResult) -> Dict[str, Any]:
    """Clean value set: one entry per distinct canonical field of the plan."""
    formatted: Dict[str, Any] = {}
    for step in plan:
        formatted[step.field] = result.get_value(step.field)
    return formatted
