"""
Validator for the user feedback submission form.
"""

from typing import Any, Dict, List, Mapping, Sequence

from modules.validation.core.base import ValidationEngineException, ValidationResult, ValidationStep
from modules.validation.core.formatting import ErrorPayload
from modules.validation.engine import BaseValidator
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

DATE_INPUTS = ['startyear', 'startmonth', 'startday', 'endyear', 'endmonth', 'endday']
PROGRAM_INTEGRITY_KEYS = ('a', 'i', 'n', 's')


class ProgramIntegrityError(ValidationEngineException):
    """Raised when trusted program data was altered between render and submission."""
    pass


class FeedbackValidator(BaseValidator):
    """
    Validates the feedback form.

    Supports scalar inputs and the composite 'dates' field (six inputs).
    Selection lists come from the context:

        context = {
            'support': {...},       # support astronomer options
            'operator': {...},      # telescope operator options
            'instruments': {...},   # instrument options
        }

    On success 'dates' is returned as 'start_date' and 'end_date' timestamps.
    """

    def get_validation_plan(self, data: Mapping[str, Any], context: Mapping[str, Any]) -> List[Dict[str, Any]]:
        plan: List[Dict[str, Any]] = [
            {
                'field': 'respondent',
                'method': 'validate_name_field',
                'args': [70],
                'required': True,
            },
            {
                'field': 'email',
                'method': 'validate_email_field',
                'args': [70],
                'required': True,
            },
            {
                'field': 'dates',
                'fields': DATE_INPUTS,
                'method': 'validate_date_range',
                'required': True,
                'required_msg': 'These fields are required',
            },
            {
                'field': 'support_staff',
                'method': 'validate_selection',
                'args': [context.get('support', {})],
                'required': True,
            },
            {
                'field': 'operator_staff',
                'method': 'validate_selection',
                'args': [context.get('operator', {})],
                'required': True,
            },
            {
                'field': 'instruments',
                'method': 'validate_selection',
                'args': [context.get('instruments', {})],
                'required': True,
                'required_msg': 'At least one instrument must be selected',
            },
            {
                'field': 'location',
                'method': 'validate_location',
                'required': True,
            },
            {
                'field': 'experience',
                'method': 'validate_rating',
                'args': [False],
                'required': True,
            },
            {
                'field': 'technical',
                'method': 'validate_long_text_field',
                'args': [500],
                'required': True,
            },
        ]

        # Staff ratings accept 0 for "not applicable"
        for rating in ('scientificstaff', 'operators', 'daycrew'):
            plan.append({
                'field': rating,
                'method': 'validate_rating',
                'args': [True],
                'required': True,
            })

        for text in ('personnel', 'scientific', 'comments'):
            plan.append({
                'field': text,
                'method': 'validate_long_text_field',
                'args': [500],
            })

        return plan

    def format_valid_data(self, plan: Sequence[ValidationStep], result: ValidationResult) -> Dict[str, Any]:
        formatted: Dict[str, Any] = {}
        for step in plan:
            if step.field == 'dates':
                # Stored under derived keys, not under the input names
                formatted['start_date'] = result.get_value('dates_start_timestamp')
                formatted['end_date'] = result.get_value('dates_end_timestamp')
            else:
                formatted[step.field] = result.get_value(step.field)
        return formatted

    def format_errors(self, plan: Sequence[ValidationStep], result: ValidationResult) -> ErrorPayload:
        """
        One message per input, plus a combined message per composite field.

        Inputs report their first error only; the composite 'dates' field
        reports every error recorded under its prefix.
        """
        formatted: ErrorPayload = {}
        for step in plan:
            for key in step.fields:
                errors = result.get_field_errors(key)
                if errors:
                    formatted[key] = errors[0]

            if step.is_composite:
                combined = self.collect_composite_field_errors(result, step.field)
                if combined:
                    formatted[step.field] = combined
            elif step.field not in formatted:
                errors = result.get_field_errors(step.field)
                if errors:
                    formatted[step.field] = errors[0]
        return formatted

    def validate_program_integrity(self, submitted: Mapping[str, Any], trusted: Mapping[str, Any]) -> None:
        """
        Confirm that submitted program metadata matches trusted server values.

        Keys 'a', 'i', 'n' and 's' are rendered into the form and must come
        back unchanged.

        Raises:
            ProgramIntegrityError: If any key differs
        """
        for key in PROGRAM_INTEGRITY_KEYS:
            if str(submitted.get(key, '')) != str(trusted.get(key, '')):
                logger.error(f"Program data mismatch on key '{key}'")
                raise ProgramIntegrityError(
                    "Program data mismatch: feedback form has been altered or corrupted. "
                    "Please refresh the page and try again."
                )
        logger.debug("Program integrity check passed")
