"""
Validator for login form input.
"""

from datetime import date
from typing import Any, Dict, List, Mapping

from modules.validation.engine import BaseValidator
from shared.utils.config import settings


class LoginValidator(BaseValidator):
    """
    Validates the login form.

    - 'program': program number string (e.g. 2025B001), year between the
      configured minimum year and next year
    - 'session': session code (10-character guest code or engineering code)
    """

    def get_validation_plan(self, data: Mapping[str, Any], context: Mapping[str, Any]) -> List[Dict[str, Any]]:
        min_year = settings.VALIDATION_MIN_YEAR
        max_year = date.today().year + 1
        return [
            {
                'field': 'program',
                'method': 'validate_program_number_field',
                'args': [min_year, max_year],
                'required': True,
            },
            {
                'field': 'session',
                'method': 'validate_session_code_field',
                'required': True,
            },
        ]
