"""
Capabilities module.

Contains all built-in validation capabilities organized by category:
- required_fields: presence check used by the required-field gate
- numeric_validators: integers, floats, ranges
- text_validators: strings, emails, usernames, program numbers
- selection_validators: option sets, ratings, binary radios
- datetime_validators: date/time components and composite dates

All capabilities are automatically registered via decorators.
"""

# Import all capabilities to trigger registration
from modules.validation.capabilities import required_fields
from modules.validation.capabilities import numeric_validators
from modules.validation.capabilities import text_validators
from modules.validation.capabilities import selection_validators
from modules.validation.capabilities import datetime_validators

__all__ = [
    'required_fields',
    'numeric_validators',
    'text_validators',
    'selection_validators',
    'datetime_validators',
]
