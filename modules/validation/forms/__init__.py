"""
Form validators.

Each validator is a thin plan definition on top of BaseValidator.
"""

from modules.validation.forms.login import LoginValidator
from modules.validation.forms.feedback import FeedbackValidator, ProgramIntegrityError
from modules.validation.forms.guest_accounts import GuestAccountValidator
from modules.validation.forms.configured import ConfiguredFormValidator

__all__ = [
    'LoginValidator',
    'FeedbackValidator',
    'ProgramIntegrityError',
    'GuestAccountValidator',
    'ConfiguredFormValidator',
]
