"""
Validation engine module.

Runs declarative validation plans against submitted form data.

Main components:
- BaseValidator: orchestrator; concrete validators only declare a plan
- ValidationResult: per-run accumulator of values and errors
- Capability registry: named validation primitives used by plans
- Built-in capabilities: required, numeric, text, selection, datetime

Usage:
    from modules.validation import BaseValidator

    class ContactValidator(BaseValidator):
        def get_validation_plan(self, data, context):
            return [
                {'field': 'email', 'method': 'validate_email_field', 'required': True},
            ]

    outcome = ContactValidator().run({'email': 'a@example.org'})
    if outcome.passed:
        print(outcome.values)
    else:
        print(outcome.errors)
"""

from modules.validation.engine import BaseValidator, ValidationOutcome
from modules.validation.core.base import (
    ValidationResult,
    ValidationStep,
    ValidationEngineException,
    PlanDefinitionError,
    UnknownCapabilityError,
    ValidationException,
)
from modules.validation.core.registry import register_capability, CAPABILITY_REGISTRY

__all__ = [
    'BaseValidator',
    'ValidationOutcome',
    'ValidationResult',
    'ValidationStep',
    'ValidationEngineException',
    'PlanDefinitionError',
    'UnknownCapabilityError',
    'ValidationException',
    'register_capability',
    'CAPABILITY_REGISTRY',
]
