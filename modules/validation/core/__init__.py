"""
Validation core module.

Contains the result accumulator, plan handling, capability registry and
formatting helpers used by the validation engine.
"""

from modules.validation.core.base import (
    ValidationResult,
    ValidationStep,
    ValidationEngineException,
    PlanDefinitionError,
    UnknownCapabilityError,
    ValidationException,
)
from modules.validation.core.registry import CAPABILITY_REGISTRY, register_capability, get_capability
from modules.validation.core.plan import normalize_validation_plan, should_skip_step, build_method_args
from modules.validation.core.formatting import collect_composite_field_errors, format_std_errors, format_std_valid_data

__all__ = [
    'ValidationResult',
    'ValidationStep',
    'ValidationEngineException',
    'PlanDefinitionError',
    'UnknownCapabilityError',
    'ValidationException',
    'CAPABILITY_REGISTRY',
    'register_capability',
    'get_capability',
    'normalize_validation_plan',
    'should_skip_step',
    'build_method_args',
    'collect_composite_field_errors',
    'format_std_errors',
    'format_std_valid_data',
]
