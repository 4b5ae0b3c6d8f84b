"""
Validation plan handling.

A plan is an ordered list of step declarations:

    [
        {
            'field': 'dates',                       # canonical output/error key
            'fields': ['startyear', 'endyear'],     # raw input keys (default: [field])
            'method': 'validate_date_range',        # registered capability name
            'args': [],                             # extra positional arguments
            'required': True,                       # default: False
            'required_msg': 'These fields are required',
        },
        ...
    ]

This module turns raw plans into ValidationStep objects and provides the two
per-step helpers the orchestrator needs: the required-field gate and the
argument builder.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from modules.validation.core.base import (
    PlanDefinitionError,
    UnknownCapabilityError,
    ValidationResult,
    ValidationStep,
)
from modules.validation.core.registry import CapabilityRegistry, CAPABILITY_REGISTRY
from shared.utils.config import settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

REQUIRED_FIELD_CAPABILITY = "validate_required_field"

_STEP_KEYS = {'field', 'fields', 'method', 'args', 'required', 'required_msg', 'requiredMsg'}


def _is_sequence(value: Any) -> bool:
    # Strings and mappings are not accepted where a list is expected
    return isinstance(value, (list, tuple))


def _fail(message: str, index: Optional[int] = None) -> None:
    logger.error(f"Invalid validation plan: {message}")
    raise PlanDefinitionError(message, index)


def normalize_step(
    raw_step: Mapping[str, Any],
    index: int,
    registry: Optional[CapabilityRegistry] = None
) -> ValidationStep:
    """
    Validate and normalize one raw plan step.

    Args:
        raw_step: Step declaration from the plan
        index: Position of the step in the plan (for error messages)
        registry: Capability registry used to resolve 'method'

    Returns:
        Fully-defaulted ValidationStep

    Raises:
        PlanDefinitionError: If the step is incomplete or wrongly typed
        UnknownCapabilityError: If 'method' is not a registered capability
    """
    if registry is None:
        registry = CAPABILITY_REGISTRY

    if not isinstance(raw_step, Mapping):
        _fail(f"Validation step at index {index} must be a mapping", index)

    unknown_keys = set(raw_step) - _STEP_KEYS
    if unknown_keys:
        logger.warning(f"Ignoring unknown keys {sorted(unknown_keys)} in validation step at index {index}")

    # Required: must exist
    if raw_step.get('field') is None or raw_step.get('method') is None:
        _fail(f"Validation step at index {index} is missing 'field' or 'method'", index)

    field = raw_step['field']
    method = raw_step['method']

    if not isinstance(field, str) or not field:
        _fail(f"'field' must be a non-empty string at step index {index}", index)

    if not isinstance(method, str) or not method:
        _fail(f"'method' must be a non-empty string at step index {index}", index)

    fields = raw_step.get('fields')
    if fields is None:
        fields = [field]
    if not _is_sequence(fields):
        _fail(f"'fields' must be a list at step index {index}", index)
    if not fields or not all(isinstance(f, str) and f for f in fields):
        _fail(f"'fields' must be a non-empty list of strings at step index {index}", index)

    args = raw_step.get('args')
    if args is None:
        args = []
    if not _is_sequence(args):
        _fail(f"'args' must be a list for field '{field}'", index)

    required = raw_step.get('required')
    if required is None:
        required = False
    if not isinstance(required, bool):
        _fail(f"'required' must be a boolean for field '{field}'", index)

    required_msg = raw_step.get('required_msg', raw_step.get('requiredMsg'))
    if required_msg is None:
        required_msg = settings.VALIDATION_REQUIRED_MESSAGE
    if not isinstance(required_msg, str):
        _fail(f"'required_msg' must be a string for field '{field}'", index)

    capability = registry.get(method)
    if capability is None:
        logger.error(f"Validation step at index {index} uses unregistered capability '{method}'")
        raise UnknownCapabilityError(method, index)

    return ValidationStep(
        field=field,
        fields=tuple(fields),
        method=method,
        capability=capability,
        args=tuple(args),
        required=required,
        required_msg=required_msg,
    )


def normalize_validation_plan(
    raw_plan: Sequence[Mapping[str, Any]],
    registry: Optional[CapabilityRegistry] = None
) -> List[ValidationStep]:
    """
    Validate and normalize a raw validation plan.

    Every step is checked for completeness and types, optional keys are
    defaulted and capability names are resolved. The whole plan is rejected
    before anything runs if a single step is malformed.

    Args:
        raw_plan: Raw plan (list of step mappings)
        registry: Capability registry (defaults to the global registry)

    Returns:
        List of ValidationStep in declaration order

    Raises:
        PlanDefinitionError: If the plan or any step is malformed
    """
    if registry is None:
        registry = CAPABILITY_REGISTRY

    if not _is_sequence(raw_plan):
        _fail(f"Validation plan must be a list, got {type(raw_plan).__name__}")

    if raw_plan and REQUIRED_FIELD_CAPABILITY not in registry:
        logger.error(f"Capability registry has no '{REQUIRED_FIELD_CAPABILITY}'")
        raise UnknownCapabilityError(REQUIRED_FIELD_CAPABILITY)

    return [
        normalize_step(raw_step, index, registry)
        for index, raw_step in enumerate(raw_plan)
    ]


def should_skip_step(
    step: ValidationStep,
    data: Mapping[str, Any],
    result: ValidationResult,
    registry: Optional[CapabilityRegistry] = None
) -> bool:
    """
    Required-field gate.

    Runs the required-field capability for every input key of the step. The
    capability stores present values into the result and records the step's
    required message for each missing required input.

    Args:
        step: Normalized validation step
        data: Raw submitted input data
        result: Accumulator for the current run
        registry: Capability registry (defaults to the global registry)

    Returns:
        True if the step is required and at least one input has no stored value
    """
    if registry is None:
        registry = CAPABILITY_REGISTRY
    validate_required_field = registry[REQUIRED_FIELD_CAPABILITY]

    missing = False
    for key in step.fields:
        validate_required_field(
            result,
            data.get(key),
            step.required,
            key,
            step.required_msg
        )

        if step.required and not result.has_field_value(key):
            logger.debug(f"Skipping '{step.method}' for field '{key}' (missing required value)")
            missing = True

    return missing


def build_method_args(
    step: ValidationStep,
    data: Mapping[str, Any],
    result: ValidationResult
) -> List[Any]:
    """
    Construct the positional argument list for a capability call.

    Resulting signature is:
        [result, <value per input key>, step.field, *step.args]

    Args:
        step: Normalized validation step
        data: Raw submitted input data
        result: Accumulator for the current run

    Returns:
        Argument list for the capability
    """
    values = [data.get(key) for key in step.fields]
    return [result, *values, step.field, *step.args]


def describe_plan(plan: Sequence[ValidationStep]) -> List[Dict[str, Any]]:
    """Plain representation of a normalized plan for logging."""
    return [step.to_dict() for step in plan]
