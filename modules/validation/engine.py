"""
BaseValidator - Main orchestrator for form validation.

Concrete validators only declare a plan; this module runs it:
1. Normalizing the raw plan (types, defaults, capability resolution)
2. Gating each step on its required inputs
3. Dispatching the step's capability with the fixed calling convention
4. Aggregating every error into one payload after the full pass
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from modules.validation.core.base import ValidationException, ValidationResult, ValidationStep
from modules.validation.core.formatting import (
    ErrorPayload,
    collect_composite_field_errors,
    format_std_errors,
    format_std_valid_data,
)
from modules.validation.core.plan import (
    build_method_args,
    describe_plan,
    normalize_validation_plan,
    should_skip_step,
)
from modules.validation.core.registry import CAPABILITY_REGISTRY, CapabilityRegistry
from shared.contracts.responses import ValidationErrorResponse, ValidationSuccessResponse
from shared.utils.logger import setup_logger, log_error

# Import capabilities to trigger registration
from modules.validation import capabilities  # noqa: F401

logger = setup_logger(__name__)


@dataclass
class ValidationOutcome:
    """
    Outcome of one validation pass.

    Tagged by `passed`: a passing outcome carries the clean values, a failing
    one carries the full error payload and no values.
    """
    passed: bool
    values: Dict[str, Any] = field(default_factory=dict)
    errors: ErrorPayload = field(default_factory=dict)

    @classmethod
    def ok(cls, values: Dict[str, Any]) -> "ValidationOutcome":
        return cls(passed=True, values=values)

    @classmethod
    def err(cls, errors: ErrorPayload) -> "ValidationOutcome":
        return cls(passed=False, errors=errors)

    def unwrap(self) -> Dict[str, Any]:
        """
        Get the clean values of a passing outcome.

        Raises:
            ValidationException: If the outcome failed
        """
        if not self.passed:
            raise ValidationException("Validation errors occurred.", self.errors)
        return self.values

    def to_response(
        self,
        data: Optional[Mapping[str, Any]] = None
    ) -> Union[ValidationSuccessResponse, ValidationErrorResponse]:
        """
        Convert to the controller-facing response model.

        Args:
            data: Submitted input, echoed back in error responses

        Returns:
            ValidationSuccessResponse or ValidationErrorResponse
        """
        if self.passed:
            return ValidationSuccessResponse(data=self.values)
        return ValidationErrorResponse(errors=self.errors, input=dict(data or {}))


class BaseValidator(ABC):
    """
    Validation orchestrator for all concrete validators.

    Concrete validators define the plan and may override output formatting.
    A fresh ValidationResult is created for every call, so one validator
    instance can be reused across submissions.

    Usage:
        validator = LoginValidator()
        outcome = validator.run(form_data)

        if outcome.passed:
            use(outcome.values)
        else:
            rerender(form_data, outcome.errors)

    Or, raising on failure:
        values = validator.validate_data(form_data, context)
    """

    def __init__(self, registry: Optional[CapabilityRegistry] = None):
        """
        Initialize validator.

        Args:
            registry: Capability registry used to resolve plan methods
                      If None, uses the global registry
        """
        self.registry = registry if registry is not None else CAPABILITY_REGISTRY
        self.name = self.__class__.__name__

    @abstractmethod
    def get_validation_plan(
        self,
        data: Mapping[str, Any],
        context: Mapping[str, Any]
    ) -> List[Dict[str, Any]]:
        """
        Define the validation steps for this form.

        Args:
            data: Submitted input data
            context: Trusted server-side reference data (lookup tables, session values)

        Returns:
            Raw validation plan (list of step mappings)
        """
        pass

    def format_valid_data(self, plan: Sequence[ValidationStep], result: ValidationResult) -> Dict[str, Any]:
        """Build the clean value set returned on success."""
        return format_std_valid_data(plan, result)

    def format_errors(self, plan: Sequence[ValidationStep], result: ValidationResult) -> ErrorPayload:
        """Build the error payload returned on failure."""
        return format_std_errors(plan, result)

    def collect_composite_field_errors(self, result: ValidationResult, field_prefix: str) -> str:
        """Combined message for every error key starting with field_prefix."""
        return collect_composite_field_errors(result, field_prefix)

    def build_plan(
        self,
        data: Mapping[str, Any],
        context: Optional[Mapping[str, Any]] = None
    ) -> List[ValidationStep]:
        """
        Get and normalize this validator's plan.

        Raises:
            PlanDefinitionError: If the plan is malformed or names an unknown capability
        """
        raw_plan = self.get_validation_plan(data, context or {})
        plan = normalize_validation_plan(raw_plan, self.registry)
        logger.debug(f"{self.name} normalized plan: {describe_plan(plan)}")
        return plan

    def run(
        self,
        data: Mapping[str, Any],
        context: Optional[Mapping[str, Any]] = None
    ) -> ValidationOutcome:
        """
        Validate input data against this validator's plan.

        Args:
            data: Submitted input data
            context: Trusted server-side reference data

        Returns:
            ValidationOutcome with clean values or the full error payload

        Raises:
            PlanDefinitionError: If the plan is malformed (programmer error)
        """
        if context is None:
            context = {}

        logger.debug(f"{self.name} validating fields: {sorted(data.keys())}")

        plan = self.build_plan(data, context)
        result = ValidationResult()

        for index, step in enumerate(plan):
            logger.debug(f"{self.name} step[{index}]: {step.field} [START]")

            # If a required input is missing, skip this step's capability
            if should_skip_step(step, data, result, self.registry):
                logger.debug(f"{self.name} step[{index}]: {step.field} [SKIPPED]")
                continue

            method_args = build_method_args(step, data, result)
            try:
                step.capability(*method_args)
            except Exception as e:
                log_error(logger, e, f"{self.name} capability '{step.method}' failed for field '{step.field}'")
                raise

            logger.debug(f"{self.name} step[{index}]: {step.field} [COMPLETE]")

        if result.has_errors():
            errors = self.format_errors(plan, result) or result.get_all_errors()
            logger.info(f"{self.name} validation failed for fields: {sorted(errors.keys())}")
            return ValidationOutcome.err(errors)

        logger.debug(f"{self.name} validation passed")
        return ValidationOutcome.ok(self.format_valid_data(plan, result))

    def validate_data(
        self,
        data: Mapping[str, Any],
        context: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Validate input data and return clean values.

        Args:
            data: Submitted input data
            context: Trusted server-side reference data

        Returns:
            Clean, validated controller-ready values

        Raises:
            ValidationException: If any field fails validation
            PlanDefinitionError: If the plan is malformed (programmer error)
        """
        return self.run(data, context).unwrap()
