"""
Validator whose plan is read from YAML configuration.

Plan arguments may pull trusted values from the context with the
"$context.<key>" syntax:

    forms:
      obs_data_restoration_request:
        plan:
          - field: instrument
            method: validate_selection
            args: ["$context.instruments"]
            required: true
"""

from typing import Any, Dict, List, Mapping, Optional

from modules.validation.core.base import PlanDefinitionError
from modules.validation.core.config_loader import PlanConfigLoader
from modules.validation.core.registry import CapabilityRegistry
from modules.validation.engine import BaseValidator
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

CONTEXT_ARG_PREFIX = "$context."


class ConfiguredFormValidator(BaseValidator):
    """
    Runs the plan configured for one form in the plans YAML file.

    Usage:
        validator = ConfiguredFormValidator("update_application_date")
        values = validator.validate_data(form_data)
    """

    def __init__(
        self,
        form_name: str,
        loader: Optional[PlanConfigLoader] = None,
        registry: Optional[CapabilityRegistry] = None
    ):
        """
        Initialize configured validator.

        Args:
            form_name: Form identifier in the plans file
            loader: Plan loader (defaults to the configured plans file)
            registry: Capability registry (defaults to the global registry)
        """
        super().__init__(registry)
        self.form_name = form_name
        self.loader = loader or PlanConfigLoader()
        self.name = f"{self.__class__.__name__}[{form_name}]"

    def get_validation_plan(self, data: Mapping[str, Any], context: Mapping[str, Any]) -> List[Dict[str, Any]]:
        raw_plan = self.loader.get_form_plan(self.form_name)
        if not raw_plan:
            logger.warning(f"No validation plan configured for form '{self.form_name}'")

        resolved = []
        for index, step in enumerate(raw_plan):
            if isinstance(step, dict) and isinstance(step.get('args'), list):
                step = {**step, 'args': [self._resolve_arg(arg, context, index) for arg in step['args']]}
            resolved.append(step)
        return resolved

    def _resolve_arg(self, arg: Any, context: Mapping[str, Any], index: int) -> Any:
        if not (isinstance(arg, str) and arg.startswith(CONTEXT_ARG_PREFIX)):
            return arg

        key = arg[len(CONTEXT_ARG_PREFIX):]
        if key not in context:
            message = f"Form '{self.form_name}' step {index} needs context key '{key}'"
            logger.error(message)
            raise PlanDefinitionError(message, index)
        return context[key]
