"""
Validation plan configuration loader.

Loads declarative form plans from YAML configuration files:

    global:
      required_msg: "This field is required"
    forms:
      guest_account_remove:
        plan:
          - field: username
            method: validate_username
            required: true
"""

import yaml
from typing import Dict, Any, List, Optional
from pathlib import Path

from shared.utils.config import settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


class PlanConfigLoader:
    """
    Loads validation plans from YAML files.

    Supports:
    - Per-form plan definitions
    - Global settings
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to the plans YAML file
                        If None, uses settings.VALIDATION_PLANS_PATH or
                        the default: config/validation/plans.yaml
        """
        if config_path is None:
            config_path = settings.VALIDATION_PLANS_PATH
        if config_path is None:
            # Default path
            base_dir = Path(__file__).parent.parent.parent.parent
            config_path = base_dir / "config" / "validation" / "plans.yaml"

        self.config_path = Path(config_path)
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            yaml.YAMLError: If YAML parsing fails
        """
        if not self.config_path.exists():
            logger.warning(
                f"Validation plans file not found: {self.config_path}. "
                "Using empty configuration."
            )
            self._config = self._get_default_config()
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logger.info(f"Loaded validation plans from: {self.config_path}")
            return self._config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse validation plans: {e}")
            raise

    def get_form_plan(self, form_name: str) -> List[Dict[str, Any]]:
        """
        Get the raw validation plan for a form.

        Steps without 'required_msg' inherit the global one when configured.

        Args:
            form_name: Form identifier

        Returns:
            List of raw step declarations (empty if the form is unknown)
        """
        if self._config is None:
            self.load()

        forms = self._config.get('forms') or {}
        form_config = forms.get(form_name) or {}
        plan = form_config.get('plan') or []

        default_msg = self.get_global_settings().get('required_msg')
        if default_msg is None:
            return [dict(step) for step in plan]

        return [
            {'required_msg': default_msg, **step} if isinstance(step, dict) else step
            for step in plan
        ]

    def get_global_settings(self) -> Dict[str, Any]:
        """
        Get global plan settings.

        Returns:
            Global settings dictionary
        """
        if self._config is None:
            self.load()

        return self._config.get('global') or {}

    def list_forms(self) -> List[str]:
        """
        Get the names of all configured forms.

        Returns:
            List of form names
        """
        if self._config is None:
            self.load()

        return list((self._config.get('forms') or {}).keys())

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration when file doesn't exist.

        Returns:
            Default configuration dictionary
        """
        return {
            'global': {},
            'forms': {}
        }

    def reload(self) -> Dict[str, Any]:
        """
        Reload configuration from file.

        Returns:
            Updated configuration dictionary
        """
        self._config = None
        return self.load()


def load_plan_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Convenience function to load plan configuration.

    Args:
        config_path: Optional path to config file

    Returns:
        Configuration dictionary
    """
    loader = PlanConfigLoader(config_path)
    return loader.load()
