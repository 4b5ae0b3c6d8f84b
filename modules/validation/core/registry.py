"""
Capability registry system.

Provides decorator-based registration for validation capabilities and
retrieval functions. Plans refer to capabilities by name; the names are
resolved against this registry when a plan is normalized.

Every capability honours one calling convention:

    capability(result, value_1, ..., value_n, field_key, *extra_args) -> None

It mutates the shared ValidationResult in place and its return value is ignored.
"""

from typing import Any, Callable, Dict, Mapping, Optional
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

Capability = Callable[..., Any]
CapabilityRegistry = Mapping[str, Capability]

# Global registry of all capabilities
CAPABILITY_REGISTRY: Dict[str, Capability] = {}


def register_capability(name: str, *aliases: str):
    """
    Decorator to register a capability in the global registry.

    Usage:
        @register_capability("validate_integer")
        def validate_integer(result, value, field_key):
            ...

    Args:
        name: Unique name for the capability (used in plans)
        *aliases: Additional names resolving to the same function

    Returns:
        Decorator function
    """
    def decorator(func: Capability):
        for key in (name, *aliases):
            if key in CAPABILITY_REGISTRY:
                logger.warning(
                    f"Capability '{key}' is already registered. "
                    f"Overwriting with {func.__name__}"
                )

            CAPABILITY_REGISTRY[key] = func
            logger.debug(f"Registered capability: {key} -> {func.__name__}")
        return func

    return decorator


def get_capability(name: str, registry: Optional[CapabilityRegistry] = None) -> Optional[Capability]:
    """
    Get capability by name.

    Args:
        name: Capability name
        registry: Registry to search (defaults to the global registry)

    Returns:
        Capability function or None if not found
    """
    if registry is None:
        registry = CAPABILITY_REGISTRY
    return registry.get(name)


def list_capabilities() -> Dict[str, str]:
    """
    List all registered capabilities.

    Returns:
        Dictionary mapping capability names to function names
    """
    return {
        name: func.__name__
        for name, func in CAPABILITY_REGISTRY.items()
    }


def is_registered(name: str, registry: Optional[CapabilityRegistry] = None) -> bool:
    """
    Check if a capability is registered.

    Args:
        name: Capability name
        registry: Registry to search (defaults to the global registry)

    Returns:
        True if registered, False otherwise
    """
    if registry is None:
        registry = CAPABILITY_REGISTRY
    return name in registry
