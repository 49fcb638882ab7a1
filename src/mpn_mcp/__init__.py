"""MPN MCP - classify manufacturer part numbers and check official replacements."""

__version__ = "0.1.0"

from .component_types import ComponentType
from .registry import PatternRegistry, RegistryFrozenError
from .dispatch import (
    HANDLER_ORDER,
    build_registry,
    extract_series,
    find_handler,
    find_handlers,
    find_mpn_in_text,
    get_component_type,
    get_package_code,
    is_official_replacement,
)

__all__ = [
    "__version__",
    "ComponentType",
    "PatternRegistry",
    "RegistryFrozenError",
    "HANDLER_ORDER",
    "build_registry",
    "find_handler",
    "find_handlers",
    "find_mpn_in_text",
    "get_component_type",
    "extract_series",
    "get_package_code",
    "is_official_replacement",
]
