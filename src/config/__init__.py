"""Centralized configuration management for designgen.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from src.config import EnvVar, get_environment
    >>>
    >>> # Get any environment variable with automatic type conversion
    >>> prefix = get_environment(EnvVar.COLLECTION_PREFIX)  # Returns str: "Default"
    >>> strict = not get_environment(EnvVar.FALLBACK_TO_DIRECT_VALUES)
    >>>
    >>> # Override at runtime
    >>> cap = get_environment(EnvVar.MAX_VARIANTS, override=8)
    >>>
    >>> # List available variables by category
    >>> for var in list_environment_variables("style"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    style: Token-vs-literal resolution switches
    variants: Variant synthesis cap
    library: Component library name and version
    logging: CLI log level
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_log_level,
    get_style_defaults,
    # Introspection
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_style_defaults",
    "get_log_level",
    # Introspection
    "list_environment_variables",
]
