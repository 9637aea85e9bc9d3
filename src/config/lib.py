"""Centralized environment configuration management for designgen.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from src.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> cap = get_environment(EnvVar.MAX_VARIANTS)  # Returns int
    >>> prefix = get_environment(EnvVar.COLLECTION_PREFIX)  # Returns str
    >>>
    >>> # Override at runtime
    >>> cap = get_environment(EnvVar.MAX_VARIANTS, override=8)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

from src.core.log import parse_level

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "DESIGNGEN_MAX_VARIANTS").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by designgen.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - style: Token-vs-literal style resolution
        - variants: Variant synthesis limits
        - library: Generated component library metadata
        - logging: Log output
    """

    # -------------------------------------------------------------------------
    # Style Resolution
    # -------------------------------------------------------------------------
    USE_VARIABLES = EnvConfig(
        name="DESIGNGEN_USE_VARIABLES",
        default=True,
        var_type=bool,
        description="Bind theme references to variables instead of literals",
        category="style",
    )
    FALLBACK_TO_DIRECT_VALUES = EnvConfig(
        name="DESIGNGEN_FALLBACK_TO_DIRECT_VALUES",
        default=True,
        var_type=bool,
        description="Apply the literal value (with a warning) when a token is missing",
        category="style",
    )
    COLLECTION_PREFIX = EnvConfig(
        name="DESIGNGEN_COLLECTION_PREFIX",
        default="Default",
        var_type=str,
        description="Prefix of the variable collections searched for tokens",
        category="style",
    )
    PREFER_MULTI_MODE = EnvConfig(
        name="DESIGNGEN_PREFER_MULTI_MODE",
        default=False,
        var_type=bool,
        description="Look up multi-mode (light/dark) variables first",
        category="style",
    )

    # -------------------------------------------------------------------------
    # Variant Synthesis
    # -------------------------------------------------------------------------
    MAX_VARIANTS = EnvConfig(
        name="DESIGNGEN_MAX_VARIANTS",
        default=16,
        var_type=int,
        description="Upper bound on synthesized variants per component (at most 16)",
        category="variants",
    )

    # -------------------------------------------------------------------------
    # Component Library
    # -------------------------------------------------------------------------
    LIBRARY_NAME = EnvConfig(
        name="DESIGNGEN_LIBRARY_NAME",
        default="Flutter Component Library",
        var_type=str,
        description="Name of the generated component library",
        category="library",
    )
    LIBRARY_VERSION = EnvConfig(
        name="DESIGNGEN_LIBRARY_VERSION",
        default="1.0.0",
        var_type=str,
        description="Version stamped into library metadata",
        category="library",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_LEVEL = EnvConfig(
        name="DESIGNGEN_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, or bool).

    Example:
        >>> get_environment(EnvVar.MAX_VARIANTS)
        16
        >>> get_environment(EnvVar.MAX_VARIANTS, override=4)
        4
    """
    config: EnvConfig = env_var.value

    # Override takes highest priority
    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_style_defaults() -> dict[str, Any]:
    """Get the style resolution switches from the environment.

    Returns:
        Dict with use_variables, fallback_to_direct_values,
        collection_prefix and prefer_multi_mode keys.
    """
    return {
        "use_variables": get_environment(EnvVar.USE_VARIABLES),
        "fallback_to_direct_values": get_environment(
            EnvVar.FALLBACK_TO_DIRECT_VALUES
        ),
        "collection_prefix": get_environment(EnvVar.COLLECTION_PREFIX),
        "prefer_multi_mode": get_environment(EnvVar.PREFER_MULTI_MODE),
    }


def get_log_level(override: str | None = None) -> int:
    """Get the numeric log level.

    Resolution: override > DESIGNGEN_LOG_LEVEL > INFO
    """
    return parse_level(get_environment(EnvVar.LOG_LEVEL, override=override))


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (style, variants, library, logging).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


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
