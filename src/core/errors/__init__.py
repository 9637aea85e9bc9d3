"""Error taxonomy and partial-failure collection for designgen."""

from .lib import (
    ComponentNotFoundError,
    ConfigurationError,
    ConversionError,
    DesignGenError,
    ErrorCategory,
    ErrorCollector,
    ErrorRecord,
    InvalidColorError,
    SchemaError,
    Severity,
    ThemeError,
    VariableError,
    WidgetError,
)

__all__ = [
    # Taxonomy
    "ErrorCategory",
    "Severity",
    # Exceptions
    "DesignGenError",
    "WidgetError",
    "ThemeError",
    "ConversionError",
    "VariableError",
    "InvalidColorError",
    "SchemaError",
    "ConfigurationError",
    "ComponentNotFoundError",
    # Collection
    "ErrorRecord",
    "ErrorCollector",
]
