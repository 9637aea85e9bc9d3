"""Core utilities shared by every designgen module."""

from src.core.errors import (
    ComponentNotFoundError,
    ConfigurationError,
    ConversionError,
    DesignGenError,
    ErrorCategory,
    ErrorCollector,
    ErrorRecord,
    InvalidColorError,
    SchemaError,
    ThemeError,
    VariableError,
    WidgetError,
)
from src.core.log import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Errors
    "ErrorCategory",
    "DesignGenError",
    "WidgetError",
    "ThemeError",
    "ConversionError",
    "VariableError",
    "InvalidColorError",
    "SchemaError",
    "ConfigurationError",
    "ComponentNotFoundError",
    "ErrorRecord",
    "ErrorCollector",
]
