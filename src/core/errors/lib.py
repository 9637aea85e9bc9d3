"""Exception hierarchy and error collection.

Per-node and per-property problems are collected as ``ErrorRecord`` entries
and reported alongside the output. Only configuration-class failures are
raised past the call that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level classification of conversion problems."""

    WIDGET = "WIDGET"
    THEME = "THEME"
    CONVERSION = "CONVERSION"
    VARIABLE = "VARIABLE"
    STYLE = "STYLE"
    VALIDATION = "VALIDATION"
    CONFIGURATION = "CONFIGURATION"


class Severity(str, Enum):
    """Whether a collected record blocks success."""

    ERROR = "error"
    WARNING = "warning"


class DesignGenError(Exception):
    """Base exception for all designgen errors.

    Attributes:
        code: Machine-readable error code.
        category: Error category.
        context: Extra details useful for reporting.
    """

    code = "DESIGNGEN_ERROR"
    category = ErrorCategory.CONVERSION
    label = "Error"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def _location(self) -> str:
        return ""

    def to_user_message(self) -> str:
        """Render a short message suitable for an end user."""
        return f"{self.label}{self._location()}: {self.message}"


class WidgetError(DesignGenError):
    """Raised for unsupported or malformed widgets."""

    code = "WIDGET_ERROR"
    category = ErrorCategory.WIDGET
    label = "Widget error"

    def __init__(self, message: str, widget_type: str | None = None):
        super().__init__(message, {"widget_type": widget_type})
        self.widget_type = widget_type

    def _location(self) -> str:
        return f" in {self.widget_type}" if self.widget_type else ""


class ThemeError(DesignGenError):
    """Raised when theme data cannot be used."""

    code = "THEME_ERROR"
    category = ErrorCategory.THEME
    label = "Theme error"

    def __init__(self, message: str, theme_path: str | None = None):
        super().__init__(message, {"theme_path": theme_path})
        self.theme_path = theme_path

    def _location(self) -> str:
        return f" at {self.theme_path}" if self.theme_path else ""


class ConversionError(DesignGenError):
    """Raised when a widget cannot be converted."""

    code = "CONVERSION_ERROR"
    category = ErrorCategory.CONVERSION
    label = "Conversion error"

    def __init__(self, message: str, widget_type: str | None = None):
        super().__init__(message, {"widget_type": widget_type})
        self.widget_type = widget_type

    def _location(self) -> str:
        return f" for {self.widget_type}" if self.widget_type else ""


class VariableError(DesignGenError):
    """Raised for token table construction problems."""

    code = "VARIABLE_ERROR"
    category = ErrorCategory.VARIABLE
    label = "Variable error"

    def __init__(self, message: str, variable_name: str | None = None):
        super().__init__(message, {"variable_name": variable_name})
        self.variable_name = variable_name

    def _location(self) -> str:
        return f" for {self.variable_name}" if self.variable_name else ""


class InvalidColorError(DesignGenError, ValueError):
    """Raised for malformed hex color literals."""

    code = "INVALID_COLOR"
    category = ErrorCategory.STYLE
    label = "Style error"

    def __init__(self, value: str):
        super().__init__(f"Invalid hex color format: {value}", {"value": value})
        self.value = value


class SchemaError(DesignGenError):
    """Raised when input data does not match the widget schema."""

    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    label = "Validation error"

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, {"path": path})
        self.path = path

    def _location(self) -> str:
        return f" at {self.path}" if self.path else ""


class ConfigurationError(DesignGenError):
    """Raised for invalid configuration. Always propagates."""

    code = "CONFIGURATION_ERROR"
    category = ErrorCategory.CONFIGURATION
    label = "Configuration error"


class ComponentNotFoundError(ConfigurationError):
    """Raised when an instance references a component that was never built."""

    code = "COMPONENT_NOT_FOUND"

    def __init__(self, component_name: str):
        super().__init__(
            f"No component named '{component_name}' has been built",
            {"component_name": component_name},
        )
        self.component_name = component_name


@dataclass
class ErrorRecord:
    """A collected, non-fatal problem.

    Attributes:
        category: Error category.
        message: Human-readable description.
        severity: ERROR records make a run unsuccessful; WARNING records do not.
        node_id: Id of the widget or node involved, if any.
    """

    category: ErrorCategory
    message: str
    severity: Severity = Severity.ERROR
    node_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "message": self.message,
            "severity": self.severity.value,
            "nodeId": self.node_id,
        }


@dataclass
class ErrorCollector:
    """Accumulates error and warning records without interrupting work."""

    records: list[ErrorRecord] = field(default_factory=list)

    def add_error(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.CONVERSION,
        node_id: str | None = None,
    ) -> None:
        self.records.append(ErrorRecord(category, message, Severity.ERROR, node_id))

    def add_warning(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.CONVERSION,
        node_id: str | None = None,
    ) -> None:
        self.records.append(
            ErrorRecord(category, message, Severity.WARNING, node_id)
        )

    def add_exception(self, exc: DesignGenError, node_id: str | None = None) -> None:
        self.records.append(
            ErrorRecord(exc.category, exc.to_user_message(), Severity.ERROR, node_id)
        )

    def extend(self, other: "ErrorCollector") -> None:
        self.records.extend(other.records)

    @property
    def errors(self) -> list[ErrorRecord]:
        return [r for r in self.records if r.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ErrorRecord]:
        return [r for r in self.records if r.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(r.severity == Severity.ERROR for r in self.records)

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": [r.to_dict() for r in self.errors],
            "warnings": [r.to_dict() for r in self.warnings],
        }


__all__ = [
    "ErrorCategory",
    "Severity",
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
