"""Schema module - authoritative source for widget and node type definitions.

This module provides:
- Widget type definitions with rich metadata
- Target node and library category enums
- Raw widget dictionary validation
- Alias resolution for framework-specific widget names

Example usage:
    >>> from src.schema import resolve_alias, validate_widget_dict
    >>> resolve_alias("ElevatedButton")
    <WidgetType.BUTTON: 'button'>
    >>> errors = validate_widget_dict({"id": "root", "type": "column"})
"""

from .lib import (
    WIDGET_REGISTRY,
    LayoutType,
    LibraryCategory,
    NodeType,
    SchemaValidationError,
    WidgetMeta,
    WidgetType,
    export_json_schema,
    export_widget_enum_schema,
    get_display_name,
    get_node_type,
    get_widget_category,
    get_widget_meta,
    is_valid_widget_dict,
    resolve_alias,
    validate_widget_dict,
    validate_widget_type,
)

__all__ = [
    # Enums
    "WidgetType",
    "NodeType",
    "LibraryCategory",
    "LayoutType",
    # Registry
    "WidgetMeta",
    "WIDGET_REGISTRY",
    "get_widget_meta",
    "get_node_type",
    "get_display_name",
    "get_widget_category",
    "resolve_alias",
    # Export
    "export_widget_enum_schema",
    "export_json_schema",
    # Validation
    "SchemaValidationError",
    "validate_widget_type",
    "validate_widget_dict",
    "is_valid_widget_dict",
]
