"""Authoritative Schema Module for widget and design-node types.

This module serves as the single source of truth for type knowledge in
designgen. It provides:
- Rich widget metadata (display names, target node types, aliases)
- Library category definitions
- Raw-dictionary validation before model construction
- JSON Schema export for the widget input contract

All type-related queries should route through this module.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class WidgetType(str, Enum):
    """Closed set of source widget kinds.

    Framework-specific names (ElevatedButton, CupertinoNavigationBar, ...)
    resolve to these through the registry aliases.
    """

    CONTAINER = "container"
    ROW = "row"
    COLUMN = "column"
    STACK = "stack"
    TEXT = "text"
    IMAGE = "image"
    BUTTON = "button"
    CARD = "card"
    SCAFFOLD = "scaffold"
    APPBAR = "appbar"
    CUSTOM = "custom"


class NodeType(str, Enum):
    """Target design-tool node kinds."""

    FRAME = "FRAME"
    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    COMPONENT = "COMPONENT"
    INSTANCE = "INSTANCE"
    GROUP = "GROUP"
    VECTOR = "VECTOR"


class LibraryCategory(str, Enum):
    """Top-level sections of the generated component library."""

    BUTTONS = "Buttons"
    TYPOGRAPHY = "Typography"
    SURFACES = "Surfaces"
    LAYOUT = "Layout"
    NAVIGATION = "Navigation"
    MEDIA = "Media"
    COMPONENTS = "Components"


class LayoutType(str, Enum):
    """Layout hint attached to container widgets."""

    ROW = "row"
    COLUMN = "column"
    STACK = "stack"
    WRAP = "wrap"
    FLEX = "flex"


@dataclass(frozen=True)
class WidgetMeta:
    """Metadata definition for a widget type.

    Attributes:
        type: Canonical widget type.
        display_name: Name used in generated node and component names.
        node_type: Target node kind produced by lowering.
        category: Default library category for components of this type.
        description: Human-readable description.
        aliases: Lowercase alternative names accepted on input.
        is_layout: Whether the widget arranges children along an axis.
    """

    type: WidgetType
    display_name: str
    node_type: NodeType
    category: LibraryCategory
    description: str
    aliases: tuple[str, ...] = field(default_factory=tuple)
    is_layout: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to dictionary for schema export."""
        return {
            "type": self.type.value,
            "display_name": self.display_name,
            "node_type": self.node_type.value,
            "category": self.category.value,
            "description": self.description,
            "aliases": list(self.aliases),
            "is_layout": self.is_layout,
        }


WIDGET_REGISTRY: dict[WidgetType, WidgetMeta] = {
    # === LAYOUT ===
    WidgetType.CONTAINER: WidgetMeta(
        type=WidgetType.CONTAINER,
        display_name="Container",
        node_type=NodeType.FRAME,
        category=LibraryCategory.COMPONENTS,
        description="Box with optional decoration, padding and a single child",
        aliases=("box", "sizedbox", "padding", "center", "align", "decoratedbox"),
    ),
    WidgetType.ROW: WidgetMeta(
        type=WidgetType.ROW,
        display_name="Row",
        node_type=NodeType.FRAME,
        category=LibraryCategory.LAYOUT,
        description="Arranges children horizontally",
        aliases=("hstack",),
        is_layout=True,
    ),
    WidgetType.COLUMN: WidgetMeta(
        type=WidgetType.COLUMN,
        display_name="Column",
        node_type=NodeType.FRAME,
        category=LibraryCategory.LAYOUT,
        description="Arranges children vertically",
        aliases=("vstack", "listview"),
        is_layout=True,
    ),
    WidgetType.STACK: WidgetMeta(
        type=WidgetType.STACK,
        display_name="Stack",
        node_type=NodeType.FRAME,
        category=LibraryCategory.LAYOUT,
        description="Layers children on top of each other with absolute placement",
        aliases=("zstack", "overlay"),
        is_layout=True,
    ),
    WidgetType.SCAFFOLD: WidgetMeta(
        type=WidgetType.SCAFFOLD,
        display_name="Scaffold",
        node_type=NodeType.FRAME,
        category=LibraryCategory.NAVIGATION,
        description="Top-level screen structure",
        aliases=("cupertinopagescaffold",),
    ),
    # === CONTENT ===
    WidgetType.TEXT: WidgetMeta(
        type=WidgetType.TEXT,
        display_name="Text",
        node_type=NodeType.TEXT,
        category=LibraryCategory.TYPOGRAPHY,
        description="Run of literal text",
        aliases=("richtext", "selectabletext", "label"),
    ),
    WidgetType.IMAGE: WidgetMeta(
        type=WidgetType.IMAGE,
        display_name="Image",
        node_type=NodeType.RECTANGLE,
        category=LibraryCategory.MEDIA,
        description="Raster or network image, drawn as a filled rectangle",
        aliases=("networkimage", "assetimage", "img"),
    ),
    # === COMPONENTS ===
    WidgetType.BUTTON: WidgetMeta(
        type=WidgetType.BUTTON,
        display_name="Button",
        node_type=NodeType.COMPONENT,
        category=LibraryCategory.BUTTONS,
        description="Pressable control",
        aliases=(
            "elevatedbutton",
            "textbutton",
            "outlinedbutton",
            "filledbutton",
            "iconbutton",
            "cupertinobutton",
        ),
    ),
    WidgetType.CARD: WidgetMeta(
        type=WidgetType.CARD,
        display_name="Card",
        node_type=NodeType.COMPONENT,
        category=LibraryCategory.SURFACES,
        description="Elevated surface grouping related content",
        aliases=("material",),
    ),
    WidgetType.APPBAR: WidgetMeta(
        type=WidgetType.APPBAR,
        display_name="AppBar",
        node_type=NodeType.COMPONENT,
        category=LibraryCategory.NAVIGATION,
        description="Top navigation bar",
        aliases=("app_bar", "cupertinonavigationbar", "navigationbar", "toolbar"),
    ),
    WidgetType.CUSTOM: WidgetMeta(
        type=WidgetType.CUSTOM,
        display_name="Custom",
        node_type=NodeType.FRAME,
        category=LibraryCategory.COMPONENTS,
        description="User-defined or wrapper widget (Expanded, Positioned, ...)",
        aliases=("expanded", "flexible", "positioned", "statelesswidget"),
    ),
}


def get_widget_meta(widget_type: WidgetType | str) -> WidgetMeta:
    """Get metadata for a widget type.

    Args:
        widget_type: The widget type (enum member or value).

    Returns:
        WidgetMeta with full metadata.

    Raises:
        KeyError: If the type is not registered.
    """
    return WIDGET_REGISTRY[WidgetType(widget_type)]


def get_node_type(widget_type: WidgetType | str) -> NodeType:
    """Get the target node type a widget lowers to.

    Unknown types fall back to FRAME.
    """
    try:
        return get_widget_meta(widget_type).node_type
    except (KeyError, ValueError):
        return NodeType.FRAME


def get_display_name(widget_type: WidgetType | str) -> str:
    """Get the human-facing name of a widget type (e.g. "AppBar")."""
    try:
        return get_widget_meta(widget_type).display_name
    except (KeyError, ValueError):
        return str(widget_type)


def get_widget_category(widget_type: WidgetType | str) -> LibraryCategory:
    """Get the default library category of a widget type."""
    try:
        return get_widget_meta(widget_type).category
    except (KeyError, ValueError):
        return LibraryCategory.COMPONENTS


def resolve_alias(alias: str) -> WidgetType | None:
    """Resolve a widget alias to its canonical type.

    Args:
        alias: The alias string to resolve (case-insensitive).

    Returns:
        The canonical WidgetType, or None if not found.
    """
    alias_lower = alias.lower().strip()

    # Direct match first
    for wt in WidgetType:
        if wt.value == alias_lower:
            return wt

    # Search aliases
    for meta in WIDGET_REGISTRY.values():
        if alias_lower in meta.aliases:
            return meta.type

    return None


def export_widget_enum_schema() -> dict[str, Any]:
    """Export widget type values mapped to their metadata.

    Returns:
        Dict mapping widget values to metadata dicts.
    """
    return {wt.value: WIDGET_REGISTRY[wt].to_dict() for wt in WidgetType}


def export_json_schema() -> dict[str, Any]:
    """Export the JSON Schema of the widget input tree.

    Returns:
        JSON Schema dict suitable for validating upstream analysis output.
    """
    from src.mid import WidgetNode

    return WidgetNode.model_json_schema(by_alias=True)


# === SCHEMA VALIDATION ===


@dataclass
class SchemaValidationError:
    """Represents a schema validation error."""

    path: str
    message: str
    error_type: str


def validate_widget_type(value: str) -> WidgetType | None:
    """Validate and convert a string to WidgetType.

    Args:
        value: String value to validate.

    Returns:
        WidgetType if valid, None otherwise.
    """
    try:
        return WidgetType(value)
    except ValueError:
        return resolve_alias(value)


def validate_widget_dict(
    data: dict[str, Any], path: str = "root"
) -> list[SchemaValidationError]:
    """Validate a raw widget dictionary against the schema.

    Args:
        data: Dictionary representing a widget node.
        path: Current path in the tree for error reporting.

    Returns:
        List of validation errors found.
    """
    errors: list[SchemaValidationError] = []

    # Required fields
    if "id" not in data:
        errors.append(
            SchemaValidationError(path, "Missing required field 'id'", "missing_field")
        )
    if "type" not in data:
        errors.append(
            SchemaValidationError(
                path, "Missing required field 'type'", "missing_field"
            )
        )
    elif not isinstance(data["type"], str) or validate_widget_type(data["type"]) is None:
        errors.append(
            SchemaValidationError(
                path,
                f"Invalid widget type: {data['type']}",
                "invalid_enum",
            )
        )

    layout = data.get("layout")
    if layout is not None:
        if not isinstance(layout, dict):
            errors.append(
                SchemaValidationError(path, "layout must be an object", "invalid_type")
            )
        elif layout.get("type") not in {lt.value for lt in LayoutType}:
            errors.append(
                SchemaValidationError(
                    f"{path}.layout",
                    f"Invalid layout type: {layout.get('type')}",
                    "invalid_enum",
                )
            )

    # Validate children recursively
    if "children" in data:
        if not isinstance(data["children"], list):
            errors.append(
                SchemaValidationError(path, "children must be a list", "invalid_type")
            )
        else:
            seen_ids: set[str] = set()
            for i, child in enumerate(data["children"]):
                child_path = f"{path}.children[{i}]"
                if not isinstance(child, dict):
                    errors.append(
                        SchemaValidationError(
                            child_path,
                            "Child must be an object",
                            "invalid_type",
                        )
                    )
                    continue

                child_id = child.get("id")
                if child_id and child_id in seen_ids:
                    errors.append(
                        SchemaValidationError(
                            child_path,
                            f"Duplicate id: {child_id}",
                            "duplicate_id",
                        )
                    )
                if child_id:
                    seen_ids.add(child_id)

                errors.extend(validate_widget_dict(child, child_path))

    return errors


def is_valid_widget_dict(data: dict[str, Any]) -> bool:
    """Check if a widget dictionary is valid.

    Args:
        data: Dictionary to validate.

    Returns:
        True if valid, False otherwise.
    """
    return len(validate_widget_dict(data)) == 0


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
