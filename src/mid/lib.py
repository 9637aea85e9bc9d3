"""Metadata-Intermediate-Definition (MID) layer.

The MID layer is the **Source of Truth** for the abstract widget tree handed
to designgen by the upstream widget analysis stage. It defines the input
models (WidgetNode, StyleInfo, LayoutInfo, ...), the theme model, and the
semantic validation rules applied before lowering.

All models accept both camelCase (interchange) and snake_case (Python)
keys and are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.schema import LayoutType, WidgetType, resolve_alias

Number = int | float

_INPUT_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
    "use_enum_values": True,
}


class MainAxisAlignment(str, Enum):
    """Distribution of children along the layout axis."""

    START = "start"
    CENTER = "center"
    END = "end"
    SPACE_BETWEEN = "spaceBetween"
    SPACE_AROUND = "spaceAround"
    SPACE_EVENLY = "spaceEvenly"


class CrossAxisAlignment(str, Enum):
    """Placement of children perpendicular to the layout axis."""

    START = "start"
    CENTER = "center"
    END = "end"
    STRETCH = "stretch"


def normalize_font_weight(value: Any) -> Any:
    """Normalize font weights such as 700, "w700" or "FontWeight.w700" to "700"."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(int(value))
    text = str(value).strip()
    if text.startswith("FontWeight."):
        text = text[len("FontWeight.") :]
    if len(text) > 1 and text[0] == "w" and text[1:].isdigit():
        text = text[1:]
    return text


# =============================================================================
# Geometry and Style Primitives
# =============================================================================


class Point(BaseModel):
    """2D offset."""

    x: Number = 0
    y: Number = 0

    model_config = _INPUT_CONFIG


class EdgeInsets(BaseModel):
    """Padding or margin on four sides."""

    top: Number = 0
    right: Number = 0
    bottom: Number = 0
    left: Number = 0

    model_config = _INPUT_CONFIG

    @classmethod
    def all(cls, value: Number) -> "EdgeInsets":
        return cls(top=value, right=value, bottom=value, left=value)

    def max_edge(self) -> Number:
        return max(self.top, self.right, self.bottom, self.left)


class BorderRadius(BaseModel):
    """Corner radii."""

    top_left: Number = 0
    top_right: Number = 0
    bottom_left: Number = 0
    bottom_right: Number = 0

    model_config = _INPUT_CONFIG

    @classmethod
    def circular(cls, value: Number) -> "BorderRadius":
        return cls(
            top_left=value, top_right=value, bottom_left=value, bottom_right=value
        )

    @property
    def is_uniform(self) -> bool:
        return (
            self.top_left == self.top_right == self.bottom_left == self.bottom_right
        )


class BorderInfo(BaseModel):
    """Border stroke and corner radius."""

    width: Number | None = None
    color: str | None = None
    radius: BorderRadius | None = None
    style: Literal["solid", "dashed", "dotted"] | None = None

    model_config = _INPUT_CONFIG


class ShadowInfo(BaseModel):
    """A single box shadow."""

    color: str
    offset: Point = Field(default_factory=Point)
    blur: Number = 0
    spread: Number | None = None

    model_config = _INPUT_CONFIG


class ColorInfo(BaseModel):
    """A color applied to a widget property.

    Attributes:
        property: Which widget property the color drives
            (backgroundColor, color, borderColor).
        value: Hex literal (or the upstream textual fallback).
        is_theme_reference: Whether the color came from the theme.
        theme_path: Dotted theme path, e.g. ``colorScheme.primary``.
    """

    property: str = "color"
    value: str
    is_theme_reference: bool = False
    theme_path: str | None = None

    model_config = _INPUT_CONFIG


class TypographyInfo(BaseModel):
    """Text styling with an optional theme reference."""

    font_size: Number | None = None
    font_weight: str | None = None
    font_family: str | None = None
    letter_spacing: Number | None = None
    line_height: Number | None = None
    color: str | None = None
    is_theme_reference: bool = False
    theme_path: str | None = None

    model_config = _INPUT_CONFIG

    @field_validator("font_weight", mode="before")
    @classmethod
    def _normalize_weight(cls, value: Any) -> Any:
        return normalize_font_weight(value)


class SpacingInfo(BaseModel):
    """Padding and margin extracted from styling."""

    padding: EdgeInsets | None = None
    margin: EdgeInsets | None = None

    model_config = _INPUT_CONFIG


class StyleInfo(BaseModel):
    """All styling attached to a widget."""

    colors: list[ColorInfo] = Field(default_factory=list)
    typography: TypographyInfo | None = None
    spacing: SpacingInfo | None = None
    borders: BorderInfo | None = None
    shadows: list[ShadowInfo] = Field(default_factory=list)

    model_config = _INPUT_CONFIG

    def merged(self, overrides: "StyleInfo | None") -> "StyleInfo":
        """Return a copy where every field explicitly set on overrides wins."""
        if overrides is None:
            return self
        update = {name: getattr(overrides, name) for name in overrides.model_fields_set}
        return self.model_copy(update=update)


# =============================================================================
# Layout and Position
# =============================================================================


class AlignmentInfo(BaseModel):
    """Axis alignment of a layout."""

    main_axis: MainAxisAlignment | None = None
    cross_axis: CrossAxisAlignment | None = None

    model_config = _INPUT_CONFIG


class LayoutInfo(BaseModel):
    """Layout hint for container widgets.

    Attributes:
        type: Layout kind (row, column, stack, wrap, flex).
        direction: Axis for wrap/flex layouts.
        alignment: Main and cross axis alignment.
        spacing: Gap between children.
        padding: Inner padding.
        width: Fixed width.
        height: Fixed height.
    """

    type: LayoutType
    direction: Literal["horizontal", "vertical"] | None = None
    alignment: AlignmentInfo | None = None
    spacing: Number | None = None
    padding: EdgeInsets | None = None
    width: Number | None = None
    height: Number | None = None
    min_width: Number | None = None
    max_width: Number | None = None
    min_height: Number | None = None
    max_height: Number | None = None

    model_config = _INPUT_CONFIG


class PositionInfo(BaseModel):
    """Absolute placement for children of a stack."""

    top: Number | None = None
    right: Number | None = None
    bottom: Number | None = None
    left: Number | None = None
    width: Number | None = None
    height: Number | None = None

    model_config = _INPUT_CONFIG

    @property
    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (self.top, self.right, self.bottom, self.left)
        )


class GradientInfo(BaseModel):
    """Gradient fill description."""

    type: Literal["linear", "radial"] = "linear"
    colors: list[str] = Field(default_factory=list)
    stops: list[Number] | None = None
    begin: Point | None = None
    end: Point | None = None

    model_config = _INPUT_CONFIG


class BoxDecoration(BaseModel):
    """Container decoration."""

    color: str | None = None
    border: BorderInfo | None = None
    border_radius: BorderRadius | None = None
    box_shadow: list[ShadowInfo] = Field(default_factory=list)
    gradient: GradientInfo | None = None

    model_config = _INPUT_CONFIG


# =============================================================================
# Widget Properties
# =============================================================================


class WidgetProperties(BaseModel):
    """Typed widget properties.

    The common properties consumed by lowering are typed fields; any other
    key supplied by the upstream stage is preserved as an extra so the
    interchange contract stays open.
    """

    # Content
    data: str | None = None
    text: str | None = None
    key: str | None = None
    icon: str | None = None
    icon_data: str | None = None

    # Size and box model
    width: Number | None = None
    height: Number | None = None
    padding: EdgeInsets | None = None
    margin: EdgeInsets | None = None
    decoration: BoxDecoration | None = None
    clip_behavior: str | None = None
    alignment: str | None = None

    # Flex and positioning
    flex: Number | None = None
    is_expanded: bool | None = None
    is_positioned: bool | None = None
    positioned: PositionInfo | None = None
    left: Number | None = None
    right: Number | None = None
    top: Number | None = None
    bottom: Number | None = None

    # Component semantics
    text_align: str | None = None
    style: str | None = None
    size: str | None = None
    elevation: Number | None = None
    outlined: bool | None = None
    disabled: bool | None = None

    model_config = {**_INPUT_CONFIG, "extra": "allow"}

    def to_interchange(self) -> dict[str, Any]:
        """Dump set properties with camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a property by camelCase key, field name or extra key."""
        name = _FIELD_BY_ALIAS.get(key, key)
        if name in WidgetProperties.model_fields:
            value = getattr(self, name)
        else:
            value = (self.model_extra or {}).get(key)
        return default if value is None else value

    def merged(self, overrides: dict[str, Any]) -> "WidgetProperties":
        """Return new properties with overrides applied on top."""
        if not overrides:
            return self
        base = self.to_interchange()
        for key, value in overrides.items():
            field = WidgetProperties.model_fields.get(key)
            base[(field.alias or key) if field else key] = value
        return WidgetProperties.model_validate(base)


_FIELD_BY_ALIAS: dict[str, str] = {
    (info.alias or name): name for name, info in WidgetProperties.model_fields.items()
}


# =============================================================================
# Widget Tree
# =============================================================================


class WidgetNode(BaseModel):
    """Recursive node of the abstract widget tree.

    Attributes:
        id: Unique identifier of the widget within the tree.
        type: Widget kind from the closed WidgetType vocabulary. Framework
            names are resolved through aliases; unknown names become
            ``custom`` and keep their original spelling in ``source_type``.
        source_type: Original widget name when it differs from ``type``.
        properties: Typed widget properties.
        children: Ordered, owned child widgets.
        styling: Colors, typography, spacing, borders and shadows.
        layout: Optional layout hint.
        position: Optional absolute placement inside a stack.
    """

    id: str = Field(..., description="Unique identifier for the widget")
    type: WidgetType = Field(..., description="Widget kind")
    source_type: str | None = Field(
        default=None, description="Original widget name before alias resolution"
    )
    properties: WidgetProperties = Field(default_factory=WidgetProperties)
    children: list["WidgetNode"] = Field(
        default_factory=list,
        description="Nested child widgets, in source order",
    )
    styling: StyleInfo = Field(default_factory=StyleInfo)
    layout: LayoutInfo | None = None
    position: PositionInfo | None = None

    model_config = _INPUT_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _resolve_type(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw = data.get("type")
        if isinstance(raw, str):
            resolved = resolve_alias(raw)
            data = dict(data)
            if resolved is None:
                data["type"] = WidgetType.CUSTOM.value
                data.setdefault("sourceType", raw)
            else:
                data["type"] = resolved.value
                if raw != resolved.value and "source_type" not in data:
                    data.setdefault("sourceType", raw)
        return data

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def is_stack(self) -> bool:
        """Whether children are placed absolutely."""
        return self.type == WidgetType.STACK or (
            self.layout is not None and self.layout.type == LayoutType.STACK
        )

    @property
    def is_unsupported(self) -> bool:
        """Whether the source widget name matched no known type."""
        return (
            self.type == WidgetType.CUSTOM
            and self.source_type is not None
            and resolve_alias(self.source_type) is None
        )

    def text_content(self) -> str | None:
        """Literal text carried directly by this widget."""
        return self.properties.data or self.properties.text

    def extract_text(self) -> str | None:
        """First literal text found in this widget or its descendants."""
        direct = self.text_content()
        if direct:
            return direct
        for child in self.children:
            found = child.extract_text()
            if found:
                return found
        return None

    def has_text_content(self) -> bool:
        if self.text_content() or self.type == WidgetType.TEXT:
            return True
        return any(child.has_text_content() for child in self.children)

    def has_icon_content(self) -> bool:
        if self.properties.icon or self.properties.icon_data:
            return True
        return "icon" in (self.source_type or "").lower()

    def resolved_position(self) -> PositionInfo | None:
        """Absolute placement from ``position``, ``properties.positioned``
        or direct left/right/top/bottom properties, in that order."""
        if self.position is not None:
            return self.position
        props = self.properties
        if props.positioned is not None:
            return props.positioned
        if any(v is not None for v in (props.left, props.right, props.top, props.bottom)):
            return PositionInfo(
                left=props.left,
                right=props.right,
                top=props.top,
                bottom=props.bottom,
                width=props.width,
                height=props.height,
            )
        return None

    def with_overrides(
        self,
        properties: dict[str, Any] | None = None,
        styling: StyleInfo | None = None,
    ) -> "WidgetNode":
        """Copy of this widget with property and styling overrides merged in."""
        return self.model_copy(
            update={
                "properties": self.properties.merged(properties or {}),
                "styling": self.styling.merged(styling),
            }
        )


class WidgetVariant(BaseModel):
    """A recorded usage variation of a reusable widget.

    Attributes:
        name: Variant name given upstream (may be empty).
        properties: Partial property overrides (camelCase keys).
        styling: Partial styling overrides.
    """

    name: str = ""
    properties: dict[str, Any] = Field(default_factory=dict)
    styling: StyleInfo | None = None

    model_config = _INPUT_CONFIG


class ReusableWidgetDefinition(WidgetNode):
    """A widget recognized upstream as recurring.

    Attributes:
        name: Declared widget name.
        variants: Recorded usage variations.
        usage_count: Number of usages found upstream.
        usage_ids: Ids of tree widgets that are usages of this definition.
    """

    name: str
    variants: list[WidgetVariant] = Field(default_factory=list)
    usage_count: int = 0
    usage_ids: list[str] = Field(default_factory=list)

    def variant_widget(self, variant: WidgetVariant) -> WidgetNode:
        """Widget for a recorded variant: base merged with its overrides."""
        return self.with_overrides(variant.properties, variant.styling)


# =============================================================================
# Theme Model
# =============================================================================


class ColorScheme(BaseModel):
    """Theme color roles as hex literals."""

    brightness: Literal["light", "dark"] = "light"
    primary: str | None = None
    on_primary: str | None = None
    secondary: str | None = None
    on_secondary: str | None = None
    error: str | None = None
    on_error: str | None = None
    background: str | None = None
    on_background: str | None = None
    surface: str | None = None
    on_surface: str | None = None
    surface_variant: str | None = None
    on_surface_variant: str | None = None
    outline: str | None = None
    shadow: str | None = None

    model_config = _INPUT_CONFIG


class TextStyle(BaseModel):
    """A named text style of the theme."""

    font_size: Number | None = None
    font_weight: str | None = None
    font_family: str | None = None
    letter_spacing: Number | None = None
    word_spacing: Number | None = None
    height: Number | None = None
    color: str | None = None

    model_config = _INPUT_CONFIG

    @field_validator("font_weight", mode="before")
    @classmethod
    def _normalize_weight(cls, value: Any) -> Any:
        return normalize_font_weight(value)


TEXT_STYLE_NAMES: tuple[str, ...] = (
    "displayLarge",
    "displayMedium",
    "displaySmall",
    "headlineLarge",
    "headlineMedium",
    "headlineSmall",
    "titleLarge",
    "titleMedium",
    "titleSmall",
    "bodyLarge",
    "bodyMedium",
    "bodySmall",
    "labelLarge",
    "labelMedium",
    "labelSmall",
)


class TextTheme(BaseModel):
    """The fifteen text styles of a theme."""

    display_large: TextStyle | None = None
    display_medium: TextStyle | None = None
    display_small: TextStyle | None = None
    headline_large: TextStyle | None = None
    headline_medium: TextStyle | None = None
    headline_small: TextStyle | None = None
    title_large: TextStyle | None = None
    title_medium: TextStyle | None = None
    title_small: TextStyle | None = None
    body_large: TextStyle | None = None
    body_medium: TextStyle | None = None
    body_small: TextStyle | None = None
    label_large: TextStyle | None = None
    label_medium: TextStyle | None = None
    label_small: TextStyle | None = None

    model_config = _INPUT_CONFIG

    def styles(self) -> Iterator[tuple[str, TextStyle]]:
        """Yield (camelCase style name, style) for every defined style."""
        for name, info in TextTheme.model_fields.items():
            style = getattr(self, name)
            if style is not None:
                yield info.alias or name, style


class ThemeModel(BaseModel):
    """Resolved theme extracted upstream."""

    color_scheme: ColorScheme = Field(default_factory=ColorScheme)
    text_theme: TextTheme = Field(default_factory=TextTheme)
    spacing: dict[str, Number] = Field(default_factory=dict)
    border_radius: dict[str, Number] = Field(default_factory=dict)
    brightness: Literal["light", "dark"] | None = None

    model_config = _INPUT_CONFIG


# =============================================================================
# Semantic Validation
# =============================================================================


@dataclass
class ValidationError:
    """Represents a validation error in a widget tree.

    Attributes:
        node_id: ID of the widget where the error occurred.
        message: Human-readable error description.
        error_type: Machine-readable error classification.
    """

    node_id: str
    message: str
    error_type: str


_LEAF_TYPES = {WidgetType.TEXT.value, WidgetType.IMAGE.value}
_FLEX_LAYOUTS = {LayoutType.ROW.value, LayoutType.COLUMN.value, LayoutType.FLEX.value}


def walk(node: WidgetNode) -> Iterator[WidgetNode]:
    """Depth-first, pre-order traversal of a widget tree."""
    yield node
    for child in node.children:
        yield from walk(child)


def _flex_parent(node: WidgetNode) -> bool:
    if node.type in (WidgetType.ROW.value, WidgetType.COLUMN.value):
        return True
    return node.layout is not None and node.layout.type in _FLEX_LAYOUTS


def validate_widget_tree(node: WidgetNode) -> list[ValidationError]:
    """Validate a WidgetNode tree for structural issues.

    Checks for:
    - Duplicate ids anywhere in the tree
    - Text and image widgets with children
    - Text widgets without literal content
    - Positioned children outside a stack
    - Expanded children outside a row or column

    Args:
        node: Root widget to validate.

    Returns:
        List of validation errors (empty if valid).
    """
    errors: list[ValidationError] = []
    seen: set[str] = set()

    def visit(current: WidgetNode, parent: WidgetNode | None) -> None:
        if current.id in seen:
            errors.append(
                ValidationError(current.id, f"Duplicate id: {current.id}", "duplicate_id")
            )
        seen.add(current.id)

        if current.type in _LEAF_TYPES and current.children:
            errors.append(
                ValidationError(
                    current.id,
                    f"{current.type} widgets cannot have children",
                    "leaf_with_children",
                )
            )

        if current.type == WidgetType.TEXT and not current.text_content():
            errors.append(
                ValidationError(current.id, "Text widget has no content", "empty_text")
            )

        if parent is not None:
            positioned = current.properties.is_positioned or current.position is not None
            if positioned and not parent.is_stack:
                errors.append(
                    ValidationError(
                        current.id,
                        "Positioned widget is not a direct child of a stack",
                        "positioned_outside_stack",
                    )
                )
            if current.properties.is_expanded and not _flex_parent(parent):
                errors.append(
                    ValidationError(
                        current.id,
                        "Expanded widget is not a direct child of a row or column",
                        "expanded_outside_flex",
                    )
                )

        for child in current.children:
            visit(child, current)

    visit(node, None)
    return errors


def is_valid(node: WidgetNode) -> bool:
    """Check if a widget tree is valid.

    Args:
        node: Root widget to validate.

    Returns:
        True if valid, False otherwise.
    """
    return len(validate_widget_tree(node)) == 0


__all__ = [
    # Enums
    "MainAxisAlignment",
    "CrossAxisAlignment",
    # Primitives
    "Point",
    "EdgeInsets",
    "BorderRadius",
    "BorderInfo",
    "ShadowInfo",
    "ColorInfo",
    "TypographyInfo",
    "SpacingInfo",
    "StyleInfo",
    "AlignmentInfo",
    "LayoutInfo",
    "PositionInfo",
    "GradientInfo",
    "BoxDecoration",
    # Widgets
    "WidgetProperties",
    "WidgetNode",
    "WidgetVariant",
    "ReusableWidgetDefinition",
    # Theme
    "ColorScheme",
    "TextStyle",
    "TextTheme",
    "ThemeModel",
    "TEXT_STYLE_NAMES",
    # Validation
    "ValidationError",
    "validate_widget_tree",
    "is_valid",
    "walk",
    "normalize_font_weight",
]
