"""Target node-spec models.

This module defines the Intermediate Representation (IR) produced by the
lowering stage: the abstract design-tool node graph (frames, text nodes,
rectangles, components and instances) together with auto-layout
parameters, variable bindings and component specifications. It is the
contract with the host renderer, which consumes ``to_host_dict`` output.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from src.core.errors import InvalidColorError
from src.schema import NodeType

_IR_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "use_enum_values": True,
}

_HEX_PATTERN = re.compile(r"^(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")


class LayoutMode(str, Enum):
    """Auto-layout direction of a frame."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    NONE = "NONE"


class AxisSizing(str, Enum):
    """Whether an auto-layout axis is fixed or hugs its content."""

    FIXED = "FIXED"
    AUTO = "AUTO"


class AxisAlign(str, Enum):
    """Child alignment along an auto-layout axis."""

    MIN = "MIN"
    CENTER = "CENTER"
    MAX = "MAX"
    SPACE_BETWEEN = "SPACE_BETWEEN"


class Constraint(str, Enum):
    """One-sided pinning of a child inside an absolutely positioned frame."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"
    TOP = "TOP"
    BOTTOM = "BOTTOM"
    CENTER = "CENTER"


class PropertyKind(str, Enum):
    """Kind of a switchable component property."""

    BOOLEAN = "BOOLEAN"
    TEXT = "TEXT"
    VARIANT = "VARIANT"
    INSTANCE_SWAP = "INSTANCE_SWAP"


# =============================================================================
# Paint Primitives
# =============================================================================


class RGB(BaseModel):
    """Color with channels normalized to 0-1."""

    r: float
    g: float
    b: float

    model_config = _IR_CONFIG

    @classmethod
    def from_hex(cls, value: str) -> "RGB":
        """Parse ``#RGB`` or ``#RRGGBB`` (the ``#`` is optional).

        Raises:
            InvalidColorError: If the value is not 3 or 6 hex digits.
        """
        if not isinstance(value, str):
            raise InvalidColorError(str(value))
        digits = value.strip()
        if digits.startswith("#"):
            digits = digits[1:]
        if not _HEX_PATTERN.match(digits):
            raise InvalidColorError(value)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return cls(
            r=int(digits[0:2], 16) / 255,
            g=int(digits[2:4], 16) / 255,
            b=int(digits[4:6], 16) / 255,
        )

    def to_hex(self) -> str:
        return "#" + "".join(
            f"{round(channel * 255):02X}" for channel in (self.r, self.g, self.b)
        )


WHITE = RGB(r=1, g=1, b=1)
BLACK = RGB(r=0, g=0, b=0)


class GradientStop(BaseModel):
    """Color stop of a gradient paint."""

    position: float
    color: RGB

    model_config = _IR_CONFIG


class Paint(BaseModel):
    """Fill or stroke paint."""

    type: str = "SOLID"
    color: RGB | None = None
    opacity: float = 1
    gradient_stops: list[GradientStop] | None = None

    model_config = _IR_CONFIG

    @classmethod
    def solid(cls, color: RGB, opacity: float = 1) -> "Paint":
        return cls(type="SOLID", color=color, opacity=opacity)


class Vector(BaseModel):
    """2D vector."""

    x: float = 0
    y: float = 0

    model_config = _IR_CONFIG


class Effect(BaseModel):
    """Drop shadow effect."""

    type: str = "DROP_SHADOW"
    color: RGB
    offset: Vector = Field(default_factory=Vector)
    radius: float = 0
    spread: float = 0
    visible: bool = True
    blend_mode: str = "NORMAL"

    model_config = _IR_CONFIG


class FontName(BaseModel):
    family: str = "Inter"
    style: str = "Regular"

    model_config = _IR_CONFIG


class Constraints(BaseModel):
    horizontal: Constraint | None = None
    vertical: Constraint | None = None

    model_config = _IR_CONFIG


class LineHeight(BaseModel):
    unit: str = "PERCENT"
    value: float

    model_config = _IR_CONFIG


class LetterSpacing(BaseModel):
    unit: str = "PIXELS"
    value: float

    model_config = _IR_CONFIG


# =============================================================================
# Node Properties
# =============================================================================


class NodeProperties(BaseModel):
    """Closed property struct shared by all node kinds.

    Only the fields relevant to a node's kind are set; unset fields are
    omitted from host output.
    """

    # Geometry
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    min_width: float | None = None
    max_width: float | None = None
    min_height: float | None = None
    max_height: float | None = None
    z_index: int | None = None
    constraints: Constraints | None = None
    visible: bool | None = None
    locked: bool | None = None

    # Paints
    fills: list[Paint] | None = None
    strokes: list[Paint] | None = None
    stroke_weight: float | None = None
    corner_radius: float | None = None
    top_left_radius: float | None = None
    top_right_radius: float | None = None
    bottom_left_radius: float | None = None
    bottom_right_radius: float | None = None
    effects: list[Effect] | None = None

    # Frame and auto-layout child behaviour
    clips_content: bool | None = None
    layout_mode: LayoutMode | None = None
    layout_wrap: str | None = None
    item_spacing: float | None = None
    counter_axis_spacing: float | None = None
    layout_grow: float | None = None
    layout_sizing_horizontal: str | None = None
    layout_sizing_vertical: str | None = None

    # Text
    characters: str | None = None
    font_size: float | None = None
    font_name: FontName | None = None
    text_align_horizontal: str | None = None
    line_height: LineHeight | None = None
    letter_spacing: LetterSpacing | None = None

    # Components and instances
    description: str | None = None
    component_id: str | None = None
    overrides: dict[str, Any] | None = None

    model_config = _IR_CONFIG

    def set_constraint(
        self,
        horizontal: Constraint | None = None,
        vertical: Constraint | None = None,
    ) -> None:
        """Set one or both constraint axes, keeping the other."""
        current = self.constraints or Constraints()
        self.constraints = Constraints(
            horizontal=horizontal or current.horizontal,
            vertical=vertical or current.vertical,
        )


class AutoLayoutSpec(BaseModel):
    """Auto-layout parameters of a frame."""

    layout_mode: LayoutMode = LayoutMode.NONE
    primary_axis_sizing_mode: AxisSizing = AxisSizing.AUTO
    counter_axis_sizing_mode: AxisSizing = AxisSizing.AUTO
    primary_axis_align_items: AxisAlign = AxisAlign.MIN
    counter_axis_align_items: AxisAlign = AxisAlign.MIN
    padding_left: float = 0
    padding_right: float = 0
    padding_top: float = 0
    padding_bottom: float = 0
    item_spacing: float = 0

    model_config = _IR_CONFIG


class VariableBinding(BaseModel):
    """A node property driven by a token rather than a literal.

    Attributes:
        target_property: Bound property (fills, strokes, fontSize, ...).
        variable_id: Id of the variable in the token table.
        variable_alias: ``{collection.name}`` reference string.
    """

    target_property: str
    variable_id: str
    variable_alias: str | None = None

    model_config = _IR_CONFIG


class TargetNodeSpec(BaseModel):
    """A node of the target design graph.

    Attributes:
        id: Per-run generated id (``node_{n}``).
        type: Node kind.
        name: Display name in the host tool.
        properties: Node properties.
        auto_layout: Auto-layout parameters for frames and components.
        variables: Token bindings.
        children: Ordered, owned child nodes.
        widget_id: Id of the widget this node was lowered from.
    """

    id: str | None = None
    type: NodeType
    name: str
    properties: NodeProperties = Field(default_factory=NodeProperties)
    auto_layout: AutoLayoutSpec | None = None
    variables: list[VariableBinding] = Field(default_factory=list)
    children: list["TargetNodeSpec"] = Field(default_factory=list)
    widget_id: str | None = None

    model_config = _IR_CONFIG

    def walk(self) -> Iterator["TargetNodeSpec"]:
        """Depth-first, pre-order traversal."""
        yield self
        for child in self.children:
            yield from child.walk()

    def node_count(self) -> int:
        return sum(1 for _ in self.walk())


# =============================================================================
# Component Specifications
# =============================================================================


class ComponentProperty(BaseModel):
    """A switchable component property."""

    name: str
    type: PropertyKind
    default_value: str | bool
    variant_options: list[str] | None = None

    model_config = _IR_CONFIG


class ComponentVariant(BaseModel):
    """One named configuration of a component."""

    name: str
    properties: dict[str, str | bool | int | float] = Field(default_factory=dict)
    node_spec: TargetNodeSpec

    model_config = _IR_CONFIG


class ComponentDefinition(BaseModel):
    """A reusable component built from a widget definition.

    Attributes:
        id: Per-run component id (``component-{slug}-{n}``).
        name: Inferred display name.
        description: Generated description.
        variants: Synthesized variants.
        properties: Switchable properties.
        node_spec: Lowered base component node.
        base_widget_id: Id of the definition widget.
        source_name: Declared name of the widget definition.
    """

    id: str
    name: str
    description: str = ""
    variants: list[ComponentVariant] = Field(default_factory=list)
    properties: list[ComponentProperty] = Field(default_factory=list)
    node_spec: TargetNodeSpec | None = None
    base_widget_id: str | None = None
    source_name: str | None = None

    model_config = _IR_CONFIG


def to_host_dict(model: BaseModel) -> dict[str, Any]:
    """Dump a model in the host interchange shape (camelCase, no nulls)."""
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


__all__ = [
    # Enums
    "LayoutMode",
    "AxisSizing",
    "AxisAlign",
    "Constraint",
    "PropertyKind",
    # Paint
    "RGB",
    "WHITE",
    "BLACK",
    "GradientStop",
    "Paint",
    "Vector",
    "Effect",
    "FontName",
    "Constraints",
    "LineHeight",
    "LetterSpacing",
    # Nodes
    "NodeProperties",
    "AutoLayoutSpec",
    "VariableBinding",
    "TargetNodeSpec",
    # Components
    "ComponentProperty",
    "ComponentVariant",
    "ComponentDefinition",
    # Helpers
    "to_host_dict",
]
