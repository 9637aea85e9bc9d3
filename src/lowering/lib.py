"""Node lowering engine.

Translates a WidgetNode tree into a TargetNodeSpec tree:
- Type dispatch through the schema registry (frame/text/rectangle/component)
- Auto-layout selection from layout hints
- Absolute positioning with z-order for stack children
- Flex/expanded propagation to auto-layout children

Per-run state (the id counter and collected diagnostics) lives in an
explicit LoweringContext so independent runs never share counters.
"""

from __future__ import annotations

from src.core import get_logger
from src.core.errors import ErrorCategory, ErrorCollector, InvalidColorError
from src.ir import (
    BLACK,
    RGB,
    WHITE,
    AutoLayoutSpec,
    AxisAlign,
    AxisSizing,
    Constraint,
    FontName,
    GradientStop,
    LayoutMode,
    NodeProperties,
    Paint,
    TargetNodeSpec,
)
from src.mid import ColorInfo, LayoutInfo, PositionInfo, WidgetNode
from src.schema import LayoutType, NodeType, WidgetType, get_display_name, get_node_type
from src.tokens import map_font_weight

logger = get_logger("designgen.lowering")

DEFAULT_FONT_SIZE = 14
DEFAULT_FONT_FAMILY = "Inter"
NAME_TEXT_LIMIT = 20

FILL_COLOR_PROPERTIES = ("backgroundColor", "color")

_MAIN_AXIS_ALIGN = {
    "center": AxisAlign.CENTER,
    "end": AxisAlign.MAX,
    "spaceBetween": AxisAlign.SPACE_BETWEEN,
}
_CROSS_AXIS_ALIGN = {
    "center": AxisAlign.CENTER,
    "end": AxisAlign.MAX,
}
_TEXT_ALIGN = {"center": "CENTER", "right": "RIGHT", "justify": "JUSTIFIED"}

# alignment -> (x, y, horizontal constraint, vertical constraint)
_STACK_ALIGNMENT: dict[str, tuple[float | None, float | None, Constraint | None, Constraint | None]] = {
    "topLeft": (0, 0, None, None),
    "topCenter": (None, 0, Constraint.CENTER, None),
    "topRight": (None, 0, Constraint.RIGHT, None),
    "centerLeft": (0, None, None, Constraint.CENTER),
    "center": (None, None, Constraint.CENTER, Constraint.CENTER),
    "centerRight": (None, None, Constraint.RIGHT, Constraint.CENTER),
    "bottomLeft": (0, None, None, Constraint.BOTTOM),
    "bottomCenter": (None, None, Constraint.CENTER, Constraint.BOTTOM),
    "bottomRight": (None, None, Constraint.RIGHT, Constraint.BOTTOM),
}


class LoweringContext:
    """Per-run lowering state.

    Attributes:
        diagnostics: Problems found while lowering (invalid literals,
            positioned children outside a stack).
    """

    def __init__(self) -> None:
        self._counter = 0
        self.diagnostics = ErrorCollector()

    def next_id(self, prefix: str = "node_") -> str:
        """Return the next id of this run; ids strictly increase."""
        self._counter += 1
        return f"{prefix}{self._counter}"

    @property
    def issued(self) -> int:
        """Number of ids issued so far."""
        return self._counter


def node_name(widget: WidgetNode) -> str:
    """Display name plus truncated text or key."""
    base = get_display_name(widget.type)
    text = widget.text_content()
    if text:
        suffix = "..." if len(text) > NAME_TEXT_LIMIT else ""
        return f'{base} "{text[:NAME_TEXT_LIMIT]}{suffix}"'
    if widget.properties.key:
        return f"{base} ({widget.properties.key})"
    return base


def main_axis(widget: WidgetNode) -> str | None:
    """Direction children flow in: "horizontal", "vertical" or None."""
    layout = widget.layout
    if layout is not None:
        if layout.type == LayoutType.ROW:
            return "horizontal"
        if layout.type == LayoutType.COLUMN:
            return "vertical"
        if layout.type in (LayoutType.WRAP, LayoutType.FLEX):
            return layout.direction or "horizontal"
        return None
    if widget.type == WidgetType.ROW:
        return "horizontal"
    if widget.type == WidgetType.COLUMN:
        return "vertical"
    return None


def _is_explicitly_positioned(widget: WidgetNode) -> bool:
    props = widget.properties
    return (
        widget.position is not None
        or bool(props.is_positioned)
        or props.positioned is not None
    )


class NodeLowerer:
    """Recursive WidgetNode to TargetNodeSpec transform.

    Example:
        >>> lowerer = NodeLowerer()
        >>> node = lowerer.lower(widget)
        >>> node.type
        'FRAME'
    """

    def __init__(self, context: LoweringContext | None = None):
        self.context = context or LoweringContext()

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def lower(self, widget: WidgetNode) -> TargetNodeSpec:
        """Lower a widget and its subtree."""
        node_type = get_node_type(widget.type)
        if node_type == NodeType.TEXT:
            return self.lower_text(widget)
        if node_type == NodeType.RECTANGLE:
            return self.lower_rectangle(widget)
        if node_type == NodeType.COMPONENT:
            return self.lower_component(widget)
        return self.lower_frame(widget)

    def lower_frame(self, widget: WidgetNode) -> TargetNodeSpec:
        """Lower a structural widget to a frame."""
        return self._build_frame(widget, NodeType.FRAME, node_name(widget))

    def lower_component(self, widget: WidgetNode) -> TargetNodeSpec:
        """Lower a component widget: frame lowering plus a description."""
        display = get_display_name(widget.type)
        node = self._build_frame(widget, NodeType.COMPONENT, f"{display} Component")
        node.properties.description = f"Component generated from {display} widget"
        return node

    def lower_text(self, widget: WidgetNode) -> TargetNodeSpec:
        """Lower a text widget to a text node."""
        typography = widget.styling.typography
        props = self._basic_properties(widget)
        props.characters = widget.text_content() or "Text"
        props.font_size = (typography.font_size if typography else None) or DEFAULT_FONT_SIZE
        props.font_name = FontName(
            family=(typography.font_family if typography else None) or DEFAULT_FONT_FAMILY,
            style=map_font_weight(typography.font_weight if typography else None),
        )
        props.text_align_horizontal = _TEXT_ALIGN.get(widget.properties.text_align or "", "LEFT")
        props.fills = [self._text_fill(widget)]
        return self._node(widget, NodeType.TEXT, props)

    def lower_rectangle(self, widget: WidgetNode) -> TargetNodeSpec:
        """Lower an image or decorative widget to a rectangle."""
        props = self._basic_properties(widget)
        props.fills = self._extract_fills(widget)
        props.strokes = self._extract_strokes(widget)
        props.stroke_weight = widget.styling.borders.width if props.strokes else None
        radius = self._corner_radius(widget)
        if radius > 0:
            props.corner_radius = radius
        return self._node(widget, NodeType.RECTANGLE, props)

    # -------------------------------------------------------------------------
    # Auto Layout
    # -------------------------------------------------------------------------

    def create_auto_layout(self, layout: LayoutInfo) -> AutoLayoutSpec:
        """Build auto-layout parameters from a layout hint."""
        mode = self._layout_mode(layout)
        alignment = layout.alignment
        main = alignment.main_axis if alignment else None
        cross = alignment.cross_axis if alignment else None
        padding = layout.padding
        horizontal = mode == LayoutMode.HORIZONTAL

        primary_fixed = (layout.width if horizontal else layout.height) is not None
        counter_fixed = cross == "stretch" or (
            (layout.height if horizontal else layout.width) is not None
        )
        if mode == LayoutMode.NONE:
            primary_fixed = counter_fixed = False

        return AutoLayoutSpec(
            layout_mode=mode,
            primary_axis_sizing_mode=AxisSizing.FIXED if primary_fixed else AxisSizing.AUTO,
            counter_axis_sizing_mode=AxisSizing.FIXED if counter_fixed else AxisSizing.AUTO,
            primary_axis_align_items=_MAIN_AXIS_ALIGN.get(main or "", AxisAlign.MIN),
            counter_axis_align_items=_CROSS_AXIS_ALIGN.get(cross or "", AxisAlign.MIN),
            padding_left=padding.left if padding else 0,
            padding_right=padding.right if padding else 0,
            padding_top=padding.top if padding else 0,
            padding_bottom=padding.bottom if padding else 0,
            item_spacing=layout.spacing or 0,
        )

    @staticmethod
    def _layout_mode(layout: LayoutInfo) -> LayoutMode:
        if layout.type == LayoutType.ROW:
            return LayoutMode.HORIZONTAL
        if layout.type == LayoutType.COLUMN:
            return LayoutMode.VERTICAL
        if layout.type in (LayoutType.WRAP, LayoutType.FLEX):
            if layout.direction == "vertical":
                return LayoutMode.VERTICAL
            return LayoutMode.HORIZONTAL
        return LayoutMode.NONE

    @staticmethod
    def _apply_layout_bounds(props: NodeProperties, layout: LayoutInfo) -> None:
        if layout.width is not None:
            props.width = layout.width
            props.layout_sizing_horizontal = "FIXED"
        if layout.height is not None:
            props.height = layout.height
            props.layout_sizing_vertical = "FIXED"
        props.min_width = layout.min_width
        props.max_width = layout.max_width
        props.min_height = layout.min_height
        props.max_height = layout.max_height

    # -------------------------------------------------------------------------
    # Frames and Stacks
    # -------------------------------------------------------------------------

    def _build_frame(self, widget: WidgetNode, node_type: NodeType, name: str) -> TargetNodeSpec:
        if widget.is_stack:
            return self._build_stack(widget, node_type, name)

        node = self._node(widget, node_type, self._frame_properties(widget), name)
        axis = main_axis(widget)
        for child in widget.children:
            child_node = self.lower(child)
            self._apply_flex(child_node, child, axis)
            if _is_explicitly_positioned(child):
                self._apply_stray_position(child_node, child, widget)
            node.children.append(child_node)

        layout = widget.layout
        if layout is not None:
            node.auto_layout = self.create_auto_layout(layout)
            self._apply_layout_bounds(node.properties, layout)
            if layout.type == LayoutType.WRAP:
                node.properties.layout_wrap = "WRAP"
                node.properties.item_spacing = layout.spacing or 0
                if layout.spacing:
                    node.properties.counter_axis_spacing = layout.spacing
            logger.debug(
                "Widget %s lowered with layout mode %s",
                widget.id,
                node.auto_layout.layout_mode,
            )
        return node

    def _build_stack(self, widget: WidgetNode, node_type: NodeType, name: str) -> TargetNodeSpec:
        props = self._frame_properties(widget)
        props.layout_mode = LayoutMode.NONE
        node = self._node(widget, node_type, props, name)
        if widget.layout is not None:
            self._apply_layout_bounds(node.properties, widget.layout)

        for index, child in enumerate(widget.children):
            child_node = self.lower(child)
            position = child.resolved_position()
            if position is not None:
                self.apply_absolute_position(child_node, position)
            else:
                self._apply_stack_alignment(child_node, widget.properties.alignment)
            # Layer order follows source order
            child_node.properties.z_index = index
            node.children.append(child_node)
        logger.debug("Widget %s lowered as stack with %d layers", widget.id, len(node.children))
        return node

    def apply_absolute_position(self, node: TargetNodeSpec, position: PositionInfo) -> None:
        """Translate a PositionInfo into x/y/size and one-sided constraints.

        When both opposing edges are given, left and top win.
        """
        props = node.properties
        if position.left is not None:
            props.x = position.left
            props.set_constraint(horizontal=Constraint.LEFT)
            if position.right is not None:
                logger.debug("Node %s pinned left; right offset ignored", node.id)
        elif position.right is not None:
            props.set_constraint(horizontal=Constraint.RIGHT)
            if position.width is not None:
                props.x = -position.right - position.width

        if position.top is not None:
            props.y = position.top
            props.set_constraint(vertical=Constraint.TOP)
            if position.bottom is not None:
                logger.debug("Node %s pinned top; bottom offset ignored", node.id)
        elif position.bottom is not None:
            props.set_constraint(vertical=Constraint.BOTTOM)
            if position.height is not None:
                props.y = -position.bottom - position.height

        if position.width is not None:
            props.width = position.width
        if position.height is not None:
            props.height = position.height

    @staticmethod
    def _apply_stack_alignment(node: TargetNodeSpec, alignment: str | None) -> None:
        x, y, horizontal, vertical = _STACK_ALIGNMENT.get(
            alignment or "", _STACK_ALIGNMENT["topLeft"]
        )
        if x is not None:
            node.properties.x = x
        if y is not None:
            node.properties.y = y
        if horizontal or vertical:
            node.properties.set_constraint(horizontal=horizontal, vertical=vertical)

    def _apply_stray_position(
        self, node: TargetNodeSpec, child: WidgetNode, parent: WidgetNode
    ) -> None:
        position = child.resolved_position()
        if position is not None:
            self.apply_absolute_position(node, position)
        message = (
            f"Positioned widget {child.id} is not inside a stack "
            f"(parent {parent.id} is {parent.type}); offsets applied as-is"
        )
        logger.warning(message)
        self.context.diagnostics.add_warning(message, ErrorCategory.WIDGET, child.id)

    @staticmethod
    def _apply_flex(node: TargetNodeSpec, child: WidgetNode, axis: str | None) -> None:
        props = child.properties
        if props.flex:
            grow = props.flex
        elif props.is_expanded:
            grow = 1
        else:
            return
        if axis == "horizontal":
            node.properties.layout_grow = grow
            node.properties.layout_sizing_horizontal = "FILL"
        elif axis == "vertical":
            node.properties.layout_grow = grow
            node.properties.layout_sizing_vertical = "FILL"

    # -------------------------------------------------------------------------
    # Property Extraction
    # -------------------------------------------------------------------------

    def _node(
        self,
        widget: WidgetNode,
        node_type: NodeType,
        props: NodeProperties,
        name: str | None = None,
    ) -> TargetNodeSpec:
        return TargetNodeSpec(
            id=self.context.next_id(),
            type=node_type,
            name=name or node_name(widget),
            properties=props,
            widget_id=widget.id,
        )

    @staticmethod
    def _basic_properties(widget: WidgetNode) -> NodeProperties:
        return NodeProperties(
            width=widget.properties.width,
            height=widget.properties.height,
            visible=True,
            locked=False,
        )

    def _frame_properties(self, widget: WidgetNode) -> NodeProperties:
        props = self._basic_properties(widget)
        props.fills = self._extract_fills(widget)
        props.strokes = self._extract_strokes(widget)
        if props.strokes:
            props.stroke_weight = widget.styling.borders.width
        radius = self._corner_radius(widget)
        if radius > 0:
            props.corner_radius = radius
        props.clips_content = widget.properties.clip_behavior != "none"
        return props

    def _parse_color(self, color: ColorInfo | str, widget: WidgetNode) -> RGB | None:
        if isinstance(color, ColorInfo):
            value, themed = color.value, color.is_theme_reference
        else:
            value, themed = color, False
        try:
            return RGB.from_hex(value)
        except InvalidColorError as exc:
            # Theme references may carry a symbolic literal; the resolver binds them.
            if not themed:
                self.context.diagnostics.add_warning(
                    exc.to_user_message(), ErrorCategory.STYLE, widget.id
                )
            return None

    def _extract_fills(self, widget: WidgetNode) -> list[Paint]:
        fills: list[Paint] = []
        for color in widget.styling.colors:
            if color.property not in FILL_COLOR_PROPERTIES or color.value == "transparent":
                continue
            rgb = self._parse_color(color, widget)
            if rgb is not None:
                fills.append(Paint.solid(rgb))

        decoration = widget.properties.decoration
        if not fills and decoration is not None:
            if decoration.color:
                rgb = self._parse_color(decoration.color, widget)
                if rgb is not None:
                    fills.append(Paint.solid(rgb))
            if decoration.gradient is not None and decoration.gradient.colors:
                paint = self._gradient_paint(widget)
                if paint is not None:
                    fills.append(paint)

        if not fills:
            fills.append(Paint.solid(WHITE, opacity=0))
        return fills

    def _gradient_paint(self, widget: WidgetNode) -> Paint | None:
        gradient = widget.properties.decoration.gradient
        colors = [self._parse_color(c, widget) for c in gradient.colors]
        if any(c is None for c in colors):
            return None
        count = len(colors)
        stops = gradient.stops or [
            i / (count - 1) if count > 1 else 0 for i in range(count)
        ]
        kind = "GRADIENT_RADIAL" if gradient.type == "radial" else "GRADIENT_LINEAR"
        return Paint(
            type=kind,
            gradient_stops=[
                GradientStop(position=pos, color=rgb) for pos, rgb in zip(stops, colors)
            ],
        )

    def _extract_strokes(self, widget: WidgetNode) -> list[Paint]:
        border = widget.styling.borders
        if border is None or not border.width or border.width <= 0 or not border.color:
            return []
        rgb = self._parse_color(border.color, widget)
        return [Paint.solid(rgb)] if rgb is not None else []

    @staticmethod
    def _corner_radius(widget: WidgetNode) -> float:
        decoration = widget.properties.decoration
        if decoration is not None and decoration.border_radius is not None:
            return decoration.border_radius.top_left or 0
        border = widget.styling.borders
        if border is not None and border.radius is not None:
            return border.radius.top_left or 0
        return 0

    def _text_fill(self, widget: WidgetNode) -> Paint:
        for color in widget.styling.colors:
            if color.property == "color":
                rgb = self._parse_color(color, widget)
                if rgb is not None:
                    return Paint.solid(rgb)
                break
        return Paint.solid(BLACK)


__all__ = [
    "LoweringContext",
    "NodeLowerer",
    "node_name",
    "main_axis",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_FONT_FAMILY",
    "FILL_COLOR_PROPERTIES",
    "NAME_TEXT_LIMIT",
]
