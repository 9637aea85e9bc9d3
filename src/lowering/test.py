"""Unit tests for the node lowering engine."""

import pytest

from src.ir import to_host_dict
from src.lowering import LoweringContext, NodeLowerer, node_name
from src.mid import LayoutInfo, WidgetNode


def _strip_ids(data):
    if isinstance(data, dict):
        return {k: _strip_ids(v) for k, v in data.items() if k != "id"}
    if isinstance(data, list):
        return [_strip_ids(v) for v in data]
    return data


def _shape(node):
    return [_shape(child) for child in node.children]


def _widget_shape(widget):
    return [_widget_shape(child) for child in widget.children]


class TestLoweringContext:
    """Tests for per-run lowering state."""

    @pytest.mark.unit
    def test_ids_strictly_increase(self):
        """Each call returns a new, larger id."""
        context = LoweringContext()
        assert context.next_id() == "node_1"
        assert context.next_id() == "node_2"
        assert context.next_id("component-x-") == "component-x-3"
        assert context.issued == 3

    @pytest.mark.unit
    def test_contexts_are_independent(self):
        """Separate contexts never share counters."""
        first, second = LoweringContext(), LoweringContext()
        first.next_id()
        assert second.next_id() == "node_1"


class TestDispatch:
    """Tests for widget type dispatch."""

    @pytest.mark.unit
    def test_node_kinds(self):
        """Widget types map to their node kinds."""
        lowerer = NodeLowerer()
        assert lowerer.lower(WidgetNode(id="a", type="container")).type == "FRAME"
        assert lowerer.lower(WidgetNode(id="b", type="image")).type == "RECTANGLE"
        assert lowerer.lower(WidgetNode(id="c", type="card")).type == "COMPONENT"
        assert lowerer.lower(WidgetNode(id="d", type="Hologram")).type == "FRAME"

    @pytest.mark.unit
    def test_names(self):
        """Names use truncated text, then key, then the display name."""
        long_text = WidgetNode.model_validate(
            {"id": "t", "type": "text", "properties": {"data": "A" * 25}}
        )
        assert node_name(long_text) == 'Text "' + "A" * 20 + '..."'
        keyed = WidgetNode.model_validate(
            {"id": "k", "type": "container", "properties": {"key": "header"}}
        )
        assert node_name(keyed) == "Container (header)"
        assert node_name(WidgetNode(id="r", type="row")) == "Row"


class TestFrameLowering:
    """Tests for frames and auto layout."""

    @pytest.mark.unit
    def test_column_scenario(self):
        """A spaced, padded column lowers to a vertical auto-layout frame."""
        widget = WidgetNode.model_validate(
            {
                "id": "col",
                "type": "column",
                "layout": {
                    "type": "column",
                    "spacing": 8,
                    "padding": {"top": 16, "right": 16, "bottom": 16, "left": 16},
                },
                "children": [
                    {"id": "a", "type": "text", "properties": {"data": "First"}},
                    {"id": "b", "type": "text", "properties": {"data": "Second"}},
                ],
            }
        )
        node = NodeLowerer().lower(widget)
        assert node.type == "FRAME"
        assert node.auto_layout.layout_mode == "VERTICAL"
        assert node.auto_layout.item_spacing == 8
        assert node.auto_layout.padding_top == 16
        assert node.auto_layout.padding_left == 16
        assert [c.properties.characters for c in node.children] == ["First", "Second"]

    @pytest.mark.unit
    def test_alignment_and_sizing(self):
        """Alignment enums map to axis alignment; stretch fixes the counter axis."""
        layout = LayoutInfo.model_validate(
            {
                "type": "row",
                "width": 200,
                "alignment": {"mainAxis": "spaceBetween", "crossAxis": "stretch"},
            }
        )
        spec = NodeLowerer().create_auto_layout(layout)
        assert spec.layout_mode == "HORIZONTAL"
        assert spec.primary_axis_align_items == "SPACE_BETWEEN"
        assert spec.counter_axis_align_items == "MIN"
        assert spec.primary_axis_sizing_mode == "FIXED"
        assert spec.counter_axis_sizing_mode == "FIXED"

    @pytest.mark.unit
    def test_no_layout_no_auto_layout(self):
        """Frames without layout info get no auto layout."""
        node = NodeLowerer().lower(WidgetNode(id="c", type="container"))
        assert node.auto_layout is None

    @pytest.mark.unit
    def test_layout_bounds(self):
        """Fixed sizes and bounds from the layout are applied to the frame."""
        widget = WidgetNode.model_validate(
            {"id": "c", "type": "column", "layout": {"type": "column", "height": 300, "minWidth": 50}}
        )
        node = NodeLowerer().lower(widget)
        assert node.properties.height == 300
        assert node.properties.layout_sizing_vertical == "FIXED"
        assert node.properties.min_width == 50
        assert node.auto_layout.primary_axis_sizing_mode == "FIXED"

    @pytest.mark.unit
    def test_wrap_layout(self):
        """Wrap layouts set wrapping and both spacings."""
        widget = WidgetNode.model_validate(
            {"id": "w", "type": "container", "layout": {"type": "wrap", "spacing": 6}}
        )
        node = NodeLowerer().lower(widget)
        assert node.auto_layout.layout_mode == "HORIZONTAL"
        assert node.properties.layout_wrap == "WRAP"
        assert node.properties.counter_axis_spacing == 6

    @pytest.mark.unit
    def test_frame_paints(self):
        """Background colors, borders and radius become paints."""
        widget = WidgetNode.model_validate(
            {
                "id": "box",
                "type": "container",
                "properties": {"clipBehavior": "none"},
                "styling": {
                    "colors": [{"property": "backgroundColor", "value": "#FF5733"}],
                    "borders": {
                        "width": 2,
                        "color": "#000",
                        "radius": {"topLeft": 6, "topRight": 6, "bottomLeft": 6, "bottomRight": 6},
                    },
                },
            }
        )
        props = NodeLowerer().lower(widget).properties
        assert props.fills[0].color.r == pytest.approx(1.0)
        assert props.fills[0].opacity == 1
        assert props.strokes[0].color.to_hex() == "#000000"
        assert props.stroke_weight == 2
        assert props.corner_radius == 6
        assert props.clips_content is False

    @pytest.mark.unit
    def test_default_transparent_fill(self):
        """Frames without colors get a transparent white fill."""
        props = NodeLowerer().lower(WidgetNode(id="c", type="container")).properties
        assert len(props.fills) == 1
        assert props.fills[0].opacity == 0
        assert props.clips_content is True

    @pytest.mark.unit
    def test_invalid_color_recorded(self):
        """Malformed literal colors are skipped and recorded."""
        widget = WidgetNode.model_validate(
            {
                "id": "bad",
                "type": "container",
                "styling": {"colors": [{"property": "backgroundColor", "value": "#ZZZ"}]},
            }
        )
        lowerer = NodeLowerer()
        node = lowerer.lower(widget)
        assert node.properties.fills[0].opacity == 0
        records = lowerer.context.diagnostics.records
        assert len(records) == 1
        assert records[0].node_id == "bad"
        assert "Invalid hex color format" in records[0].message

    @pytest.mark.unit
    def test_theme_color_with_symbolic_literal(self):
        """Theme references with non-hex literals are left to the resolver."""
        widget = WidgetNode.model_validate(
            {
                "id": "t",
                "type": "container",
                "styling": {
                    "colors": [
                        {
                            "property": "backgroundColor",
                            "value": "Theme.of(context).primaryColor",
                            "isThemeReference": True,
                            "themePath": "colorScheme.primary",
                        }
                    ]
                },
            }
        )
        lowerer = NodeLowerer()
        lowerer.lower(widget)
        assert lowerer.context.diagnostics.records == []

    @pytest.mark.unit
    def test_gradient_decoration(self):
        """Decoration gradients become gradient paints."""
        widget = WidgetNode.model_validate(
            {
                "id": "g",
                "type": "container",
                "properties": {
                    "decoration": {"gradient": {"colors": ["#000000", "#FFFFFF"]}}
                },
            }
        )
        paint = NodeLowerer().lower(widget).properties.fills[0]
        assert paint.type == "GRADIENT_LINEAR"
        assert [s.position for s in paint.gradient_stops] == [0, 1]


class TestFlex:
    """Tests for flex and expanded children."""

    @pytest.mark.unit
    def test_flex_in_row(self):
        """Flex children grow horizontally in a row."""
        widget = WidgetNode.model_validate(
            {
                "id": "r",
                "type": "row",
                "layout": {"type": "row"},
                "children": [{"id": "c", "type": "container", "properties": {"flex": 2}}],
            }
        )
        child = NodeLowerer().lower(widget).children[0]
        assert child.properties.layout_grow == 2
        assert child.properties.layout_sizing_horizontal == "FILL"

    @pytest.mark.unit
    def test_expanded_defaults_to_one(self):
        """Expanded children without flex grow by 1 on the column axis."""
        widget = WidgetNode.model_validate(
            {
                "id": "c",
                "type": "column",
                "children": [{"id": "e", "type": "Expanded", "properties": {"isExpanded": True}}],
            }
        )
        child = NodeLowerer().lower(widget).children[0]
        assert child.properties.layout_grow == 1
        assert child.properties.layout_sizing_vertical == "FILL"


class TestStackLowering:
    """Tests for absolute positioning in stacks."""

    @pytest.mark.unit
    def test_right_bottom_back_computation(self):
        """Right/bottom offsets with size back-compute x and y."""
        widget = WidgetNode.model_validate(
            {
                "id": "s",
                "type": "stack",
                "children": [
                    {
                        "id": "p",
                        "type": "container",
                        "position": {"right": 10, "bottom": 5, "width": 50, "height": 20},
                    }
                ],
            }
        )
        child = NodeLowerer().lower(widget).children[0]
        assert child.properties.x == -60
        assert child.properties.y == -25
        assert child.properties.constraints.horizontal == "RIGHT"
        assert child.properties.constraints.vertical == "BOTTOM"

    @pytest.mark.unit
    def test_stack_frame(self, stack_widget):
        """Stacks disable auto layout and keep source order as z-order."""
        node = NodeLowerer().lower(stack_widget)
        assert node.auto_layout is None
        assert node.properties.layout_mode == "NONE"
        assert [c.properties.z_index for c in node.children] == [0, 1, 2]
        background, badge, label = node.children
        assert (background.properties.x, background.properties.y) == (0, 0)
        assert badge.properties.x == -60
        assert badge.properties.y == 10
        assert label.properties.x == 8
        assert label.properties.constraints.vertical == "BOTTOM"

    @pytest.mark.unit
    def test_overconstrained_prefers_left_and_top(self):
        """Opposing edges resolve to left/top precedence."""
        widget = WidgetNode.model_validate(
            {
                "id": "s",
                "type": "stack",
                "children": [
                    {
                        "id": "p",
                        "type": "container",
                        "position": {"left": 4, "right": 10, "top": 2, "bottom": 3, "width": 30},
                    }
                ],
            }
        )
        child = NodeLowerer().lower(widget).children[0]
        assert child.properties.x == 4
        assert child.properties.y == 2
        assert child.properties.constraints.horizontal == "LEFT"
        assert child.properties.constraints.vertical == "TOP"
        assert child.properties.width == 30

    @pytest.mark.unit
    def test_stack_alignment(self):
        """Non-positioned children follow the stack alignment."""
        widget = WidgetNode.model_validate(
            {
                "id": "s",
                "type": "stack",
                "properties": {"alignment": "bottomRight"},
                "children": [{"id": "c", "type": "container"}],
            }
        )
        child = NodeLowerer().lower(widget).children[0]
        assert child.properties.constraints.horizontal == "RIGHT"
        assert child.properties.constraints.vertical == "BOTTOM"

    @pytest.mark.unit
    def test_positioned_outside_stack_warns(self):
        """Positioned children of a non-stack keep offsets with a warning."""
        widget = WidgetNode.model_validate(
            {
                "id": "col",
                "type": "column",
                "children": [{"id": "p", "type": "container", "position": {"top": 7}}],
            }
        )
        lowerer = NodeLowerer()
        child = lowerer.lower(widget).children[0]
        assert child.properties.y == 7
        warnings = lowerer.context.diagnostics.warnings
        assert len(warnings) == 1
        assert warnings[0].node_id == "p"


class TestTextAndComponents:
    """Tests for text and component lowering."""

    @pytest.mark.unit
    def test_text_defaults(self):
        """Text without styling uses defaults."""
        node = NodeLowerer().lower(
            WidgetNode.model_validate({"id": "t", "type": "text", "properties": {"data": "Hi"}})
        )
        props = node.properties
        assert props.characters == "Hi"
        assert props.font_size == 14
        assert props.font_name.family == "Inter"
        assert props.font_name.style == "Regular"
        assert props.text_align_horizontal == "LEFT"
        assert props.fills[0].color.to_hex() == "#000000"

    @pytest.mark.unit
    def test_text_styling(self):
        """Typography and alignment are read from the widget."""
        widget = WidgetNode.model_validate(
            {
                "id": "t",
                "type": "text",
                "properties": {"text": "Title", "textAlign": "center"},
                "styling": {
                    "typography": {"fontSize": 24, "fontWeight": 700, "fontFamily": "Roboto"},
                    "colors": [{"property": "color", "value": "#FFFFFF"}],
                },
            }
        )
        props = NodeLowerer().lower(widget).properties
        assert props.font_size == 24
        assert props.font_name.style == "Bold"
        assert props.font_name.family == "Roboto"
        assert props.text_align_horizontal == "CENTER"
        assert props.fills[0].color.to_hex() == "#FFFFFF"

    @pytest.mark.unit
    def test_component_description(self, column_widget):
        """Component widgets lower to components with a description."""
        button = NodeLowerer().lower(column_widget).children[1]
        assert button.type == "COMPONENT"
        assert button.properties.description == "Component generated from Button widget"
        assert button.children[0].properties.characters == "Continue"

    @pytest.mark.unit
    def test_component_auto_layout(self):
        """Component lowering includes auto layout."""
        widget = WidgetNode.model_validate(
            {"id": "b", "type": "button", "layout": {"type": "row", "spacing": 4}}
        )
        node = NodeLowerer().lower(widget)
        assert node.auto_layout.layout_mode == "HORIZONTAL"


class TestLoweringInvariants:
    """Tests for shape preservation and idempotence."""

    @pytest.mark.unit
    def test_shape_preserved(self, column_widget, stack_widget):
        """Lowered trees have the widget tree's shape."""
        for widget in (column_widget, stack_widget):
            assert _shape(NodeLowerer().lower(widget)) == _widget_shape(widget)

    @pytest.mark.unit
    def test_idempotent_modulo_ids(self, column_widget):
        """Lowering twice with fresh contexts gives equal trees up to ids."""
        first = to_host_dict(NodeLowerer().lower(column_widget))
        second = to_host_dict(NodeLowerer(LoweringContext()).lower(column_widget))
        assert _strip_ids(first) == _strip_ids(second)

    @pytest.mark.unit
    def test_ids_unique(self, column_widget):
        """Every node gets a distinct id."""
        node = NodeLowerer().lower(column_widget)
        ids = [n.id for n in node.walk()]
        assert len(ids) == len(set(ids))
