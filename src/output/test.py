"""Tests for output module."""

import pytest

from src.ir import TargetNodeSpec
from src.output import format_conversion_summary, format_node_tree
from src.pipeline import convert
from src.schema import NodeType


class TestFormatNodeTree:
    """Tests for format_node_tree function."""

    @pytest.mark.unit
    def test_single_node(self):
        """A lone node renders as one line with its type."""
        node = TargetNodeSpec(type=NodeType.FRAME, name="Root")
        assert format_node_tree(node) == "Root [FRAME]"

    @pytest.mark.unit
    def test_connectors(self):
        """Children use box-drawing connectors, last child closes the branch."""
        node = TargetNodeSpec(
            type=NodeType.FRAME,
            name="Root",
            children=[
                TargetNodeSpec(
                    type=NodeType.FRAME,
                    name="Panel",
                    children=[TargetNodeSpec(type=NodeType.RECTANGLE, name="Divider")],
                ),
                TargetNodeSpec(type=NodeType.FRAME, name="Footer"),
            ],
        )
        assert format_node_tree(node).splitlines() == [
            "Root [FRAME]",
            "├── Panel [FRAME]",
            "│   └── Divider [RECTANGLE]",
            "└── Footer [FRAME]",
        ]

    @pytest.mark.unit
    def test_layout_text_and_bindings(self, column_widget, sample_theme):
        """Layout direction, text content and bound variables are shown."""
        lines = format_node_tree(convert(column_widget, sample_theme).root).splitlines()
        assert lines[0] == "Column [FRAME, vertical]"
        assert lines[1] == '├── Text "Welcome back" [TEXT, "Welcome back", 1 bound]'
        assert lines[2].startswith("└── ")

    @pytest.mark.unit
    def test_instance_component(self):
        """Instances point at their component id."""
        node = TargetNodeSpec(type=NodeType.INSTANCE, name="Card")
        node.properties.component_id = "component-card-1"
        assert format_node_tree(node) == "Card [INSTANCE -> component-card-1]"


class TestFormatConversionSummary:
    """Tests for format_conversion_summary function."""

    @pytest.mark.unit
    def test_success_summary(self, column_widget, sample_theme):
        """Successful runs report counters."""
        summary = format_conversion_summary(convert(column_widget, sample_theme))
        assert summary.startswith("Conversion succeeded in ")
        assert "Widgets: 4 found, 4 nodes produced" in summary
        assert "Unsupported widgets: 0" in summary

    @pytest.mark.unit
    def test_components_and_warnings(self, button_definition):
        """Components and diagnostics are listed."""
        from src.mid import WidgetNode

        tree = WidgetNode.model_validate(
            {"id": "root", "type": "Column", "children": [{"id": "x", "type": "FancyThing"}]}
        )
        summary = format_conversion_summary(convert(tree, definitions=[button_definition]))
        assert "- Button / Primary (2 variants)" in summary
        assert "WARNING [WIDGET] Unsupported widget type FancyThing" in summary
