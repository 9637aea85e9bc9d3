"""Unit tests for IR models."""

import pytest

from src.core.errors import InvalidColorError
from src.ir import (
    RGB,
    AutoLayoutSpec,
    ComponentProperty,
    Constraint,
    LayoutMode,
    NodeProperties,
    Paint,
    PropertyKind,
    TargetNodeSpec,
    VariableBinding,
    to_host_dict,
)
from src.schema import NodeType


class TestRGB:
    """Tests for hex color parsing."""

    @pytest.mark.unit
    def test_six_digit_hex(self):
        """#FF5733 converts to normalized channels."""
        color = RGB.from_hex("#FF5733")
        assert color.r == pytest.approx(1.0)
        assert color.g == pytest.approx(0.341, abs=1e-3)
        assert color.b == pytest.approx(0.2, abs=1e-3)

    @pytest.mark.unit
    def test_three_digit_hex_without_hash(self):
        """Short hex expands each digit."""
        color = RGB.from_hex("f0a")
        assert (color.r, color.g, color.b) == (1.0, 0.0, pytest.approx(0.667, abs=1e-3))

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["#FF57", "#GGGGGG", "", "#1234567", "blue"])
    def test_malformed_hex_raises(self, value):
        """Wrong length or non-hex characters raise InvalidColorError."""
        with pytest.raises(InvalidColorError) as exc_info:
            RGB.from_hex(value)
        assert "Invalid hex color format" in str(exc_info.value)

    @pytest.mark.unit
    def test_invalid_color_is_value_error(self):
        """InvalidColorError can be caught as ValueError."""
        with pytest.raises(ValueError):
            RGB.from_hex("#XYZ")

    @pytest.mark.unit
    def test_to_hex(self):
        """to_hex reverses from_hex."""
        assert RGB.from_hex("#2196f3").to_hex() == "#2196F3"


class TestNodeProperties:
    """Tests for node properties."""

    @pytest.mark.unit
    def test_set_constraint_keeps_other_axis(self):
        """Setting one axis preserves the other."""
        props = NodeProperties()
        props.set_constraint(horizontal=Constraint.RIGHT)
        props.set_constraint(vertical=Constraint.BOTTOM)
        assert props.constraints.horizontal == "RIGHT"
        assert props.constraints.vertical == "BOTTOM"

    @pytest.mark.unit
    def test_host_dict_is_camel_case_without_nulls(self):
        """Host output uses camelCase and drops unset fields."""
        props = NodeProperties(
            fills=[Paint.solid(RGB(r=1, g=0, b=0))],
            clips_content=True,
            corner_radius=4,
        )
        data = to_host_dict(props)
        assert data == {
            "fills": [{"type": "SOLID", "color": {"r": 1.0, "g": 0.0, "b": 0.0}, "opacity": 1.0}],
            "cornerRadius": 4.0,
            "clipsContent": True,
        }


class TestTargetNodeSpec:
    """Tests for TargetNodeSpec model."""

    @pytest.mark.unit
    def test_walk_and_count(self):
        """walk is pre-order and node_count covers the tree."""
        tree = TargetNodeSpec(
            type=NodeType.FRAME,
            name="Root",
            children=[
                TargetNodeSpec(
                    type=NodeType.FRAME,
                    name="A",
                    children=[TargetNodeSpec(type=NodeType.TEXT, name="A1")],
                ),
                TargetNodeSpec(type=NodeType.TEXT, name="B"),
            ],
        )
        assert [n.name for n in tree.walk()] == ["Root", "A", "A1", "B"]
        assert tree.node_count() == 4

    @pytest.mark.unit
    def test_host_dict(self):
        """Auto layout and bindings dump with camelCase keys."""
        node = TargetNodeSpec(
            type=NodeType.FRAME,
            name="Column",
            auto_layout=AutoLayoutSpec(layout_mode=LayoutMode.VERTICAL, item_spacing=8),
            variables=[
                VariableBinding(
                    target_property="fills",
                    variable_id="Default Colors-primary",
                    variable_alias="{Default Colors.primary}",
                )
            ],
        )
        data = to_host_dict(node)
        assert data["type"] == "FRAME"
        assert data["autoLayout"]["layoutMode"] == "VERTICAL"
        assert data["autoLayout"]["itemSpacing"] == 8
        assert data["variables"][0]["targetProperty"] == "fills"
        assert "id" not in data


class TestComponentProperty:
    """Tests for component property specs."""

    @pytest.mark.unit
    def test_variant_property(self):
        """Variant properties carry options."""
        prop = ComponentProperty(
            name="Size",
            type=PropertyKind.VARIANT,
            default_value="medium",
            variant_options=["small", "medium", "large"],
        )
        data = to_host_dict(prop)
        assert data == {
            "name": "Size",
            "type": "VARIANT",
            "defaultValue": "medium",
            "variantOptions": ["small", "medium", "large"],
        }
