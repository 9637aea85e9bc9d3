"""Unit tests for the MID layer."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.mid import (
    BorderRadius,
    EdgeInsets,
    ReusableWidgetDefinition,
    StyleInfo,
    ThemeModel,
    TypographyInfo,
    WidgetNode,
    WidgetProperties,
    WidgetVariant,
    is_valid,
    normalize_font_weight,
    validate_widget_tree,
    walk,
)
from src.schema import WidgetType


class TestPrimitives:
    """Tests for geometry and style primitives."""

    @pytest.mark.unit
    def test_edge_insets_all(self):
        """EdgeInsets.all fills every side."""
        insets = EdgeInsets.all(8)
        assert (insets.top, insets.right, insets.bottom, insets.left) == (8, 8, 8, 8)

    @pytest.mark.unit
    def test_edge_insets_max_edge(self):
        """max_edge returns the largest side."""
        assert EdgeInsets(top=4, left=12).max_edge() == 12

    @pytest.mark.unit
    def test_border_radius_uniform(self):
        """Uniform radius is detected."""
        assert BorderRadius.circular(8).is_uniform
        assert not BorderRadius(top_left=8).is_uniform

    @pytest.mark.unit
    def test_camel_case_keys(self):
        """Interchange camelCase keys populate snake_case fields."""
        radius = BorderRadius.model_validate({"topLeft": 4, "bottomRight": 2})
        assert radius.top_left == 4
        assert radius.bottom_right == 2

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,expected",
        [(700, "700"), ("w500", "500"), ("FontWeight.w300", "300"), ("bold", "bold")],
    )
    def test_font_weight_normalization(self, raw, expected):
        """Font weights normalize to numeric strings or keywords."""
        assert normalize_font_weight(raw) == expected
        assert TypographyInfo(font_weight=raw).font_weight == expected

    @pytest.mark.unit
    def test_models_are_frozen(self):
        """Input models cannot be mutated after construction."""
        insets = EdgeInsets.all(1)
        with pytest.raises(PydanticValidationError):
            insets.top = 5


class TestWidgetNode:
    """Tests for WidgetNode model."""

    @pytest.mark.unit
    def test_minimal_node(self):
        """Minimal node with defaults."""
        node = WidgetNode(id="root", type="container")
        assert node.type == WidgetType.CONTAINER
        assert node.children == []
        assert node.styling.colors == []
        assert node.layout is None

    @pytest.mark.unit
    def test_alias_resolution(self):
        """Framework names resolve and keep their source spelling."""
        node = WidgetNode.model_validate({"id": "b", "type": "ElevatedButton"})
        assert node.type == WidgetType.BUTTON
        assert node.source_type == "ElevatedButton"
        assert not node.is_unsupported

    @pytest.mark.unit
    def test_unknown_type_becomes_custom(self):
        """Unknown widget names map to custom and are flagged unsupported."""
        node = WidgetNode.model_validate({"id": "x", "type": "Hologram"})
        assert node.type == WidgetType.CUSTOM
        assert node.source_type == "Hologram"
        assert node.is_unsupported

    @pytest.mark.unit
    def test_nested_children(self, column_widget):
        """Nested children are parsed recursively."""
        assert len(column_widget.children) == 2
        assert column_widget.children[0].type == WidgetType.TEXT

    @pytest.mark.unit
    def test_extra_properties_are_preserved(self):
        """Unknown property keys survive as extras."""
        node = WidgetNode.model_validate(
            {"id": "c", "type": "container", "properties": {"tooltip": "hi", "width": 10}}
        )
        assert node.properties.width == 10
        assert node.properties.get("tooltip") == "hi"
        assert node.properties.to_interchange() == {"width": 10, "tooltip": "hi"}

    @pytest.mark.unit
    def test_properties_get_by_alias(self):
        """get() accepts camelCase keys for typed fields."""
        props = WidgetProperties.model_validate({"clipBehavior": "none"})
        assert props.get("clipBehavior") == "none"
        assert props.get("clip_behavior") == "none"
        assert props.get("missing", 3) == 3

    @pytest.mark.unit
    def test_extract_text_recurses(self):
        """extract_text finds text in descendants."""
        node = WidgetNode.model_validate(
            {
                "id": "b",
                "type": "button",
                "children": [{"id": "t", "type": "text", "properties": {"data": "OK"}}],
            }
        )
        assert node.text_content() is None
        assert node.extract_text() == "OK"
        assert node.has_text_content()

    @pytest.mark.unit
    def test_resolved_position_sources(self):
        """Position comes from position, then positioned, then direct offsets."""
        direct = WidgetNode.model_validate(
            {"id": "a", "type": "container", "properties": {"left": 5, "width": 20}}
        )
        assert direct.resolved_position().left == 5
        assert direct.resolved_position().width == 20

        nested = WidgetNode.model_validate(
            {
                "id": "b",
                "type": "container",
                "properties": {"positioned": {"top": 3}, "left": 9},
            }
        )
        assert nested.resolved_position().top == 3
        assert nested.resolved_position().left is None

        assert WidgetNode(id="c", type="text").resolved_position() is None

    @pytest.mark.unit
    def test_with_overrides(self):
        """Overrides merge into a copy without touching the original."""
        node = WidgetNode.model_validate(
            {"id": "a", "type": "button", "properties": {"style": "primary"}}
        )
        copy = node.with_overrides({"disabled": True}, StyleInfo(shadows=[]))
        assert copy.properties.disabled is True
        assert copy.properties.style == "primary"
        assert node.properties.disabled is None

    @pytest.mark.unit
    def test_is_stack(self, stack_widget):
        """Stack widgets and stack layouts both count as stacks."""
        assert stack_widget.is_stack
        layered = WidgetNode.model_validate(
            {"id": "l", "type": "container", "layout": {"type": "stack"}}
        )
        assert layered.is_stack


class TestReusableWidgetDefinition:
    """Tests for reusable widget definitions."""

    @pytest.mark.unit
    def test_definition_fields(self, button_definition):
        """Definitions carry name, variants and usage metadata."""
        assert button_definition.name == "PrimaryButton"
        assert button_definition.usage_count == 5
        assert len(button_definition.variants) == 2

    @pytest.mark.unit
    def test_variant_widget_merges_overrides(self):
        """variant_widget applies variant properties over the base."""
        definition = ReusableWidgetDefinition.model_validate(
            {
                "id": "d",
                "type": "button",
                "name": "Action",
                "properties": {"size": "medium"},
            }
        )
        variant = WidgetVariant(name="Large", properties={"size": "large"})
        assert definition.variant_widget(variant).properties.size == "large"


class TestThemeModel:
    """Tests for the theme model."""

    @pytest.mark.unit
    def test_text_styles_iteration(self, sample_theme):
        """styles() yields camelCase names of defined styles."""
        names = [name for name, _ in sample_theme.text_theme.styles()]
        assert names == ["headlineLarge", "bodyMedium"]

    @pytest.mark.unit
    def test_empty_theme(self):
        """An empty theme is valid."""
        theme = ThemeModel()
        assert list(theme.text_theme.styles()) == []
        assert theme.spacing == {}


class TestValidateWidgetTree:
    """Tests for semantic tree validation."""

    @pytest.mark.unit
    def test_valid_tree(self, column_widget):
        """A well-formed tree has no errors."""
        assert validate_widget_tree(column_widget) == []
        assert is_valid(column_widget)

    @pytest.mark.unit
    def test_duplicate_ids(self):
        """Duplicate ids are reported anywhere in the tree."""
        node = WidgetNode.model_validate(
            {
                "id": "root",
                "type": "column",
                "children": [
                    {"id": "dup", "type": "text", "properties": {"data": "a"}},
                    {
                        "id": "box",
                        "type": "container",
                        "children": [
                            {"id": "dup", "type": "text", "properties": {"data": "b"}}
                        ],
                    },
                ],
            }
        )
        errors = validate_widget_tree(node)
        assert [e.error_type for e in errors] == ["duplicate_id"]

    @pytest.mark.unit
    def test_leaf_with_children(self):
        """Text widgets may not have children."""
        node = WidgetNode.model_validate(
            {
                "id": "t",
                "type": "text",
                "properties": {"data": "x"},
                "children": [{"id": "c", "type": "container"}],
            }
        )
        assert "leaf_with_children" in {e.error_type for e in validate_widget_tree(node)}

    @pytest.mark.unit
    def test_empty_text(self):
        """Text without content is reported."""
        errors = validate_widget_tree(WidgetNode(id="t", type="text"))
        assert errors[0].error_type == "empty_text"

    @pytest.mark.unit
    def test_positioned_outside_stack(self):
        """Positioned children of a column are reported."""
        node = WidgetNode.model_validate(
            {
                "id": "col",
                "type": "column",
                "children": [
                    {"id": "p", "type": "container", "position": {"top": 1}}
                ],
            }
        )
        errors = validate_widget_tree(node)
        assert errors[0].error_type == "positioned_outside_stack"
        assert errors[0].node_id == "p"

    @pytest.mark.unit
    def test_expanded_outside_flex(self):
        """Expanded children of a stack are reported."""
        node = WidgetNode.model_validate(
            {
                "id": "s",
                "type": "stack",
                "children": [
                    {"id": "e", "type": "container", "properties": {"isExpanded": True}}
                ],
            }
        )
        errors = validate_widget_tree(node)
        assert errors[0].error_type == "expanded_outside_flex"

    @pytest.mark.unit
    def test_walk_order(self, column_widget):
        """walk visits nodes depth-first in pre-order."""
        assert [n.id for n in walk(column_widget)] == ["col", "title", "action", "action-label"]
