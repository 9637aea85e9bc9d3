"""Unit tests for the Schema module."""

import pytest

from src.schema import (
    WIDGET_REGISTRY,
    LibraryCategory,
    NodeType,
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


class TestWidgetRegistry:
    """Tests for WIDGET_REGISTRY completeness."""

    @pytest.mark.unit
    def test_all_widget_types_registered(self):
        """Every WidgetType has metadata in registry."""
        for wt in WidgetType:
            assert wt in WIDGET_REGISTRY, f"Missing metadata for {wt}"

    @pytest.mark.unit
    def test_aliases_are_lowercase_and_unique(self):
        """Aliases are lowercase and never claimed by two types."""
        seen: set[str] = set()
        for meta in WIDGET_REGISTRY.values():
            for alias in meta.aliases:
                assert alias == alias.lower()
                assert alias not in seen, f"Duplicate alias {alias}"
                seen.add(alias)

    @pytest.mark.unit
    def test_meta_to_dict(self):
        """WidgetMeta converts to dictionary correctly."""
        data = get_widget_meta(WidgetType.BUTTON).to_dict()
        assert data["type"] == "button"
        assert data["node_type"] == "COMPONENT"
        assert data["category"] == "Buttons"
        assert "elevatedbutton" in data["aliases"]


class TestNodeTypeDispatch:
    """Tests for the widget to node type table."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "widget_type",
        ["container", "row", "column", "stack", "scaffold", "custom"],
    )
    def test_frame_types(self, widget_type):
        """Structural widgets lower to frames."""
        assert get_node_type(widget_type) == NodeType.FRAME

    @pytest.mark.unit
    def test_leaf_and_component_types(self):
        """Text, image and component widgets map to their node kinds."""
        assert get_node_type(WidgetType.TEXT) == NodeType.TEXT
        assert get_node_type(WidgetType.IMAGE) == NodeType.RECTANGLE
        assert get_node_type(WidgetType.BUTTON) == NodeType.COMPONENT
        assert get_node_type(WidgetType.CARD) == NodeType.COMPONENT
        assert get_node_type(WidgetType.APPBAR) == NodeType.COMPONENT

    @pytest.mark.unit
    def test_unknown_type_falls_back_to_frame(self):
        """Unregistered values fall back to FRAME."""
        assert get_node_type("hologram") == NodeType.FRAME

    @pytest.mark.unit
    def test_display_names(self):
        """Display names are used for node naming."""
        assert get_display_name(WidgetType.APPBAR) == "AppBar"
        assert get_display_name("button") == "Button"
        assert get_display_name("hologram") == "hologram"

    @pytest.mark.unit
    def test_default_categories(self):
        """Each widget type has a default library category."""
        assert get_widget_category("button") == LibraryCategory.BUTTONS
        assert get_widget_category("text") == LibraryCategory.TYPOGRAPHY
        assert get_widget_category("hologram") == LibraryCategory.COMPONENTS


class TestAliasResolution:
    """Tests for alias resolution."""

    @pytest.mark.unit
    def test_canonical_values(self):
        """Canonical values resolve to themselves."""
        assert resolve_alias("column") == WidgetType.COLUMN

    @pytest.mark.unit
    def test_framework_names(self):
        """Framework widget names resolve case-insensitively."""
        assert resolve_alias("ElevatedButton") == WidgetType.BUTTON
        assert resolve_alias("CupertinoButton") == WidgetType.BUTTON
        assert resolve_alias("CupertinoNavigationBar") == WidgetType.APPBAR
        assert resolve_alias("  Expanded ") == WidgetType.CUSTOM

    @pytest.mark.unit
    def test_unknown_alias(self):
        """Unknown aliases return None."""
        assert resolve_alias("Hologram") is None
        assert validate_widget_type("Hologram") is None


class TestValidateWidgetDict:
    """Tests for raw dictionary validation."""

    @pytest.mark.unit
    def test_valid_tree(self):
        """A well-formed tree has no errors."""
        data = {
            "id": "root",
            "type": "Column",
            "layout": {"type": "column", "spacing": 8},
            "children": [
                {"id": "a", "type": "Text"},
                {"id": "b", "type": "ElevatedButton"},
            ],
        }
        assert validate_widget_dict(data) == []
        assert is_valid_widget_dict(data)

    @pytest.mark.unit
    def test_missing_fields(self):
        """Missing id and type are both reported."""
        errors = validate_widget_dict({})
        assert {e.error_type for e in errors} == {"missing_field"}
        assert len(errors) == 2

    @pytest.mark.unit
    def test_invalid_type_and_layout(self):
        """Unknown widget and layout types are reported."""
        errors = validate_widget_dict(
            {"id": "x", "type": "Hologram", "layout": {"type": "grid"}}
        )
        assert [e.error_type for e in errors] == ["invalid_enum", "invalid_enum"]
        assert errors[1].path == "root.layout"

    @pytest.mark.unit
    def test_duplicate_sibling_ids(self):
        """Duplicate sibling ids are reported with their path."""
        errors = validate_widget_dict(
            {
                "id": "root",
                "type": "row",
                "children": [
                    {"id": "dup", "type": "text"},
                    {"id": "dup", "type": "text"},
                ],
            }
        )
        assert len(errors) == 1
        assert errors[0].error_type == "duplicate_id"
        assert errors[0].path == "root.children[1]"

    @pytest.mark.unit
    def test_non_object_child(self):
        """Children must be objects."""
        errors = validate_widget_dict({"id": "r", "type": "row", "children": [3]})
        assert errors[0].error_type == "invalid_type"


class TestSchemaExport:
    """Tests for schema export functions."""

    @pytest.mark.unit
    def test_export_json_schema(self):
        """JSON schema exposes camelCase widget fields."""
        schema = export_json_schema()
        # Pydantic v2 uses $defs with a $ref at root for recursive models
        assert "$defs" in schema
        widget_schema = schema["$defs"]["WidgetNode"]
        assert "children" in widget_schema["properties"]
        assert "styling" in widget_schema["properties"]

    @pytest.mark.unit
    def test_export_enum_schema(self):
        """Enum schema covers every widget type."""
        schema = export_widget_enum_schema()
        assert set(schema) == {wt.value for wt in WidgetType}
