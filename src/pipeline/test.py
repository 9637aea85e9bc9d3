"""Unit tests for the conversion pipeline."""

import pytest

from src.mid import ReusableWidgetDefinition, ThemeModel, WidgetNode
from src.pipeline import ConversionStats, Converter, convert
from src.style import StyleMappingConfig


@pytest.fixture
def usage_tree() -> WidgetNode:
    """A column holding two usages of the PrimaryButton definition."""
    return WidgetNode.model_validate(
        {
            "id": "screen",
            "type": "Column",
            "layout": {"type": "column", "spacing": 12},
            "children": [
                {
                    "id": "btn-1",
                    "type": "ElevatedButton",
                    "properties": {"style": "primary", "flex": 1},
                    "children": [{"id": "btn-1-label", "type": "Text", "properties": {"data": "Buy"}}],
                },
                {
                    "id": "btn-2",
                    "type": "ElevatedButton",
                    "properties": {"style": "primary", "key": "cancel"},
                },
            ],
        }
    )


class TestConversionStats:
    """Tests for ConversionStats."""

    @pytest.mark.unit
    def test_to_dict_keys(self):
        """Stats serialize with camelCase keys."""
        assert list(ConversionStats().to_dict()) == [
            "widgetsFound",
            "widgetsConverted",
            "componentsCreated",
            "variablesCreated",
            "framesCreated",
            "textNodesCreated",
            "instancesCreated",
            "unsupportedWidgets",
            "processingTime",
        ]


class TestConvert:
    """Tests for end-to-end conversion."""

    @pytest.mark.unit
    def test_column_scenario(self, column_widget, sample_theme):
        """Layout, styling and stats flow through one run."""
        result = convert(column_widget, sample_theme)
        root = result.root
        assert result.success
        assert root.auto_layout.layout_mode == "VERTICAL"
        assert root.auto_layout.item_spacing == 8
        assert [c.widget_id for c in root.children] == ["title", "action"]
        title, action = root.children
        assert title.variables[0].variable_id == "Default Typography-headline-large-font-size"
        assert action.variables[0].variable_id == "Default Colors-primary"
        stats = result.stats
        assert stats.widgets_found == 4
        assert stats.widgets_converted == 4
        assert stats.frames_created == 1
        assert stats.text_nodes_created == 2
        assert stats.variables_created == result.tokens.variable_count()
        assert stats.processing_time >= 0

    @pytest.mark.unit
    def test_usages_become_instances(self, usage_tree, button_definition, sample_theme):
        """Widgets listed as usages are replaced by component instances."""
        result = convert(usage_tree, sample_theme, [button_definition])
        [component] = result.components
        first, second = result.root.children
        assert first.type == "INSTANCE"
        assert first.properties.component_id == component.id
        assert first.name == 'Button / Primary "Buy"'
        assert first.properties.layout_grow == 1
        assert second.name == "Button / Primary (cancel)"
        assert result.stats.instances_created == 2
        assert result.stats.components_created == 1
        assert result.stats.widgets_converted == 3
        assert [c.name for c in result.library.categories] == ["Buttons"]

    @pytest.mark.unit
    def test_instance_keeps_stack_placement(self, button_definition):
        """Instances inside a stack keep the lowered position."""
        tree = WidgetNode.model_validate(
            {
                "id": "stack",
                "type": "Stack",
                "children": [
                    {
                        "id": "btn-1",
                        "type": "ElevatedButton",
                        "position": {"right": 10, "bottom": 5, "width": 50, "height": 20},
                    }
                ],
            }
        )
        [instance] = convert(tree, definitions=[button_definition]).root.children
        assert instance.type == "INSTANCE"
        assert instance.properties.x == -60
        assert instance.properties.y == -25
        assert instance.properties.constraints.horizontal == "RIGHT"
        assert instance.properties.width == 50
        assert instance.properties.height == 20

    @pytest.mark.unit
    def test_instance_keeps_positioned_size(self, button_definition):
        """A left/top positioned usage keeps its position and size."""
        tree = WidgetNode.model_validate(
            {
                "id": "stack",
                "type": "Stack",
                "children": [
                    {
                        "id": "btn-1",
                        "type": "ElevatedButton",
                        "position": {"left": 4, "top": 4, "width": 80, "height": 30},
                    }
                ],
            }
        )
        [instance] = convert(tree, definitions=[button_definition]).root.children
        props = instance.properties
        assert (props.x, props.y, props.width, props.height) == (4, 4, 80, 30)

    @pytest.mark.unit
    def test_instance_keeps_fill_sizing(self, usage_tree, button_definition):
        """Flex usages keep the FILL sizing lowering gave them."""
        result = convert(usage_tree, definitions=[button_definition])
        first = result.root.children[0]
        assert first.properties.layout_sizing_vertical == "FILL"

    @pytest.mark.unit
    def test_mixed_variant_values_do_not_abort(self):
        """Variant values that do not fit a typed property become warnings."""
        tree = WidgetNode.model_validate({"id": "root", "type": "Column"})
        card = ReusableWidgetDefinition.model_validate(
            {
                "id": "card-def",
                "type": "Card",
                "name": "InfoCard",
                "properties": {"elevation": 2},
                "variants": [{"properties": {"elevation": "high"}}],
            }
        )
        result = convert(tree, definitions=[card])
        assert result.success
        assert len(result.components[0].variants) == 2
        assert any(w.category == "CONVERSION" for w in result.diagnostics.warnings)

    @pytest.mark.unit
    def test_strict_mode_collects_errors(self, column_widget):
        """Strict unresolved tokens fail the run without raising."""
        config = StyleMappingConfig(fallback_to_direct_values=False)
        result = convert(column_widget, ThemeModel(), config=config)
        assert not result.success
        messages = [e.message for e in result.diagnostics.errors]
        assert "Variable not found for theme path: colorScheme.primary" in messages

    @pytest.mark.unit
    def test_unsupported_widgets(self):
        """Unknown widget types are counted and reported."""
        tree = WidgetNode.model_validate(
            {"id": "root", "type": "Column", "children": [{"id": "x", "type": "FancyThing"}]}
        )
        result = convert(tree)
        assert result.stats.unsupported_widgets == 1
        assert result.stats.frames_created == 2
        [warning] = result.diagnostics.warnings
        assert warning.node_id == "x"
        assert "FancyThing" in warning.message

    @pytest.mark.unit
    def test_theme_issues_reported(self, column_widget):
        """Invalid theme colors surface as warnings."""
        theme = ThemeModel.model_validate({"colorScheme": {"primary": "blue"}})
        result = convert(column_widget, theme)
        assert any(w.category == "THEME" for w in result.diagnostics.warnings)

    @pytest.mark.unit
    def test_environment_config(self, monkeypatch, column_widget, sample_theme):
        """Without an explicit config the environment decides."""
        monkeypatch.setenv("DESIGNGEN_USE_VARIABLES", "false")
        result = convert(column_widget, sample_theme)
        assert all(not node.variables for node in result.root.walk())

    @pytest.mark.unit
    def test_to_dict(self, column_widget, sample_theme):
        """The result serializes to the host interchange shape."""
        data = convert(column_widget, sample_theme).to_dict()
        assert data["success"] is True
        assert data["root"]["autoLayout"]["layoutMode"] == "VERTICAL"
        assert data["stats"]["widgetsFound"] == 4
        assert data["errors"] == []
        assert "collections" in data["variables"]
        assert data["library"]["categories"] == []


class TestConverter:
    """Tests for the reusable Converter."""

    @pytest.mark.unit
    def test_multi_mode_tokens(self, sample_theme):
        """Extra themes add multi-mode collections."""
        dark = ThemeModel.model_validate({"colorScheme": {"primary": "#0D47A1"}})
        converter = Converter(StyleMappingConfig())
        single = converter.build_tokens(sample_theme)
        multi = converter.build_tokens(sample_theme, {"Dark": dark})
        assert multi.variable_count() > single.variable_count()
        primary = multi.get_multi_mode("Default Colors", "primary")
        assert set(primary.values) == {"Default", "Dark"}

    @pytest.mark.unit
    def test_collection_prefix(self, column_widget, sample_theme):
        """The collection prefix names the token collections."""
        config = StyleMappingConfig(collection_prefix="Brand")
        result = Converter(config).convert(column_widget, sample_theme)
        action = result.root.children[1]
        assert action.variables[0].variable_id == "Brand Colors-primary"

    @pytest.mark.unit
    def test_runs_are_independent(self, column_widget):
        """Each run starts its own id counter."""
        converter = Converter(StyleMappingConfig())
        first = converter.convert(column_widget)
        second = converter.convert(column_widget)
        assert first.root.id == second.root.id

