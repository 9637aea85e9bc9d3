"""Unit tests for the style resolver."""

import pytest

from src.ir import AutoLayoutSpec, NodeProperties, TargetNodeSpec
from src.lowering import NodeLowerer
from src.mid import StyleInfo, ThemeModel, WidgetNode
from src.schema import NodeType
from src.style import StyleMappingConfig, StyleResolver, StyleResult
from src.tokens import TokenTable


def _frame(auto_layout=None):
    return TargetNodeSpec(
        type=NodeType.FRAME, name="Frame", properties=NodeProperties(), auto_layout=auto_layout
    )


def _text():
    return TargetNodeSpec(type=NodeType.TEXT, name="Text", properties=NodeProperties())


def _themed_background(path="colorScheme.tertiary", value="#FF5733"):
    return StyleInfo.model_validate(
        {
            "colors": [
                {
                    "property": "backgroundColor",
                    "value": value,
                    "isThemeReference": True,
                    "themePath": path,
                }
            ]
        }
    )


class TestStyleMappingConfig:
    """Tests for StyleMappingConfig."""

    @pytest.mark.unit
    def test_defaults(self):
        """Defaults enable variables with literal fallback."""
        config = StyleMappingConfig()
        assert config.to_dict() == {
            "use_variables": True,
            "fallback_to_direct_values": True,
            "collection_prefix": "Default",
            "prefer_multi_mode": False,
        }

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch):
        """Environment variables configure the resolver."""
        monkeypatch.setenv("DESIGNGEN_FALLBACK_TO_DIRECT_VALUES", "no")
        monkeypatch.setenv("DESIGNGEN_COLLECTION_PREFIX", "Brand")
        config = StyleMappingConfig.from_environment(use_variables=False)
        assert config.fallback_to_direct_values is False
        assert config.collection_prefix == "Brand"
        assert config.use_variables is False

    @pytest.mark.unit
    def test_updated(self):
        """updated returns a modified copy."""
        config = StyleMappingConfig()
        strict = config.updated(fallback_to_direct_values=False)
        assert strict.fallback_to_direct_values is False
        assert config.fallback_to_direct_values is True


class TestStyleResult:
    """Tests for StyleResult."""

    @pytest.mark.unit
    def test_merge_marks_failure(self):
        """Merging a result with errors fails the target."""
        target = StyleResult(applied_properties=["fills"])
        target.merge(StyleResult(success=False, errors=["boom"], warnings=["w"]))
        assert not target.success
        assert target.errors == ["boom"]
        assert target.to_dict()["appliedProperties"] == ["fills"]


class TestColorResolution:
    """Tests for token-vs-literal color resolution."""

    @pytest.mark.unit
    def test_token_hit_binds_variable(self, sample_theme):
        """A resolvable theme reference becomes a binding without a literal fill."""
        resolver = StyleResolver(TokenTable.from_theme(sample_theme))
        node = _frame()
        result = resolver.apply_styles(node, _themed_background("colorScheme.primary"))
        assert result.success
        assert result.applied_properties == ["backgroundColor"]
        binding = result.variable_bindings[0]
        assert binding.target_property == "fills"
        assert binding.variable_id == "Default Colors-primary"
        assert binding.variable_alias == "{Default Colors.primary}"
        assert node.variables == result.variable_bindings
        assert node.properties.fills == []

    @pytest.mark.unit
    def test_token_fallback(self, sample_theme):
        """A missing token falls back to the literal with one warning."""
        resolver = StyleResolver(TokenTable.from_theme(sample_theme))
        node = _frame()
        result = resolver.apply_styles(node, _themed_background())
        assert result.success
        assert len(result.warnings) == 1
        assert "Variable not found" in result.warnings[0]
        assert len(node.properties.fills) == 1
        assert node.properties.fills[0].color.to_hex() == "#FF5733"

    @pytest.mark.unit
    def test_token_strict_mode(self, sample_theme):
        """Strict mode records one error and applies no fill."""
        config = StyleMappingConfig(fallback_to_direct_values=False)
        resolver = StyleResolver(TokenTable.from_theme(sample_theme), config)
        node = _frame()
        result = resolver.apply_styles(node, _themed_background())
        assert not result.success
        assert result.errors == ["Variable not found for theme path: colorScheme.tertiary"]
        assert not node.properties.fills

    @pytest.mark.unit
    def test_variables_disabled(self, sample_theme):
        """With variables off, theme references apply literals silently."""
        config = StyleMappingConfig(use_variables=False)
        resolver = StyleResolver(TokenTable.from_theme(sample_theme), config)
        node = _frame()
        result = resolver.apply_styles(node, _themed_background("colorScheme.primary"))
        assert result.warnings == []
        assert result.variable_bindings == []
        assert node.properties.fills[0].color.to_hex() == "#FF5733"

    @pytest.mark.unit
    def test_prefer_multi_mode(self, sample_theme):
        """Multi-mode tokens are preferred when configured."""
        table = TokenTable.from_theme(sample_theme)
        dark = ThemeModel.model_validate({"colorScheme": {"primary": "#111111"}})
        table.add_multi_mode([sample_theme, dark], ["Light", "Dark"], "Default")
        config = StyleMappingConfig(prefer_multi_mode=True)
        result = StyleResolver(table, config).apply_styles(
            _frame(), _themed_background("colorScheme.primary")
        )
        assert result.variable_bindings[0].variable_id == "multimode-Default Colors-primary"

    @pytest.mark.unit
    def test_invalid_literal_is_error(self):
        """Malformed literal colors are hard errors; other properties continue."""
        styling = StyleInfo.model_validate(
            {
                "colors": [
                    {"property": "backgroundColor", "value": "#12345"},
                    {"property": "borderColor", "value": "#00FF00"},
                ]
            }
        )
        node = _frame()
        result = StyleResolver().apply_styles(node, styling)
        assert not result.success
        assert result.errors == [
            "Failed to apply color backgroundColor: Invalid hex color format: #12345"
        ]
        assert node.properties.strokes[0].color.to_hex() == "#00FF00"

    @pytest.mark.unit
    def test_styles_replace_lowered_paints(self):
        """Applying styles after lowering does not duplicate fills."""
        widget = WidgetNode.model_validate(
            {
                "id": "c",
                "type": "container",
                "styling": {"colors": [{"property": "backgroundColor", "value": "#123456"}]},
            }
        )
        node = NodeLowerer().lower(widget)
        StyleResolver().apply_styles(node, widget.styling)
        assert len(node.properties.fills) == 1


class TestTypography:
    """Tests for typography resolution."""

    @pytest.mark.unit
    def test_literal_typography(self):
        """Literal typography sets text properties."""
        styling = StyleInfo.model_validate(
            {
                "typography": {
                    "fontSize": 18,
                    "fontFamily": "Roboto",
                    "fontWeight": "600",
                    "lineHeight": 1.4,
                    "letterSpacing": 0.5,
                    "color": "#333333",
                }
            }
        )
        node = _text()
        result = StyleResolver().apply_styles(node, styling)
        props = node.properties
        assert result.success
        assert props.font_size == 18
        assert props.font_name.family == "Roboto"
        assert props.font_name.style == "Semi Bold"
        assert props.line_height.unit == "PERCENT"
        assert props.line_height.value == pytest.approx(140)
        assert props.letter_spacing.unit == "PIXELS"
        assert props.fills[0].color.to_hex() == "#333333"
        assert result.applied_properties == [
            "fontSize", "fontFamily", "fontWeight", "lineHeight", "letterSpacing", "color"
        ]

    @pytest.mark.unit
    def test_typography_token_binding(self, sample_theme):
        """Themed typography binds {style}-{property} tokens."""
        styling = StyleInfo.model_validate(
            {
                "typography": {
                    "fontSize": 32,
                    "fontWeight": "700",
                    "isThemeReference": True,
                    "themePath": "textTheme.headlineLarge",
                }
            }
        )
        node = _text()
        result = StyleResolver(TokenTable.from_theme(sample_theme)).apply_styles(node, styling)
        ids = [b.variable_id for b in result.variable_bindings]
        assert ids == [
            "Default Typography-headline-large-font-size",
            "Default Typography-headline-large-font-weight",
        ]
        assert result.variable_bindings[0].target_property == "fontSize"
        assert node.properties.font_size is None

    @pytest.mark.unit
    def test_typography_strict_miss(self, sample_theme):
        """Strict mode reports missing typography tokens as errors."""
        styling = StyleInfo.model_validate(
            {
                "typography": {
                    "fontSize": 11,
                    "isThemeReference": True,
                    "themePath": "textTheme.labelSmall",
                }
            }
        )
        config = StyleMappingConfig(fallback_to_direct_values=False)
        result = StyleResolver(TokenTable.from_theme(sample_theme), config).apply_styles(
            _text(), styling
        )
        assert not result.success
        assert len(result.errors) == 1

    @pytest.mark.unit
    def test_typography_ignored_on_frames(self):
        """Typography only applies to text nodes."""
        styling = StyleInfo.model_validate({"typography": {"fontSize": 20}})
        node = _frame()
        result = StyleResolver().apply_styles(node, styling)
        assert node.properties.font_size is None
        assert result.applied_properties == []

    @pytest.mark.unit
    def test_direct_typography_warning_on_frame(self):
        """apply_typography warns when called on a non-text node."""
        styling = StyleInfo.model_validate({"typography": {"fontSize": 20}})
        result = StyleResolver().apply_typography(_frame(), styling.typography)
        assert result.warnings == ["Typography styles can only be applied to TEXT nodes"]


class TestSpacingBordersShadows:
    """Tests for spacing, border and shadow application."""

    @pytest.mark.unit
    def test_padding_requires_auto_layout(self):
        """Padding is a no-op without auto layout."""
        styling = StyleInfo.model_validate({"spacing": {"padding": {"top": 4}}})
        node = _frame()
        result = StyleResolver().apply_styles(node, styling)
        assert result.success
        assert result.applied_properties == []

    @pytest.mark.unit
    def test_padding_and_margin(self):
        """Padding sets auto-layout padding; margin becomes max-edge spacing."""
        styling = StyleInfo.model_validate(
            {
                "spacing": {
                    "padding": {"top": 4, "right": 8, "bottom": 4, "left": 8},
                    "margin": {"top": 2, "right": 12, "bottom": 6, "left": 0},
                }
            }
        )
        node = _frame(AutoLayoutSpec(layout_mode="VERTICAL"))
        result = StyleResolver().apply_styles(node, styling)
        assert node.auto_layout.padding_right == 8
        assert node.auto_layout.item_spacing == 12
        assert result.applied_properties == ["padding", "margin"]

    @pytest.mark.unit
    def test_uniform_radius(self):
        """Uniform radius collapses to cornerRadius."""
        styling = StyleInfo.model_validate(
            {
                "borders": {
                    "width": 1,
                    "color": "#CCCCCC",
                    "radius": {"topLeft": 8, "topRight": 8, "bottomLeft": 8, "bottomRight": 8},
                }
            }
        )
        node = _frame()
        result = StyleResolver().apply_styles(node, styling)
        assert node.properties.corner_radius == 8
        assert node.properties.top_left_radius is None
        assert node.properties.stroke_weight == 1
        assert len(node.properties.strokes) == 1
        assert result.applied_properties == ["border", "borderRadius"]

    @pytest.mark.unit
    def test_non_uniform_radius(self):
        """Non-uniform radius sets four corners."""
        styling = StyleInfo.model_validate(
            {"borders": {"radius": {"topLeft": 8, "topRight": 8}}}
        )
        node = _frame()
        StyleResolver().apply_styles(node, styling)
        assert node.properties.corner_radius is None
        assert node.properties.top_left_radius == 8
        assert node.properties.bottom_right_radius == 0

    @pytest.mark.unit
    def test_shadows(self):
        """Each shadow becomes a drop shadow effect."""
        styling = StyleInfo.model_validate(
            {
                "shadows": [
                    {"color": "#000000", "offset": {"x": 0, "y": 2}, "blur": 4},
                    {"color": "#333", "blur": 8, "spread": 1},
                ]
            }
        )
        node = _frame()
        result = StyleResolver().apply_styles(node, styling)
        effects = node.properties.effects
        assert len(effects) == 2
        assert effects[0].type == "DROP_SHADOW"
        assert effects[0].offset.y == 2
        assert effects[0].radius == 4
        assert effects[0].spread == 0
        assert effects[1].spread == 1
        assert effects[0].blend_mode == "NORMAL"
        assert result.applied_properties == ["shadows"]

    @pytest.mark.unit
    def test_unexpected_failure_becomes_failed_result(self, monkeypatch):
        """Exceptions inside apply_styles are converted, not raised."""
        resolver = StyleResolver()

        def explode(node, colors):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(resolver, "apply_colors", explode)
        result = resolver.apply_styles(_frame(), _themed_background())
        assert not result.success
        assert result.errors == ["Failed to apply styles: kaboom"]


class TestApplyTree:
    """Tests for lockstep tree styling."""

    @pytest.mark.unit
    def test_tree_bindings(self, column_widget, sample_theme):
        """Every widget's styling lands on its lowered node."""
        node = NodeLowerer().lower(column_widget)
        resolver = StyleResolver(TokenTable.from_theme(sample_theme))
        results = resolver.apply_tree(column_widget, node)
        assert len(results) == 4
        assert all(r.success for r in results)
        title, action = node.children
        assert [b.variable_id for b in title.variables] == [
            "Default Typography-headline-large-font-size"
        ]
        assert [b.variable_id for b in action.variables] == ["Default Colors-primary"]

    @pytest.mark.unit
    def test_tree_diagnostics(self, column_widget):
        """Errors are recorded against the node they occurred on."""
        from src.core import ErrorCollector

        node = NodeLowerer().lower(column_widget)
        diagnostics = ErrorCollector()
        config = StyleMappingConfig(fallback_to_direct_values=False)
        StyleResolver(TokenTable(), config).apply_tree(column_widget, node, diagnostics)
        assert diagnostics.has_errors
        node_ids = {record.node_id for record in diagnostics.errors}
        assert node_ids == {node.children[0].id, node.children[1].id}
