"""Unit tests for the token table."""

import pytest

from src.core.errors import VariableError
from src.mid import ThemeModel
from src.tokens import (
    TokenTable,
    VariableScope,
    VariableType,
    generate_variable_name,
    map_font_weight,
    typography_variable_name,
)


class TestNaming:
    """Tests for token name derivation."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("colorScheme.primary", "primary"),
            ("colorScheme.onSurfaceVariant", "on-surface-variant"),
            ("spacing.medium", "spacing-medium"),
            ("borderRadius.small", "border-radius-small"),
        ],
    )
    def test_generate_variable_name(self, path, expected):
        """Dotted theme paths become kebab-case token names."""
        assert generate_variable_name(path) == expected

    @pytest.mark.unit
    def test_typography_variable_name(self):
        """Text theme paths use {style}-{property}."""
        assert typography_variable_name("textTheme.bodyLarge", "fontSize") == "body-large-font-size"
        assert (
            typography_variable_name("textTheme.bodyLarge.fontSize", "letterSpacing")
            == "body-large-letter-spacing"
        )

    @pytest.mark.unit
    def test_typography_name_outside_text_theme(self):
        """Non text-theme paths fall back to generic naming."""
        assert typography_variable_name("fonts.heading", "fontSize") == "fonts-heading"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "weight,style",
        [("100", "Thin"), ("400", "Regular"), ("700", "Bold"), ("900", "Black"),
         ("normal", "Regular"), ("bold", "Bold"), ("950", "Regular"), (None, "Regular")],
    )
    def test_map_font_weight(self, weight, style):
        """Weights map through the fixed table, unknown values to Regular."""
        assert map_font_weight(weight) == style


class TestTokenTable:
    """Tests for TokenTable construction and lookup."""

    @pytest.mark.unit
    def test_collections_created(self, sample_theme):
        """from_theme builds the four prefixed collections."""
        table = TokenTable.from_theme(sample_theme)
        assert [c.name for c in table.collections()] == [
            "Default Colors",
            "Default Typography",
            "Default Spacing",
            "Default Border Radius",
        ]

    @pytest.mark.unit
    def test_color_tokens(self, sample_theme):
        """Defined colors become COLOR tokens with scopes."""
        table = TokenTable.from_theme(sample_theme)
        primary = table.get("Default Colors", "primary")
        assert primary.type == VariableType.COLOR
        assert primary.value.to_hex() == "#2196F3"
        assert VariableScope.ALL_STROKES in primary.scopes
        assert primary.id == "Default Colors-primary"
        surface = table.get("Default Colors", "surface")
        assert surface.scopes == [VariableScope.ALL_FILLS]
        assert table.get("Default Colors", "error") is None

    @pytest.mark.unit
    def test_typography_tokens(self, sample_theme):
        """Text styles produce per-property tokens."""
        table = TokenTable.from_theme(sample_theme)
        assert table.get("Default Typography", "headline-large-font-size").value == 32
        assert table.get("Default Typography", "headline-large-font-weight").value == "Bold"
        assert table.get("Default Typography", "body-medium-line-height").value == 1.5
        assert table.get("Default Typography", "body-medium-font-family") is None

    @pytest.mark.unit
    def test_scale_tokens(self, sample_theme):
        """Spacing and radius scales become FLOAT tokens."""
        table = TokenTable.from_theme(sample_theme, theme_name="Brand")
        spacing = table.get("Brand Spacing", "spacing-medium")
        assert spacing.value == 16
        assert spacing.description == "Spacing scale medium (16px)"
        assert table.get("Brand Border Radius", "border-radius-small").value == 4

    @pytest.mark.unit
    def test_invalid_theme_color_is_skipped(self):
        """Malformed theme colors are skipped and reported."""
        theme = ThemeModel.model_validate({"colorScheme": {"primary": "#12"}})
        table = TokenTable.from_theme(theme)
        assert table.get("Default Colors", "primary") is None
        assert len(table.issues) == 1

    @pytest.mark.unit
    def test_unknown_collection(self, sample_theme):
        """Unknown collections return None."""
        table = TokenTable.from_theme(sample_theme)
        assert table.get("Missing Colors", "primary") is None

    @pytest.mark.unit
    def test_to_dict(self, sample_theme):
        """to_dict serializes colors as RGB objects."""
        data = TokenTable.from_theme(sample_theme).to_dict()
        first = data["collections"][0]["variables"][0]
        assert first["name"] == "primary"
        assert set(first["value"]) == {"r", "g", "b"}


class TestMultiMode:
    """Tests for multi-mode collections."""

    @pytest.mark.unit
    def test_light_and_dark(self, sample_theme):
        """Each mode gets its own value."""
        dark = ThemeModel.model_validate(
            {"colorScheme": {"brightness": "dark", "primary": "#000000"}, "spacing": {"small": 4}}
        )
        table = TokenTable()
        collections = table.add_multi_mode([sample_theme, dark], ["Light", "Dark"], "App")
        assert [m.mode_id for m in collections[0].modes] == ["mode-0", "mode-1"]

        primary = table.get_multi_mode("App Colors", "primary")
        assert primary.values["Dark"].to_hex() == "#000000"
        assert primary.id == "multimode-App Colors-primary"

        spacing = table.get_multi_mode("App Spacing", "spacing-medium")
        assert spacing.values == {"Light": 16, "Dark": 16}

    @pytest.mark.unit
    def test_mismatched_lengths_raise(self, sample_theme):
        """Theme and name lists must have equal length."""
        with pytest.raises(VariableError):
            TokenTable().add_multi_mode([sample_theme], ["Light", "Dark"], "App")
