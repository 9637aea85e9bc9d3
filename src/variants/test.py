"""Unit tests for the variant synthesizer."""

import pytest

from src.ir import ComponentDefinition, PropertyKind
from src.lowering import LoweringContext, NodeLowerer
from src.mid import ReusableWidgetDefinition
from src.style import StyleResolver
from src.tokens import TokenTable
from src.variants import (
    MatrixValue,
    PropertyMatrix,
    ValueKind,
    VariantSynthesizer,
    format_property_name,
    generate_variant_name,
)


def _definition(type_="container", properties=None, variants=None, children=None):
    return ReusableWidgetDefinition.model_validate(
        {
            "id": "def",
            "type": type_,
            "name": "Sample",
            "properties": properties or {},
            "variants": variants or [],
            "children": children or [],
        }
    )


class TestPropertyMatrix:
    """Tests for PropertyMatrix construction."""

    @pytest.mark.unit
    def test_classify_keeps_bool_and_number_apart(self):
        """True and 1 are distinct matrix values."""
        assert MatrixValue.classify(True).kind == ValueKind.BOOL
        assert MatrixValue.classify(1).kind == ValueKind.NUMBER
        assert MatrixValue.classify("a").kind == ValueKind.STR
        assert MatrixValue.classify({"nested": 1}) is None
        assert MatrixValue.classify(True) != MatrixValue.classify(1)

    @pytest.mark.unit
    def test_constant_keys_dropped(self, button_definition):
        """Only keys with more than one distinct value remain."""
        matrix = PropertyMatrix.from_definition(button_definition)
        assert matrix.keys() == ["size"]
        assert [v.value for v in matrix.values("size")] == ["medium", "large"]

    @pytest.mark.unit
    def test_empty_matrix(self):
        """A definition without variations has an empty matrix."""
        matrix = PropertyMatrix.from_definition(_definition(properties={"width": 10}))
        assert len(matrix) == 0
        assert matrix.combination_count() == 0
        assert list(matrix.combinations()) == []

    @pytest.mark.unit
    def test_combinations_order(self):
        """Combinations enumerate with the first key varying slowest."""
        matrix = PropertyMatrix()
        matrix.add_all({"a": "x", "b": True})
        matrix.add_all({"a": "y", "b": False})
        assert list(matrix.combinations()) == [
            {"a": "x", "b": True},
            {"a": "x", "b": False},
            {"a": "y", "b": True},
            {"a": "y", "b": False},
        ]


class TestNaming:
    """Tests for variant and property naming."""

    @pytest.mark.unit
    def test_variant_name_sorted_by_key(self):
        """Entries sort by key; values are capitalized."""
        assert generate_variant_name({"size": "large", "disabled": True}) == "Disabled Large"

    @pytest.mark.unit
    def test_variant_name_false_boolean(self):
        """False booleans render as No{Key}."""
        assert generate_variant_name({"outlined": False}) == "NoOutlined"

    @pytest.mark.unit
    def test_variant_name_default(self):
        """Empty or placeholder-only properties name the Default variant."""
        assert generate_variant_name({}) == "Default"
        assert generate_variant_name({"variant": "default"}) == "Default"

    @pytest.mark.unit
    def test_format_property_name(self):
        """camelCase keys become spaced title names."""
        assert format_property_name("isExpanded") == "Is Expanded"
        assert format_property_name("size") == "Size"


class TestSynthesizeVariants:
    """Tests for VariantSynthesizer.synthesize_variants."""

    @pytest.mark.unit
    def test_default_variant(self):
        """An empty matrix yields exactly one Default variant."""
        variants = VariantSynthesizer().synthesize_variants(_definition())
        assert len(variants) == 1
        assert variants[0].name == "Default"
        assert variants[0].properties == {"variant": "default"}

    @pytest.mark.unit
    def test_recorded_variant_reused(self, button_definition):
        """A recorded variant matching a combination keeps its name."""
        variants = VariantSynthesizer().synthesize_variants(button_definition)
        assert [v.name for v in variants] == ["Medium", "Large"]
        assert variants[1].properties == {"size": "large"}
        assert variants[0].node_spec.type == "COMPONENT"

    @pytest.mark.unit
    def test_variant_cap(self):
        """Five boolean keys synthesize exactly sixteen variants."""
        keys = ["a", "b", "c", "d", "e"]
        definition = _definition(
            properties={k: True for k in keys},
            variants=[{"name": "Off", "properties": {k: False for k in keys}}],
        )
        variants = VariantSynthesizer().synthesize_variants(definition)
        assert len(variants) == 16

    @pytest.mark.unit
    def test_cap_from_environment(self, monkeypatch):
        """DESIGNGEN_MAX_VARIANTS lowers the cap."""
        monkeypatch.setenv("DESIGNGEN_MAX_VARIANTS", "3")
        definition = _definition(
            properties={"a": True, "b": True},
            variants=[{"properties": {"a": False, "b": False}}],
        )
        synthesizer = VariantSynthesizer()
        assert synthesizer.max_variants == 3
        assert len(synthesizer.synthesize_variants(definition)) == 3

    @pytest.mark.unit
    def test_variants_share_context(self, button_definition):
        """Variant nodes draw ids from the injected lowering context."""
        context = LoweringContext()
        VariantSynthesizer(NodeLowerer(context)).synthesize_variants(button_definition)
        assert context.issued == 4

    @pytest.mark.unit
    def test_resolver_styles_variant_nodes(self, button_definition, sample_theme):
        """With a resolver, variant nodes carry token bindings."""
        resolver = StyleResolver(TokenTable.from_theme(sample_theme))
        variants = VariantSynthesizer(resolver=resolver).synthesize_variants(button_definition)
        bindings = variants[0].node_spec.variables
        assert [b.variable_id for b in bindings] == ["Default Colors-primary"]

    @pytest.mark.unit
    def test_mixed_typed_values_are_collected(self):
        """A value that does not fit a typed property lowers the base widget and warns."""
        context = LoweringContext()
        definition = _definition(
            "card",
            properties={"elevation": 2},
            variants=[{"properties": {"elevation": "high"}}],
        )
        variants = VariantSynthesizer(NodeLowerer(context)).synthesize_variants(definition)
        assert [v.properties for v in variants] == [{"elevation": 2}, {"elevation": "high"}]
        assert variants[1].node_spec is not None
        [warning] = context.diagnostics.warnings
        assert warning.category == "CONVERSION"
        assert warning.node_id == "def"
        assert not context.diagnostics.has_errors

    @pytest.mark.unit
    def test_mixed_values_on_string_property(self):
        """A numeric override of a string property does not abort synthesis."""
        context = LoweringContext()
        definition = _definition(
            "button",
            properties={"size": "large"},
            variants=[{"properties": {"size": 12}}],
        )
        variants = VariantSynthesizer(NodeLowerer(context)).synthesize_variants(definition)
        assert len(variants) == 2
        assert len(context.diagnostics.warnings) == 1

    @pytest.mark.unit
    def test_cap_never_exceeds_sixteen(self, monkeypatch):
        """DESIGNGEN_MAX_VARIANTS cannot raise the cap above sixteen."""
        monkeypatch.setenv("DESIGNGEN_MAX_VARIANTS", "64")
        assert VariantSynthesizer().max_variants == 16
        assert VariantSynthesizer(max_variants=40).max_variants == 16


class TestDeriveProperties:
    """Tests for VariantSynthesizer.derive_properties."""

    @pytest.mark.unit
    def test_button_properties(self, button_definition):
        """Buttons get variant, semantic and text properties."""
        properties = VariantSynthesizer().derive_properties(button_definition)
        assert [p.name for p in properties] == ["Size", "State", "Text"]
        size = properties[0]
        assert size.type == PropertyKind.VARIANT
        assert size.default_value == "medium"
        assert size.variant_options == ["medium", "large"]
        assert properties[1].variant_options == ["default", "hover", "pressed", "disabled"]
        assert properties[2].type == PropertyKind.TEXT
        assert properties[2].default_value == "Submit"

    @pytest.mark.unit
    def test_boolean_property(self):
        """All-boolean values become a BOOLEAN property defaulting to False."""
        definition = _definition(
            properties={"outlined": True}, variants=[{"properties": {"outlined": False}}]
        )
        [prop] = VariantSynthesizer().derive_properties(definition)
        assert prop.name == "Outlined"
        assert prop.type == PropertyKind.BOOLEAN
        assert prop.default_value is False

    @pytest.mark.unit
    def test_mixed_property(self):
        """Mixed value types become a TEXT property seeded with the first value."""
        definition = _definition(
            properties={"badge": 2}, variants=[{"properties": {"badge": "new"}}]
        )
        [prop] = VariantSynthesizer().derive_properties(definition)
        assert prop.type == PropertyKind.TEXT
        assert prop.default_value == "2"

    @pytest.mark.unit
    def test_card_and_text_semantics(self):
        """Cards get Elevation; text gets Emphasis and Text."""
        card = VariantSynthesizer().derive_properties(_definition("card"))
        assert [p.name for p in card] == ["Elevation"]
        assert card[0].default_value == "low"

        text = VariantSynthesizer().derive_properties(
            _definition("text", properties={"data": "Hello"})
        )
        assert [p.name for p in text] == ["Emphasis", "Text"]
        assert text[1].default_value == "Hello"

    @pytest.mark.unit
    def test_icon_property(self):
        """Icon-bearing widgets get an INSTANCE_SWAP property."""
        properties = VariantSynthesizer().derive_properties(
            _definition(properties={"icon": "star"})
        )
        assert properties[-1].name == "Icon"
        assert properties[-1].type == PropertyKind.INSTANCE_SWAP
        assert properties[-1].default_value == "icon-placeholder"


class TestOrganizeAndSwitch:
    """Tests for grouping and property-based switching."""

    @pytest.mark.unit
    def test_organize_by_most_frequent_property(self, button_definition):
        """Variants group by the most frequent property."""
        synthesizer = VariantSynthesizer()
        groups = synthesizer.organize_variants(synthesizer.synthesize_variants(button_definition))
        assert [(g.name, g.property, len(g.variants)) for g in groups] == [
            ("Medium", "size", 1),
            ("Large", "size", 1),
        ]

    @pytest.mark.unit
    def test_organize_default_group(self):
        """Placeholder-only variants form one Default group."""
        synthesizer = VariantSynthesizer()
        groups = synthesizer.organize_variants(synthesizer.synthesize_variants(_definition()))
        assert [(g.name, g.property) for g in groups] == [("Default", "variant")]

    @pytest.mark.unit
    def test_find_variant(self, button_definition):
        """find_variant matches every selected property."""
        synthesizer = VariantSynthesizer()
        component = ComponentDefinition(
            id="component-button-1",
            name="Button",
            variants=synthesizer.synthesize_variants(button_definition),
        )
        assert synthesizer.find_variant(component, {"size": "large"}).name == "Large"
        assert synthesizer.find_variant(component, {"size": "huge"}) is None
        assert synthesizer.find_variant(component, {}).name == "Medium"
