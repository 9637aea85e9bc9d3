"""Unit tests for the library organizer."""

import pytest

from src.ir import ComponentDefinition, ComponentVariant, TargetNodeSpec
from src.library import (
    LibraryOrganizer,
    assess_complexity,
    categorize,
    category_icon,
    category_priority,
    determine_group,
    generate_examples,
    generate_tags,
)
from src.mid import ReusableWidgetDefinition
from src.schema import NodeType


def _definition(type_, name="Sample", **extra):
    return ReusableWidgetDefinition.model_validate(
        {"id": f"{name}-def", "type": type_, "name": name, **extra}
    )


def _component(name, variant_count=1):
    variants = [
        ComponentVariant(
            name=f"V{i}", node_spec=TargetNodeSpec(type=NodeType.FRAME, name=f"V{i}")
        )
        for i in range(variant_count)
    ]
    return ComponentDefinition(id=f"component-{name}", name=name, variants=variants)


@pytest.fixture
def heading_definition():
    return _definition(
        "Text",
        name="Title",
        properties={"data": "Hello"},
        styling={"typography": {"fontSize": 24}},
        usageCount=3,
    )


class TestComplexity:
    """Tests for complexity scoring."""

    @pytest.mark.unit
    def test_simple(self):
        """A bare definition is Simple."""
        assert assess_complexity(_definition("Container")) == "Simple"

    @pytest.mark.unit
    def test_medium(self):
        """Four properties score Medium."""
        definition = _definition(
            "Container", properties={"width": 1, "height": 2, "key": "k", "alignment": "center"}
        )
        assert assess_complexity(definition) == "Medium"

    @pytest.mark.unit
    def test_complex(self, button_definition):
        """Children, properties, variants, colors and borders add up to Complex."""
        assert assess_complexity(button_definition) == "Complex"


class TestCategorize:
    """Tests for type-driven categorization."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "type_,expected",
        [
            ("ElevatedButton", "Buttons"),
            ("Text", "Typography"),
            ("Card", "Surfaces"),
            ("Stack", "Layout"),
            ("Image", "Media"),
            ("AppBar", "Navigation"),
            ("FancyThing", "Components"),
        ],
    )
    def test_type_categories(self, type_, expected):
        """Each widget type maps to its category."""
        assert categorize(_definition(type_)) == expected

    @pytest.mark.unit
    def test_container_disambiguation(self):
        """Containers split into Surfaces, Layout or Components."""
        decorated = _definition("Container", properties={"decoration": {"color": "#FFFFFF"}})
        colored = _definition(
            "Container", styling={"colors": [{"property": "backgroundColor", "value": "#000"}]}
        )
        padded = _definition("Container", properties={"padding": {"top": 4}})
        plain = _definition("Container")
        assert categorize(decorated) == "Surfaces"
        assert categorize(colored) == "Surfaces"
        assert categorize(padded) == "Layout"
        assert categorize(plain) == "Components"

    @pytest.mark.unit
    def test_priority_and_icon_fallbacks(self):
        """Unknown categories get priority 99 and the default icon."""
        assert category_priority("Buttons") == 1
        assert category_priority("Widgets") == 99
        assert category_icon("Layout") == "📐"
        assert category_icon("Widgets") == "📦"


class TestGroups:
    """Tests for group determination and ordering."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Button / Primary", "Primary Buttons"),
            ("Button / Secondary", "Secondary Buttons"),
            ("Icon Button", "Icon Buttons"),
            ("Button Component", "Buttons"),
            ("Text / Heading", "Headings"),
            ("Body Label", "Body Text"),
            ("Text Component", "Text"),
            ("Card / Elevated", "Elevated Cards"),
            ("Card / Outlined", "Outlined Cards"),
            ("Nav / Tab", "Nav"),
            ("", "Components"),
        ],
    )
    def test_determine_group(self, name, expected):
        """Component names map to groups by keyword."""
        assert determine_group(name) == expected

    @pytest.mark.unit
    def test_group_order_and_sub_groups(self):
        """Primary groups come first, then Secondary, then by name."""
        groups = LibraryOrganizer.build_groups(
            [
                _component("Button Component"),
                _component("Button / Secondary"),
                _component("Button / Primary", variant_count=3),
            ]
        )
        assert [g.name for g in groups] == ["Primary Buttons", "Secondary Buttons", "Buttons"]
        primary = groups[0]
        assert primary.description == "Primary Buttons group containing 1 component"
        assert [s.name for s in primary.sub_groups] == ["With Variants"]
        assert [s.name for s in groups[2].sub_groups] == ["Simple Components"]

    @pytest.mark.unit
    def test_group_description_plural(self):
        """Descriptions pluralize component counts."""
        [group] = LibraryOrganizer.build_groups([_component("Nav / A"), _component("Nav / B")])
        assert group.description == "Nav group containing 2 components"


class TestDocumentation:
    """Tests for per-component metadata."""

    @pytest.mark.unit
    def test_tags(self, button_definition):
        """Tags reflect type, styling, structure and variants."""
        assert generate_tags(button_definition) == ["button", "colored", "container", "variants"]

    @pytest.mark.unit
    def test_examples_limited(self, button_definition):
        """Examples include basic usage and at most two variants."""
        assert generate_examples(button_definition) == [
            "Basic usage: <PrimaryButton />",
            'Disabled: <PrimaryButton disabled="True" />',
            'Large: <PrimaryButton size="large" />',
        ]


class TestOrganize:
    """Tests for LibraryOrganizer.organize."""

    @pytest.mark.unit
    def test_category_priority(self, button_definition, heading_definition):
        """Buttons precede Typography regardless of input order."""
        library = LibraryOrganizer().organize([heading_definition, button_definition])
        assert [c.name for c in library.categories] == ["Buttons", "Typography"]
        assert library.categories[1].groups[0].name == "Headings"

    @pytest.mark.unit
    def test_pages_and_cover(self, button_definition, heading_definition):
        """Pages and the cover page summarize the categories."""
        library = LibraryOrganizer(name="App Library", version="2.0.0").organize(
            [button_definition, heading_definition]
        )
        assert [p.name for p in library.pages] == [
            "📚 Library Overview",
            "🔘 Buttons",
            "📝 Typography",
            "🔧 Utilities",
        ]
        assert library.pages[1].sections[0].components == ["Button / Primary"]
        cover = library.cover_page
        assert cover.title == "App Library"
        assert cover.stats == {"totalComponents": 2, "totalCategories": 2, "version": "2.0.0"}
        assert [link.component_count for link in cover.quick_links] == [1, 1]

    @pytest.mark.unit
    def test_category_metadata(self, button_definition, heading_definition):
        """Category metadata carries count, average usage and complexity."""
        library = LibraryOrganizer().organize([button_definition, heading_definition])
        buttons = library.category("Buttons")
        assert buttons.metadata.component_count == 1
        assert buttons.metadata.average_usage == 5
        assert buttons.metadata.complexity == "Complex"
        assert buttons.icon == "🔘"

    @pytest.mark.unit
    def test_component_metadata(self, button_definition):
        """Each component is documented under its id."""
        library = LibraryOrganizer().organize([button_definition])
        [metadata] = library.components.values()
        assert metadata.name == "Button / Primary"
        assert metadata.category == "Buttons"
        assert metadata.usage_count == 5
        assert metadata.documentation.endswith("Complexity: Complex.")

    @pytest.mark.unit
    def test_environment_defaults(self, monkeypatch):
        """Library name and version come from the environment."""
        monkeypatch.setenv("DESIGNGEN_LIBRARY_NAME", "Env Library")
        organizer = LibraryOrganizer()
        assert organizer.name == "Env Library"
        assert organizer.version == "1.0.0"

    @pytest.mark.unit
    def test_host_dict(self, button_definition):
        """to_dict uses camelCase keys."""
        data = LibraryOrganizer().organize([button_definition]).to_dict()
        assert data["categories"][0]["metadata"]["componentCount"] == 1
        assert data["coverPage"]["quickLinks"][0]["name"] == "Buttons"

    @pytest.mark.unit
    def test_mismatched_components(self, button_definition):
        """Components must pair with definitions."""
        with pytest.raises(ValueError):
            LibraryOrganizer().organize([button_definition], [])
