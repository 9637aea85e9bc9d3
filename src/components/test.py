"""Unit tests for the component assembler."""

import pytest

from src.components import ComponentAssembler, sanitize_component_name, usage_context
from src.core.errors import ComponentNotFoundError
from src.lowering import LoweringContext, NodeLowerer
from src.mid import ReusableWidgetDefinition, WidgetNode


def _definition(data):
    return ReusableWidgetDefinition.model_validate({"id": "def", **data})


def _usage(properties=None, children=None, colors=None):
    return WidgetNode.model_validate(
        {
            "id": "btn-1",
            "type": "ElevatedButton",
            "properties": properties or {},
            "children": children or [],
            "styling": {"colors": colors or []},
        }
    )


class TestComponentNaming:
    """Tests for component name inference."""

    @pytest.mark.unit
    def test_button_context(self, button_definition):
        """Buttons with a primary style get a Primary suffix."""
        assert ComponentAssembler.infer_component_name(button_definition) == "Button / Primary"

    @pytest.mark.unit
    def test_card_and_text_context(self):
        """Cards and text derive their suffix from elevation and typography."""
        card = _definition({"type": "Card", "name": "InfoCard", "properties": {"elevation": 2}})
        heading = _definition(
            {"type": "Text", "name": "Title", "styling": {"typography": {"fontSize": 24}}}
        )
        bold = _definition(
            {"type": "Text", "name": "Label", "styling": {"typography": {"fontWeight": "bold"}}}
        )
        assert usage_context(card) == "Elevated"
        assert ComponentAssembler.infer_component_name(heading) == "Text / Heading"
        assert usage_context(bold) == "Bold"

    @pytest.mark.unit
    def test_declared_name_fallback(self):
        """Without context, the sanitized declared name is used."""
        definition = _definition({"type": "Container", "name": "Promo  Banner!"})
        assert ComponentAssembler.infer_component_name(definition) == "Promo Banner"

    @pytest.mark.unit
    def test_type_fallback(self):
        """A name equal to the type falls back to {Type} Component."""
        definition = _definition({"type": "Container", "name": "Container"})
        assert ComponentAssembler.infer_component_name(definition) == "Container Component"

    @pytest.mark.unit
    def test_sanitize(self):
        """Sanitizing keeps separators and collapses whitespace."""
        assert sanitize_component_name(" Nav / Tab-Item_2 ** ") == "Nav / Tab-Item_2"


class TestBuildComponent:
    """Tests for ComponentAssembler.build_component."""

    @pytest.mark.unit
    def test_component_definition(self, button_definition):
        """The component carries variants, properties and a described base node."""
        assembler = ComponentAssembler()
        component = assembler.build_component(button_definition)
        assert component.name == "Button / Primary"
        assert component.id.startswith("component-button---primary-")
        assert component.description == (
            "Component generated from Button widget. Used 5 times in the codebase. "
            "Has 2 variants. Contains 3 configurable properties."
        )
        assert [v.name for v in component.variants] == ["Medium", "Large"]
        assert component.node_spec.type == "COMPONENT"
        assert component.node_spec.name == "Button / Primary"
        assert component.node_spec.properties.description == component.description
        assert component.base_widget_id == "btn-def"
        assert component.source_name == "PrimaryButton"

    @pytest.mark.unit
    def test_container_component_node(self):
        """Frame-lowered definitions still produce a COMPONENT base node."""
        component = ComponentAssembler().build_component(
            _definition({"type": "Container", "name": "Panel"})
        )
        assert component.node_spec.type == "COMPONENT"
        assert component.variants[0].name == "Default"

    @pytest.mark.unit
    def test_lookup(self, button_definition):
        """Components are found by id or name."""
        assembler = ComponentAssembler()
        component = assembler.build_component(button_definition)
        assert assembler.get_component(component.id) is component
        assert assembler.get_component("Button / Primary") is component
        assert assembler.components == [component]
        with pytest.raises(ComponentNotFoundError):
            assembler.get_component("Missing")

    @pytest.mark.unit
    def test_ids_come_from_context(self, button_definition):
        """Component ids use the shared run counter."""
        context = LoweringContext()
        component = ComponentAssembler(NodeLowerer(context)).build_component(button_definition)
        assert component.id == f"component-button---primary-{context.issued}"


class TestBuildInstance:
    """Tests for ComponentAssembler.build_instance."""

    @pytest.fixture
    def assembler(self, button_definition):
        assembler = ComponentAssembler()
        assembler.build_component(button_definition)
        return assembler

    @pytest.mark.unit
    def test_instance_node(self, assembler):
        """Instances reference the component and carry instance properties."""
        usage = _usage(
            properties={"style": "primary", "width": 200, "flex": 2},
            children=[
                {"id": "l", "type": "Text", "properties": {"data": "Checkout now please hurry"}}
            ],
        )
        instance = assembler.build_instance(usage, "Button / Primary")
        props = instance.properties
        assert instance.type == "INSTANCE"
        assert instance.name == 'Button / Primary "Checkout now please ..."'
        assert instance.widget_id == "btn-1"
        assert props.component_id == assembler.get_component("Button / Primary").id
        assert props.width == 200
        assert props.layout_grow == 2
        assert props.visible is True
        assert props.locked is False
        assert props.overrides == {"Text": "Checkout now please hurry", "Width": 200}

    @pytest.mark.unit
    def test_overrides_are_deltas(self, assembler):
        """Values equal to the component defaults are not overridden."""
        usage = _usage(
            properties={"width": 120, "height": 48},
            children=[{"id": "l", "type": "Text", "properties": {"data": "Submit"}}],
        )
        instance = assembler.build_instance(usage, "Button / Primary")
        assert instance.properties.overrides == {"Height": 48}

    @pytest.mark.unit
    def test_color_overrides(self, assembler):
        """Literal colors override; token-bound colors are inherited."""
        usage = _usage(
            colors=[
                {"property": "backgroundColor", "value": "#FF0000"},
                {
                    "property": "backgroundColor",
                    "value": "#2196F3",
                    "isThemeReference": True,
                    "themePath": "colorScheme.primary",
                },
            ]
        )
        instance = assembler.build_instance(usage, "Button / Primary")
        assert instance.properties.overrides == {"Color_0": "#FF0000"}

    @pytest.mark.unit
    def test_key_naming(self, assembler):
        """Without text, the widget key names the instance."""
        instance = assembler.build_instance(_usage(properties={"key": "cta"}), "Button / Primary")
        assert instance.name == "Button / Primary (cta)"

    @pytest.mark.unit
    def test_unknown_component(self, assembler):
        """Instances of unknown components raise ComponentNotFoundError."""
        with pytest.raises(ComponentNotFoundError):
            assembler.build_instance(_usage(), "Nope")
