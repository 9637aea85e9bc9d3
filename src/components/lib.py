"""Component assembler.

Wraps reusable widget definitions into component definitions (variants,
switchable properties, a lowered base node) and lowers ordinary usages of
those definitions into instances carrying per-instance overrides.
"""

from __future__ import annotations

import re
from typing import Any

from src.core import get_logger
from src.core.errors import ComponentNotFoundError
from src.ir import ComponentDefinition, NodeProperties, TargetNodeSpec
from src.lowering import NAME_TEXT_LIMIT, NodeLowerer
from src.mid import ReusableWidgetDefinition, WidgetNode
from src.schema import NodeType, WidgetType, get_display_name
from src.style import StyleResolver
from src.variants import VariantSynthesizer

logger = get_logger("designgen.components")

HEADING_FONT_SIZE = 20


def sanitize_component_name(name: str) -> str:
    """Drop characters other than letters, digits, space, ``/``, ``-``, ``_``."""
    cleaned = re.sub(r"[^a-zA-Z0-9\s/\-_]", "", name)
    return re.sub(r"\s+", " ", cleaned).strip()


def component_slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "-", name.lower())


def usage_context(definition: WidgetNode) -> str | None:
    """Infer a naming suffix from how a widget is configured."""
    props = definition.properties
    if definition.type == WidgetType.BUTTON:
        if props.style == "primary":
            return "Primary"
        if props.style == "secondary":
            return "Secondary"
        if props.size == "large":
            return "Large"
        if props.size == "small":
            return "Small"
    elif definition.type == WidgetType.CARD:
        if props.elevation:
            return "Elevated"
        if props.outlined:
            return "Outlined"
    elif definition.type == WidgetType.TEXT:
        typography = definition.styling.typography
        if typography is not None:
            if typography.font_size and typography.font_size > HEADING_FONT_SIZE:
                return "Heading"
            if typography.font_weight in ("bold", "700"):
                return "Bold"
    return None


class ComponentAssembler:
    """Builds components from definitions and instances from usages.

    Built components are kept in a lookup table keyed by id and by name, so
    instances reference components by id rather than by object.

    Example:
        >>> assembler = ComponentAssembler(NodeLowerer(context))
        >>> component = assembler.build_component(definition)
        >>> instance = assembler.build_instance(usage, component.name)
    """

    def __init__(
        self,
        lowerer: NodeLowerer | None = None,
        synthesizer: VariantSynthesizer | None = None,
        resolver: StyleResolver | None = None,
    ):
        self.lowerer = lowerer or NodeLowerer()
        self.synthesizer = synthesizer or VariantSynthesizer(self.lowerer, resolver=resolver)
        self._components: dict[str, ComponentDefinition] = {}
        self._names: dict[str, str] = {}
        self._definitions: dict[str, ReusableWidgetDefinition] = {}

    @property
    def components(self) -> list[ComponentDefinition]:
        return list(self._components.values())

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def build_component(self, definition: ReusableWidgetDefinition) -> ComponentDefinition:
        """Build and register a component for a reusable widget definition."""
        name = self.infer_component_name(definition)
        variants = self.synthesizer.synthesize_variants(definition)
        properties = self.synthesizer.derive_properties(definition)
        description = self.describe(definition, len(variants), len(properties))

        node = self.synthesizer.lower(definition)
        node.type = NodeType.COMPONENT
        node.name = name
        node.properties.description = description

        component = ComponentDefinition(
            id=self.lowerer.context.next_id(f"component-{component_slug(name)}-"),
            name=name,
            description=description,
            variants=variants,
            properties=properties,
            node_spec=node,
            base_widget_id=definition.id,
            source_name=definition.name,
        )
        self._components[component.id] = component
        self._names.setdefault(component.name, component.id)
        self._definitions[component.id] = definition
        logger.debug(
            "Built component %s (%d variants, %d properties)",
            component.name,
            len(variants),
            len(properties),
        )
        return component

    @staticmethod
    def infer_component_name(definition: ReusableWidgetDefinition) -> str:
        """``{Type} / {Context}``, else the sanitized declared name, else ``{Type} Component``."""
        display = get_display_name(definition.type)
        context = usage_context(definition)
        if context:
            return f"{display} / {context}"
        if definition.name and definition.name not in (display, definition.type):
            sanitized = sanitize_component_name(definition.name)
            if sanitized:
                return sanitized
        return f"{display} Component"

    @staticmethod
    def describe(definition: ReusableWidgetDefinition, variants: int, properties: int) -> str:
        display = get_display_name(definition.type)
        parts = [
            f"Component generated from {display} widget.",
            f"Used {definition.usage_count} times in the codebase.",
        ]
        if variants > 0:
            parts.append(f"Has {variants} variants.")
        if properties > 0:
            parts.append(f"Contains {properties} configurable properties.")
        return " ".join(parts)

    def get_component(self, key: str) -> ComponentDefinition:
        """Look up a built component by id or name.

        Raises:
            ComponentNotFoundError: If no such component was built.
        """
        component_id = key if key in self._components else self._names.get(key)
        if component_id is None:
            raise ComponentNotFoundError(key)
        return self._components[component_id]

    def definition_for(self, key: str) -> ReusableWidgetDefinition:
        return self._definitions[self.get_component(key).id]

    # -------------------------------------------------------------------------
    # Instances
    # -------------------------------------------------------------------------

    def build_instance(self, usage: WidgetNode, component_name: str) -> TargetNodeSpec:
        """Lower a usage of a built component into an instance node.

        Raises:
            ComponentNotFoundError: If the component was never built.
        """
        component = self.get_component(component_name)
        definition = self._definitions[component.id]
        props = usage.properties

        properties = NodeProperties(
            component_id=component.id,
            overrides=self.instance_overrides(usage, definition),
            width=props.width,
            height=props.height,
            layout_grow=props.flex or None,
            visible=True,
            locked=False,
        )
        return TargetNodeSpec(
            id=self.lowerer.context.next_id(),
            type=NodeType.INSTANCE,
            name=self.instance_name(usage, component.name),
            properties=properties,
            widget_id=usage.id,
        )

    @staticmethod
    def instance_name(usage: WidgetNode, component_name: str) -> str:
        text = usage.extract_text()
        if text:
            suffix = "..." if len(text) > NAME_TEXT_LIMIT else ""
            return f'{component_name} "{text[:NAME_TEXT_LIMIT]}{suffix}"'
        if usage.properties.key:
            return f"{component_name} ({usage.properties.key})"
        return component_name

    @staticmethod
    def instance_overrides(
        usage: WidgetNode, definition: ReusableWidgetDefinition
    ) -> dict[str, Any]:
        """Literal text, colors and size of a usage that differ from the component.

        Token-bound colors are inherited from the component and never
        overridden per instance.
        """
        overrides: dict[str, Any] = {}
        text = usage.extract_text()
        if text and text != definition.extract_text():
            overrides["Text"] = text

        base_colors = {
            (c.property, c.value) for c in definition.styling.colors if not c.is_theme_reference
        }
        for index, color in enumerate(usage.styling.colors):
            if not color.is_theme_reference and (color.property, color.value) not in base_colors:
                overrides[f"Color_{index}"] = color.value

        size = usage.properties
        base = definition.properties
        if size.width is not None and size.width != base.width:
            overrides["Width"] = size.width
        if size.height is not None and size.height != base.height:
            overrides["Height"] = size.height
        return overrides


__all__ = [
    "ComponentAssembler",
    "sanitize_component_name",
    "component_slug",
    "usage_context",
]
