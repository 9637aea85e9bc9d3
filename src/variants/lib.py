"""Variant synthesizer.

Builds a property matrix from a reusable widget definition and its recorded
usage variations, enumerates a bounded cartesian product of the varying
properties, and turns each combination into a named ComponentVariant with
its own lowered node. Also derives the switchable component properties.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice, product
from typing import Any, Iterator

from pydantic import ValidationError

from src.config import EnvVar, get_environment
from src.core import get_logger
from src.core.errors import ErrorCategory
from src.ir import (
    ComponentDefinition,
    ComponentProperty,
    ComponentVariant,
    PropertyKind,
    TargetNodeSpec,
)
from src.lowering import NodeLowerer
from src.mid import ReusableWidgetDefinition, WidgetNode, WidgetVariant
from src.schema import WidgetType
from src.style import StyleResolver

logger = get_logger("designgen.variants")

DEFAULT_VARIANT_NAME = "Default"
DEFAULT_VARIANT_PROPERTIES: dict[str, Any] = {"variant": "default"}
ICON_PLACEHOLDER = "icon-placeholder"
VARIANT_CEILING = 16

# Semantic properties added per widget type when not already derived.
SEMANTIC_PROPERTIES: dict[WidgetType, tuple[tuple[str, str, tuple[str, ...]], ...]] = {
    WidgetType.BUTTON: (
        ("State", "default", ("default", "hover", "pressed", "disabled")),
        ("Size", "medium", ("small", "medium", "large")),
    ),
    WidgetType.CARD: (("Elevation", "low", ("none", "low", "medium", "high")),),
    WidgetType.TEXT: (("Emphasis", "normal", ("normal", "bold", "italic")),),
}


# =============================================================================
# Property Matrix
# =============================================================================


class ValueKind(str, Enum):
    """Kind of a scalar property value."""

    BOOL = "bool"
    STR = "str"
    NUMBER = "number"


@dataclass(frozen=True)
class MatrixValue:
    """A classified scalar property value.

    Booleans and numbers are kept apart, so ``True`` and ``1`` are distinct
    matrix values.
    """

    kind: ValueKind
    value: str | bool | int | float

    @classmethod
    def classify(cls, value: Any) -> "MatrixValue | None":
        """Classify a raw value; nested and null values are not scalars."""
        if isinstance(value, bool):
            return cls(ValueKind.BOOL, value)
        if isinstance(value, (int, float)):
            return cls(ValueKind.NUMBER, value)
        if isinstance(value, str):
            return cls(ValueKind.STR, value)
        return None


class PropertyMatrix:
    """Distinct scalar values per property key, in first-seen order."""

    def __init__(self) -> None:
        self._values: dict[str, list[MatrixValue]] = {}

    @classmethod
    def from_definition(cls, definition: ReusableWidgetDefinition) -> "PropertyMatrix":
        """Collect values from the base properties and every recorded variant.

        Keys with a single distinct value do not vary and are dropped.
        """
        matrix = cls()
        matrix.add_all(definition.properties.to_interchange())
        for variant in definition.variants:
            matrix.add_all(variant.properties)
        matrix.drop_constant()
        return matrix

    def add(self, key: str, value: Any) -> None:
        classified = MatrixValue.classify(value)
        if classified is None:
            return
        values = self._values.setdefault(key, [])
        if classified not in values:
            values.append(classified)

    def add_all(self, properties: dict[str, Any]) -> None:
        for key, value in properties.items():
            self.add(key, value)

    def drop_constant(self) -> None:
        self._values = {k: v for k, v in self._values.items() if len(v) > 1}

    def keys(self) -> list[str]:
        return list(self._values)

    def values(self, key: str) -> list[MatrixValue]:
        return list(self._values.get(key, []))

    def combination_count(self) -> int:
        count = 1
        for values in self._values.values():
            count *= len(values)
        return count if self._values else 0

    def combinations(self) -> Iterator[dict[str, Any]]:
        """Cartesian product of all dimensions, first key varying slowest."""
        keys = self.keys()
        if not keys:
            return
        for picks in product(*(self._values[k] for k in keys)):
            yield {key: pick.value for key, pick in zip(keys, picks)}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: str) -> bool:
        return key in self._values


@dataclass
class VariantGroup:
    """Variants sharing one value of the grouping property."""

    name: str
    property: str
    variants: list[ComponentVariant] = field(default_factory=list)


# =============================================================================
# Naming Helpers
# =============================================================================


def capitalize_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def format_property_name(name: str) -> str:
    """``isExpanded`` -> ``Is Expanded``."""
    spaced = re.sub(r"([A-Z])", r" \1", name)
    return capitalize_first(spaced).strip()


def _value_label(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return capitalize_first(key) if value else f"No{capitalize_first(key)}"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return capitalize_first(str(value))


def generate_variant_name(properties: dict[str, Any]) -> str:
    """Name a variant from its property values, sorted by key.

    Booleans render as ``Key``/``NoKey``; other values are capitalized.
    The ``variant`` placeholder key is ignored.
    """
    significant = sorted(
        (key, value)
        for key, value in properties.items()
        if key != "variant" and value is not None
    )
    if not significant:
        return DEFAULT_VARIANT_NAME
    return " ".join(_value_label(key, value) for key, value in significant)


# =============================================================================
# Synthesizer
# =============================================================================


class VariantSynthesizer:
    """Synthesizes component variants and properties from definitions.

    Example:
        >>> synthesizer = VariantSynthesizer(NodeLowerer(context))
        >>> variants = synthesizer.synthesize_variants(definition)
        >>> properties = synthesizer.derive_properties(definition)
    """

    def __init__(
        self,
        lowerer: NodeLowerer | None = None,
        max_variants: int | None = None,
        resolver: StyleResolver | None = None,
    ):
        self.lowerer = lowerer or NodeLowerer()
        self.resolver = resolver
        self.max_variants = min(
            get_environment(EnvVar.MAX_VARIANTS, override=max_variants), VARIANT_CEILING
        )

    def synthesize_variants(self, definition: ReusableWidgetDefinition) -> list[ComponentVariant]:
        """Create one variant per property combination, capped at max_variants."""
        matrix = PropertyMatrix.from_definition(definition)
        if not matrix:
            return [self._default_variant(definition)]

        total = matrix.combination_count()
        if total > self.max_variants:
            logger.info(
                "%s: %d variant combinations, keeping the first %d",
                definition.name,
                total,
                self.max_variants,
            )
        return [
            self._variant_from_combination(definition, combination)
            for combination in islice(matrix.combinations(), self.max_variants)
        ]

    def _default_variant(self, definition: ReusableWidgetDefinition) -> ComponentVariant:
        return ComponentVariant(
            name=DEFAULT_VARIANT_NAME,
            properties=dict(DEFAULT_VARIANT_PROPERTIES),
            node_spec=self.lower(definition),
        )

    def _variant_from_combination(
        self, definition: ReusableWidgetDefinition, combination: dict[str, Any]
    ) -> ComponentVariant:
        recorded = _matching_variant(definition.variants, combination)
        name = (recorded and recorded.name) or generate_variant_name(combination)
        try:
            if recorded is not None:
                widget = definition.variant_widget(recorded)
            else:
                widget = definition.with_overrides(combination)
        except ValidationError as e:
            # Values that do not fit a typed property keep the base widget
            self.lowerer.context.diagnostics.add_warning(
                f"Variant {name} of {definition.name} uses values the widget cannot take "
                f"({e.error_count()} invalid); lowered from the base widget",
                ErrorCategory.CONVERSION,
                definition.id,
            )
            widget = definition
        return ComponentVariant(name=name, properties=combination, node_spec=self.lower(widget))

    def lower(self, widget: WidgetNode) -> TargetNodeSpec:
        """Lower a variant widget, styling it when a resolver is set."""
        node = self.lowerer.lower(widget)
        if self.resolver is not None:
            self.resolver.apply_tree(widget, node, self.lowerer.context.diagnostics)
        return node

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    def derive_properties(self, definition: ReusableWidgetDefinition) -> list[ComponentProperty]:
        """Switchable properties: matrix dimensions, semantic and content properties."""
        matrix = PropertyMatrix.from_definition(definition)
        properties = [self._classify(key, matrix.values(key)) for key in matrix.keys()]

        names = {p.name for p in properties}
        for name, default, options in SEMANTIC_PROPERTIES.get(WidgetType(definition.type), ()):
            if name not in names:
                properties.append(
                    ComponentProperty(
                        name=name,
                        type=PropertyKind.VARIANT,
                        default_value=default,
                        variant_options=list(options),
                    )
                )

        if definition.has_text_content():
            properties.append(
                ComponentProperty(
                    name="Text",
                    type=PropertyKind.TEXT,
                    default_value=definition.extract_text() or "Text",
                )
            )
        if definition.has_icon_content():
            properties.append(
                ComponentProperty(
                    name="Icon",
                    type=PropertyKind.INSTANCE_SWAP,
                    default_value=ICON_PLACEHOLDER,
                )
            )
        return properties

    @staticmethod
    def _classify(key: str, values: list[MatrixValue]) -> ComponentProperty:
        name = format_property_name(key)
        kinds = {v.kind for v in values}
        if kinds == {ValueKind.BOOL}:
            return ComponentProperty(name=name, type=PropertyKind.BOOLEAN, default_value=False)
        if kinds == {ValueKind.STR}:
            options = [str(v.value) for v in values]
            return ComponentProperty(
                name=name,
                type=PropertyKind.VARIANT,
                default_value=options[0],
                variant_options=options,
            )
        return ComponentProperty(
            name=name, type=PropertyKind.TEXT, default_value=str(values[0].value)
        )

    # -------------------------------------------------------------------------
    # Organization and Switching
    # -------------------------------------------------------------------------

    @staticmethod
    def organize_variants(variants: list[ComponentVariant]) -> list[VariantGroup]:
        """Group variants by their most frequent property.

        Variants lacking the grouping property fall into a ``Default`` group.
        Without any grouping property, all variants form one group.
        """
        frequency: dict[str, int] = {}
        for variant in variants:
            for key in variant.properties:
                if key != "variant":
                    frequency[key] = frequency.get(key, 0) + 1
        if not frequency:
            return [VariantGroup("Default", "variant", list(variants))] if variants else []

        primary = max(frequency, key=lambda key: frequency[key])
        groups: dict[str, VariantGroup] = {}
        for variant in variants:
            value = variant.properties.get(primary)
            label = DEFAULT_VARIANT_NAME if value is None else _value_label(primary, value)
            groups.setdefault(label, VariantGroup(label, primary)).variants.append(variant)
        return list(groups.values())

    @staticmethod
    def find_variant(
        component: ComponentDefinition, selection: dict[str, Any]
    ) -> ComponentVariant | None:
        """Variant whose properties match every entry of the selection."""
        for variant in component.variants:
            if _matches(variant.properties, selection):
                return variant
        return None


def _matches(properties: dict[str, Any], selection: dict[str, Any]) -> bool:
    return all(
        key in properties and MatrixValue.classify(properties[key]) == MatrixValue.classify(value)
        for key, value in selection.items()
    )


def _matching_variant(
    variants: list[WidgetVariant], combination: dict[str, Any]
) -> WidgetVariant | None:
    return next((v for v in variants if _matches(v.properties, combination)), None)


def synthesize_variants(
    definition: ReusableWidgetDefinition, lowerer: NodeLowerer | None = None
) -> list[ComponentVariant]:
    """Convenience wrapper around VariantSynthesizer.synthesize_variants."""
    return VariantSynthesizer(lowerer).synthesize_variants(definition)


def derive_properties(definition: ReusableWidgetDefinition) -> list[ComponentProperty]:
    """Convenience wrapper around VariantSynthesizer.derive_properties."""
    return VariantSynthesizer().derive_properties(definition)


__all__ = [
    "ValueKind",
    "MatrixValue",
    "PropertyMatrix",
    "VariantGroup",
    "VariantSynthesizer",
    "synthesize_variants",
    "derive_properties",
    "generate_variant_name",
    "format_property_name",
    "capitalize_first",
    "DEFAULT_VARIANT_NAME",
    "ICON_PLACEHOLDER",
    "SEMANTIC_PROPERTIES",
]
