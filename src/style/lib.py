"""Style resolver.

Applies color, typography, spacing, border and shadow information to a
lowered node. Theme references are bound to design tokens when variable
usage is enabled; a missing token falls back to the literal value with a
warning, or is recorded as an error in strict mode.

Problems are collected in the returned StyleResult and never raised.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any

from src.config import get_style_defaults
from src.core import get_logger
from src.core.errors import ErrorCategory, ErrorCollector, InvalidColorError
from src.ir import (
    RGB,
    Effect,
    FontName,
    LetterSpacing,
    LineHeight,
    Paint,
    TargetNodeSpec,
    VariableBinding,
    Vector,
    to_host_dict,
)
from src.mid import (
    BorderInfo,
    ColorInfo,
    ShadowInfo,
    SpacingInfo,
    StyleInfo,
    TypographyInfo,
    WidgetNode,
)
from src.schema import NodeType
from src.tokens import (
    TokenTable,
    generate_variable_name,
    map_font_weight,
    typography_variable_name,
)

logger = get_logger("designgen.style")

FILL_PROPERTIES = ("backgroundColor", "color")
STROKE_PROPERTIES = ("borderColor",)

TYPOGRAPHY_PROPERTIES = ("fontSize", "fontFamily", "fontWeight", "lineHeight", "letterSpacing")


@dataclass
class StyleMappingConfig:
    """Switches controlling token-vs-literal resolution.

    Attributes:
        use_variables: Bind theme references to tokens.
        fallback_to_direct_values: On a token miss, apply the literal with a
            warning instead of recording an error.
        collection_prefix: Prefix of the collections searched for tokens.
        prefer_multi_mode: Look up multi-mode tokens first.
    """

    use_variables: bool = True
    fallback_to_direct_values: bool = True
    collection_prefix: str = "Default"
    prefer_multi_mode: bool = False

    @classmethod
    def from_environment(cls, **overrides: Any) -> "StyleMappingConfig":
        """Build a config from DESIGNGEN_* variables, then apply overrides."""
        values = get_style_defaults()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def updated(self, **changes: Any) -> "StyleMappingConfig":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class StyleResult:
    """Outcome of applying styles to one node."""

    success: bool = True
    applied_properties: list[str] = field(default_factory=list)
    variable_bindings: list[VariableBinding] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def merge(self, other: "StyleResult") -> None:
        self.applied_properties.extend(other.applied_properties)
        self.variable_bindings.extend(other.variable_bindings)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.success = self.success and other.success and not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "appliedProperties": list(self.applied_properties),
            "variableBindings": [to_host_dict(b) for b in self.variable_bindings],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


class StyleResolver:
    """Applies StyleInfo to TargetNodeSpec nodes.

    Example:
        >>> resolver = StyleResolver(TokenTable.from_theme(theme))
        >>> result = resolver.apply_styles(node, widget.styling)
        >>> result.success
        True
    """

    def __init__(
        self,
        token_table: TokenTable | None = None,
        config: StyleMappingConfig | None = None,
    ):
        self.token_table = token_table or TokenTable()
        self.config = config or StyleMappingConfig()

    # -------------------------------------------------------------------------
    # Entry Point
    # -------------------------------------------------------------------------

    def apply_styles(self, node: TargetNodeSpec, styling: StyleInfo) -> StyleResult:
        """Apply all styling to a node.

        Paints derived from the same styling during lowering are replaced,
        not duplicated. Any unexpected failure is converted into a failed
        result.
        """
        result = StyleResult()
        try:
            self._reset_paints(node, styling)
            if styling.colors:
                result.merge(self.apply_colors(node, styling.colors))
            if styling.typography is not None and node.type == NodeType.TEXT:
                result.merge(self.apply_typography(node, styling.typography))
            if styling.spacing is not None:
                result.merge(self.apply_spacing(node, styling.spacing))
            if styling.borders is not None:
                result.merge(self.apply_borders(node, styling.borders))
            if styling.shadows:
                result.merge(self.apply_shadows(node, styling.shadows))
            node.variables.extend(result.variable_bindings)
        except Exception as exc:
            logger.exception("Failed to apply styles to %s", node.id)
            result.errors.append(f"Failed to apply styles: {exc}")

        result.success = not result.errors
        return result

    def apply_tree(
        self,
        widget: WidgetNode,
        node: TargetNodeSpec,
        diagnostics: ErrorCollector | None = None,
    ) -> list[StyleResult]:
        """Apply styles over a widget tree and the node tree lowered from it.

        Both trees have the same shape, so they are walked in lockstep.
        Errors and warnings are also recorded in ``diagnostics`` when given.
        """
        results = []
        pairs = [(widget, node)]
        while pairs:
            source, target = pairs.pop()
            result = self.apply_styles(target, source.styling)
            results.append(result)
            if diagnostics is not None:
                for message in result.errors:
                    diagnostics.add_error(message, ErrorCategory.STYLE, target.id)
                for message in result.warnings:
                    diagnostics.add_warning(message, ErrorCategory.STYLE, target.id)
            pairs.extend(zip(reversed(source.children), reversed(target.children), strict=True))
        return results

    def _reset_paints(self, node: TargetNodeSpec, styling: StyleInfo) -> None:
        props = node.properties
        typography = styling.typography
        text_color = (
            typography is not None and bool(typography.color) and node.type == NodeType.TEXT
        )
        if text_color or any(c.property in FILL_PROPERTIES for c in styling.colors):
            props.fills = []
        border = styling.borders
        bordered = border is not None and bool(border.width) and bool(border.color)
        if bordered or any(c.property in STROKE_PROPERTIES for c in styling.colors):
            props.strokes = []
        if styling.shadows:
            props.effects = []

    # -------------------------------------------------------------------------
    # Token Lookup
    # -------------------------------------------------------------------------

    def _binding(self, suffix: str, name: str, target_property: str) -> VariableBinding | None:
        collection = f"{self.config.collection_prefix} {suffix}"
        alias = f"{{{collection}.{name}}}"
        if self.config.prefer_multi_mode:
            variable = self.token_table.get_multi_mode(collection, name)
            if variable is not None:
                logger.debug("Token hit (multi-mode) %s/%s", collection, name)
                return VariableBinding(
                    target_property=target_property,
                    variable_id=variable.id,
                    variable_alias=alias,
                )
        variable = self.token_table.get(collection, name)
        if variable is not None:
            logger.debug("Token hit %s/%s", collection, name)
            return VariableBinding(
                target_property=target_property,
                variable_id=variable.id,
                variable_alias=alias,
            )
        logger.debug("Token miss %s/%s", collection, name)
        return None

    def _color_binding(self, color: ColorInfo) -> VariableBinding | None:
        target = "strokes" if color.property in STROKE_PROPERTIES else "fills"
        return self._binding("Colors", generate_variable_name(color.theme_path), target)

    def _typography_binding(self, prop: str, theme_path: str) -> VariableBinding | None:
        return self._binding("Typography", typography_variable_name(theme_path, prop), prop)

    # -------------------------------------------------------------------------
    # Colors
    # -------------------------------------------------------------------------

    def apply_colors(self, node: TargetNodeSpec, colors: list[ColorInfo]) -> StyleResult:
        result = StyleResult()
        for color in colors:
            try:
                if color.is_theme_reference and color.theme_path and self.config.use_variables:
                    binding = self._color_binding(color)
                    if binding is not None:
                        result.variable_bindings.append(binding)
                        result.applied_properties.append(color.property)
                    elif self.config.fallback_to_direct_values:
                        self._apply_direct_color(node, color, result)
                        result.warnings.append(
                            f"Variable not found for {color.theme_path}, using direct value"
                        )
                    else:
                        result.errors.append(
                            f"Variable not found for theme path: {color.theme_path}"
                        )
                else:
                    self._apply_direct_color(node, color, result)
            except InvalidColorError as exc:
                result.errors.append(f"Failed to apply color {color.property}: {exc.message}")
        result.success = not result.errors
        return result

    @staticmethod
    def _apply_direct_color(node: TargetNodeSpec, color: ColorInfo, result: StyleResult) -> None:
        props = node.properties
        if color.property in FILL_PROPERTIES:
            paint = Paint.solid(RGB.from_hex(color.value))
            props.fills = (props.fills or []) + [paint]
        elif color.property in STROKE_PROPERTIES:
            paint = Paint.solid(RGB.from_hex(color.value))
            props.strokes = (props.strokes or []) + [paint]
        else:
            result.warnings.append(f"Color property {color.property} has no node equivalent")
            return
        result.applied_properties.append(color.property)

    # -------------------------------------------------------------------------
    # Typography
    # -------------------------------------------------------------------------

    def apply_typography(self, node: TargetNodeSpec, typography: TypographyInfo) -> StyleResult:
        result = StyleResult()
        if node.type != NodeType.TEXT:
            result.warnings.append("Typography styles can only be applied to TEXT nodes")
            return result

        values = {
            "fontSize": typography.font_size,
            "fontFamily": typography.font_family or None,
            "fontWeight": typography.font_weight or None,
            "lineHeight": typography.line_height,
            "letterSpacing": typography.letter_spacing,
        }
        themed = (
            typography.is_theme_reference
            and bool(typography.theme_path)
            and self.config.use_variables
        )
        for prop in TYPOGRAPHY_PROPERTIES:
            value = values[prop]
            if value is None:
                continue
            if not themed:
                self._set_typography(node, prop, value)
                result.applied_properties.append(prop)
                continue
            binding = self._typography_binding(prop, typography.theme_path)
            if binding is not None:
                result.variable_bindings.append(binding)
                result.applied_properties.append(prop)
            elif self.config.fallback_to_direct_values:
                self._set_typography(node, prop, value)
                result.applied_properties.append(prop)
                result.warnings.append(
                    f"Variable not found for {typography.theme_path}, using direct value"
                )
            else:
                result.errors.append(
                    f"Variable not found for theme path: {typography.theme_path}"
                )

        if typography.color:
            text_color = ColorInfo(
                property="color",
                value=typography.color,
                is_theme_reference=typography.is_theme_reference,
                theme_path=typography.theme_path,
            )
            result.merge(self.apply_colors(node, [text_color]))
        result.success = not result.errors
        return result

    @staticmethod
    def _set_typography(node: TargetNodeSpec, prop: str, value: Any) -> None:
        props = node.properties
        if prop == "fontSize":
            props.font_size = value
        elif prop == "fontFamily":
            style = props.font_name.style if props.font_name else "Regular"
            props.font_name = FontName(family=value, style=style or "Regular")
        elif prop == "fontWeight":
            family = props.font_name.family if props.font_name else "Inter"
            props.font_name = FontName(family=family or "Inter", style=map_font_weight(value))
        elif prop == "lineHeight":
            props.line_height = LineHeight(unit="PERCENT", value=value * 100)
        elif prop == "letterSpacing":
            props.letter_spacing = LetterSpacing(unit="PIXELS", value=value)

    # -------------------------------------------------------------------------
    # Spacing, Borders, Shadows
    # -------------------------------------------------------------------------

    def apply_spacing(self, node: TargetNodeSpec, spacing: SpacingInfo) -> StyleResult:
        """Apply padding and margin to an auto-layout node.

        Nodes without auto layout are left untouched. Margin is approximated
        by item spacing equal to the largest of the four margin edges.
        """
        result = StyleResult()
        layout = node.auto_layout
        if layout is None:
            return result
        if spacing.padding is not None:
            layout.padding_top = spacing.padding.top
            layout.padding_right = spacing.padding.right
            layout.padding_bottom = spacing.padding.bottom
            layout.padding_left = spacing.padding.left
            result.applied_properties.append("padding")
        if spacing.margin is not None:
            layout.item_spacing = spacing.margin.max_edge()
            result.applied_properties.append("margin")
        return result

    def apply_borders(self, node: TargetNodeSpec, borders: BorderInfo) -> StyleResult:
        result = StyleResult()
        props = node.properties
        if borders.width and borders.color:
            try:
                paint = Paint.solid(RGB.from_hex(borders.color))
            except InvalidColorError as exc:
                result.errors.append(f"Failed to apply border styles: {exc.message}")
            else:
                props.strokes = (props.strokes or []) + [paint]
                props.stroke_weight = borders.width
                result.applied_properties.append("border")

        radius = borders.radius
        if radius is not None:
            if radius.is_uniform:
                props.corner_radius = radius.top_left
                props.top_left_radius = props.top_right_radius = None
                props.bottom_left_radius = props.bottom_right_radius = None
            else:
                props.corner_radius = None
                props.top_left_radius = radius.top_left
                props.top_right_radius = radius.top_right
                props.bottom_left_radius = radius.bottom_left
                props.bottom_right_radius = radius.bottom_right
            result.applied_properties.append("borderRadius")
        result.success = not result.errors
        return result

    def apply_shadows(self, node: TargetNodeSpec, shadows: list[ShadowInfo]) -> StyleResult:
        result = StyleResult()
        effects = list(node.properties.effects or [])
        try:
            for shadow in shadows:
                effects.append(
                    Effect(
                        color=RGB.from_hex(shadow.color),
                        offset=Vector(x=shadow.offset.x, y=shadow.offset.y),
                        radius=shadow.blur,
                        spread=shadow.spread or 0,
                    )
                )
        except InvalidColorError as exc:
            result.errors.append(f"Failed to apply shadow styles: {exc.message}")
        else:
            node.properties.effects = effects
            result.applied_properties.append("shadows")
        result.success = not result.errors
        return result


__all__ = [
    "StyleMappingConfig",
    "StyleResult",
    "StyleResolver",
    "FILL_PROPERTIES",
    "STROKE_PROPERTIES",
]
