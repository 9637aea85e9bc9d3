"""End-to-end conversion pipeline.

Lowers a widget tree, resolves its styling against a token table built
once per run, turns recurring widgets into components, swaps their usages
for instances, and organizes the components into a library. Per-node
problems end up in one ErrorCollector; only configuration-class failures
raise.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from src.components import ComponentAssembler
from src.core import ErrorCollector, get_logger
from src.core.errors import ErrorCategory
from src.ir import ComponentDefinition, TargetNodeSpec, to_host_dict
from src.library import LibraryOrganizer, LibraryStructure
from src.lowering import LoweringContext, NodeLowerer
from src.mid import ReusableWidgetDefinition, ThemeModel, WidgetNode, walk
from src.schema import NodeType
from src.style import StyleMappingConfig, StyleResolver
from src.tokens import TokenTable
from src.variants import VariantSynthesizer

logger = get_logger("designgen.pipeline")

BASE_MODE_NAME = "Default"


@dataclass
class ConversionStats:
    """Counters of one conversion run; processing_time is in milliseconds."""

    widgets_found: int = 0
    widgets_converted: int = 0
    components_created: int = 0
    variables_created: int = 0
    frames_created: int = 0
    text_nodes_created: int = 0
    instances_created: int = 0
    unsupported_widgets: int = 0
    processing_time: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "widgetsFound": self.widgets_found,
            "widgetsConverted": self.widgets_converted,
            "componentsCreated": self.components_created,
            "variablesCreated": self.variables_created,
            "framesCreated": self.frames_created,
            "textNodesCreated": self.text_nodes_created,
            "instancesCreated": self.instances_created,
            "unsupportedWidgets": self.unsupported_widgets,
            "processingTime": round(self.processing_time, 3),
        }


@dataclass
class ConversionResult:
    """Everything one conversion run produced."""

    root: TargetNodeSpec
    components: list[ComponentDefinition]
    library: LibraryStructure
    tokens: TokenTable
    stats: ConversionStats
    diagnostics: ErrorCollector = field(default_factory=ErrorCollector)

    @property
    def success(self) -> bool:
        return not self.diagnostics.has_errors

    def to_dict(self) -> dict[str, Any]:
        """Host interchange shape of the whole run."""
        return {
            "success": self.success,
            "root": to_host_dict(self.root),
            "components": [to_host_dict(c) for c in self.components],
            "library": self.library.to_dict(),
            "variables": self.tokens.to_dict(),
            "stats": self.stats.to_dict(),
            **self.diagnostics.to_dict(),
        }


class Converter:
    """Reusable conversion entry point.

    Each call to convert owns a fresh LoweringContext, so one Converter can
    serve independent runs.

    Example:
        >>> converter = Converter(StyleMappingConfig.from_environment())
        >>> result = converter.convert(tree, theme, definitions)
        >>> result.stats.frames_created
        3
    """

    def __init__(
        self,
        config: StyleMappingConfig | None = None,
        max_variants: int | None = None,
        library_name: str | None = None,
        library_version: str | None = None,
    ):
        self.config = config or StyleMappingConfig.from_environment()
        self.max_variants = max_variants
        self.library_name = library_name
        self.library_version = library_version

    def build_tokens(
        self,
        theme: ThemeModel | None,
        extra_themes: Mapping[str, ThemeModel] | None = None,
    ) -> TokenTable:
        """Token table for a run; extra themes add multi-mode collections.

        Raises:
            VariableError: If the multi-mode theme lists are inconsistent.
        """
        if theme is None:
            return TokenTable()
        prefix = self.config.collection_prefix
        table = TokenTable.from_theme(theme, prefix)
        if extra_themes:
            table.add_multi_mode(
                [theme, *extra_themes.values()],
                [BASE_MODE_NAME, *extra_themes.keys()],
                prefix,
            )
        return table

    def convert(
        self,
        root: WidgetNode,
        theme: ThemeModel | None = None,
        definitions: Sequence[ReusableWidgetDefinition] = (),
        extra_themes: Mapping[str, ThemeModel] | None = None,
    ) -> ConversionResult:
        started = time.perf_counter()
        logger.info("Converting widget tree %s (%d definitions)", root.id, len(definitions))

        tokens = self.build_tokens(theme, extra_themes)
        context = LoweringContext()
        diagnostics = context.diagnostics
        for issue in tokens.issues:
            diagnostics.add_warning(issue, ErrorCategory.THEME)

        lowerer = NodeLowerer(context)
        resolver = StyleResolver(tokens, self.config)
        node = lowerer.lower(root)
        resolver.apply_tree(root, node, diagnostics)
        self._report_unsupported(root, diagnostics)

        synthesizer = VariantSynthesizer(lowerer, self.max_variants, resolver)
        assembler = ComponentAssembler(lowerer, synthesizer)
        components = [assembler.build_component(d) for d in definitions]

        usages = {
            usage_id: component.id
            for definition, component in zip(definitions, components)
            for usage_id in definition.usage_ids
        }
        node = self._replace_usages(root, node, usages, assembler)

        library = LibraryOrganizer(self.library_name, self.library_version).organize(
            definitions, components
        )

        stats = self._collect_stats(root, node, components, tokens)
        stats.processing_time = (time.perf_counter() - started) * 1000
        logger.info(
            "Converted %d widgets into %d nodes, %d components (%d errors, %d warnings)",
            stats.widgets_found,
            stats.widgets_converted,
            stats.components_created,
            len(diagnostics.errors),
            len(diagnostics.warnings),
        )
        return ConversionResult(
            root=node,
            components=components,
            library=library,
            tokens=tokens,
            stats=stats,
            diagnostics=diagnostics,
        )

    @staticmethod
    def _replace_usages(
        widget: WidgetNode,
        node: TargetNodeSpec,
        usages: dict[str, str],
        assembler: ComponentAssembler,
    ) -> TargetNodeSpec:
        """Swap lowered usages of components for instances, keeping placement."""
        if widget.id in usages:
            instance = assembler.build_instance(widget, usages[widget.id])
            placed, props = instance.properties, node.properties
            placed.x, placed.y = props.x, props.y
            placed.z_index = props.z_index
            placed.constraints = props.constraints
            if placed.layout_grow is None:
                placed.layout_grow = props.layout_grow
            if placed.width is None:
                placed.width = props.width
            if placed.height is None:
                placed.height = props.height
            placed.layout_sizing_horizontal = props.layout_sizing_horizontal
            placed.layout_sizing_vertical = props.layout_sizing_vertical
            return instance
        node.children = [
            Converter._replace_usages(child_widget, child_node, usages, assembler)
            for child_widget, child_node in zip(widget.children, node.children, strict=True)
        ]
        return node

    @staticmethod
    def _report_unsupported(root: WidgetNode, diagnostics: ErrorCollector) -> None:
        for widget in walk(root):
            if widget.is_unsupported:
                diagnostics.add_warning(
                    f"Unsupported widget type {widget.source_type} converted to a frame",
                    ErrorCategory.WIDGET,
                    widget.id,
                )

    @staticmethod
    def _collect_stats(
        root: WidgetNode,
        node: TargetNodeSpec,
        components: list[ComponentDefinition],
        tokens: TokenTable,
    ) -> ConversionStats:
        stats = ConversionStats(
            components_created=len(components),
            variables_created=tokens.variable_count(),
        )
        for widget in walk(root):
            stats.widgets_found += 1
            if widget.is_unsupported:
                stats.unsupported_widgets += 1
        for target in node.walk():
            stats.widgets_converted += 1
            if target.type == NodeType.FRAME:
                stats.frames_created += 1
            elif target.type == NodeType.TEXT:
                stats.text_nodes_created += 1
            elif target.type == NodeType.INSTANCE:
                stats.instances_created += 1
        return stats


def convert(
    root: WidgetNode,
    theme: ThemeModel | None = None,
    definitions: Sequence[ReusableWidgetDefinition] = (),
    config: StyleMappingConfig | None = None,
    extra_themes: Mapping[str, ThemeModel] | None = None,
) -> ConversionResult:
    """Convert a widget tree in one call; see Converter.convert."""
    return Converter(config).convert(root, theme, definitions, extra_themes)


__all__ = [
    "ConversionStats",
    "ConversionResult",
    "Converter",
    "convert",
]
