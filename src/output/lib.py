"""Output formatting for conversion review.

Generates human-readable text representations of lowered node trees
and conversion runs for terminal feedback.
"""

from src.ir import TargetNodeSpec
from src.pipeline import ConversionResult
from src.schema import NodeType


def format_node_tree(node: TargetNodeSpec) -> str:
    """Format a TargetNodeSpec as a human-readable tree.

    Example output:
        Column [FRAME, vertical]
        ├── Headline [TEXT, "Welcome"]
        └── Button / Primary "Buy" [INSTANCE -> component-button---primary-4]

    Args:
        node: Root node to format.

    Returns:
        Formatted tree string.
    """
    lines: list[str] = []
    _format_node(node, lines, "", is_last=True, is_root=True)
    return "\n".join(lines)


def _value(member) -> str:
    """Enum fields may hold members or plain values depending on how they were set."""
    return getattr(member, "value", member)


def _format_node(
    node: TargetNodeSpec,
    lines: list[str],
    prefix: str,
    is_last: bool,
    is_root: bool = False,
) -> None:
    """Recursively format a node and its children."""
    if is_root:
        connector = ""
        child_prefix = ""
    else:
        connector = "└── " if is_last else "├── "
        child_prefix = prefix + ("    " if is_last else "│   ")

    attrs = [_value(node.type)]
    if node.auto_layout is not None and node.auto_layout.layout_mode != "NONE":
        attrs.append(_value(node.auto_layout.layout_mode).lower())
    if node.type == NodeType.TEXT and node.properties.characters:
        attrs.append(f'"{node.properties.characters}"')
    if node.type == NodeType.INSTANCE and node.properties.component_id:
        attrs[0] = f"{attrs[0]} -> {node.properties.component_id}"
    if node.variables:
        attrs.append(f"{len(node.variables)} bound")

    lines.append(f"{prefix}{connector}{node.name} [{', '.join(attrs)}]")

    for i, child in enumerate(node.children):
        _format_node(child, lines, child_prefix, i == len(node.children) - 1)


def format_conversion_summary(result: ConversionResult) -> str:
    """Summarize a conversion run: counters, components and diagnostics."""
    stats = result.stats
    status = "succeeded" if result.success else "failed"
    lines = [
        f"Conversion {status} in {stats.processing_time:.1f}ms",
        f"  Widgets: {stats.widgets_found} found, {stats.widgets_converted} nodes produced",
        f"  Frames: {stats.frames_created}  Text: {stats.text_nodes_created}  "
        f"Instances: {stats.instances_created}",
        f"  Variables: {stats.variables_created}",
        f"  Unsupported widgets: {stats.unsupported_widgets}",
    ]

    if result.components:
        lines.append(f"  Components ({len(result.components)}):")
        for component in result.components:
            lines.append(f"    - {component.name} ({len(component.variants)} variants)")

    for record in result.diagnostics.errors:
        lines.append(f"  ERROR [{record.category.value}] {record.message}")
    for record in result.diagnostics.warnings:
        lines.append(f"  WARNING [{record.category.value}] {record.message}")

    return "\n".join(lines)


__all__ = [
    "format_node_tree",
    "format_conversion_summary",
]
