"""Output formatting for conversion review.

Provides human-readable text representations of lowered node trees
and conversion summaries for terminal feedback.

Example usage:
    from src.output import format_conversion_summary, format_node_tree
    from src.pipeline import convert

    result = convert(tree, theme)
    print(format_node_tree(result.root))
    print(format_conversion_summary(result))
"""

from src.output.lib import format_conversion_summary, format_node_tree

__all__ = [
    "format_node_tree",
    "format_conversion_summary",
]
