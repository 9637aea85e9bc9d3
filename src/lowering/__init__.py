"""Node lowering engine: WidgetNode trees to TargetNodeSpec trees.

Example usage:
    >>> from src.lowering import LoweringContext, NodeLowerer
    >>> lowerer = NodeLowerer(LoweringContext())
    >>> node = lowerer.lower(widget)
"""

from .lib import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    FILL_COLOR_PROPERTIES,
    NAME_TEXT_LIMIT,
    LoweringContext,
    NodeLowerer,
    main_axis,
    node_name,
)

__all__ = [
    # Engine
    "LoweringContext",
    "NodeLowerer",
    # Helpers
    "node_name",
    "main_axis",
    # Defaults
    "DEFAULT_FONT_SIZE",
    "DEFAULT_FONT_FAMILY",
    "FILL_COLOR_PROPERTIES",
    "NAME_TEXT_LIMIT",
]
