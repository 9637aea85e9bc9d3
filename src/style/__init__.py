"""Style resolver: token-bound or literal styling of lowered nodes.

Example usage:
    >>> from src.style import StyleMappingConfig, StyleResolver
    >>> resolver = StyleResolver(table, StyleMappingConfig(fallback_to_direct_values=False))
    >>> result = resolver.apply_styles(node, widget.styling)
"""

from .lib import (
    FILL_PROPERTIES,
    STROKE_PROPERTIES,
    StyleMappingConfig,
    StyleResolver,
    StyleResult,
)

__all__ = [
    "StyleMappingConfig",
    "StyleResult",
    "StyleResolver",
    "FILL_PROPERTIES",
    "STROKE_PROPERTIES",
]
