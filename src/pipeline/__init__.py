"""Conversion pipeline: widget tree and theme to node tree, components and library.

Example usage:
    >>> from src.pipeline import convert
    >>> result = convert(tree, theme, definitions)
    >>> result.stats.to_dict()
"""

from .lib import ConversionResult, ConversionStats, Converter, convert

__all__ = [
    "Converter",
    "ConversionResult",
    "ConversionStats",
    "convert",
]
