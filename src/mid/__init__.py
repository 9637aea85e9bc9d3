"""MID layer - Metadata-Intermediate-Definition for abstract widget trees.

This module provides the input widget model (WidgetNode), styling and
layout models, the theme model and semantic validation. Widget type
definitions are delegated to the authoritative schema module.

Example usage:
    >>> from src.mid import WidgetNode, validate_widget_tree
    >>> node = WidgetNode(id="root", type="Column")
    >>> errors = validate_widget_tree(node)
"""

from .lib import (
    TEXT_STYLE_NAMES,
    AlignmentInfo,
    BorderInfo,
    BorderRadius,
    BoxDecoration,
    ColorInfo,
    ColorScheme,
    CrossAxisAlignment,
    EdgeInsets,
    GradientInfo,
    LayoutInfo,
    MainAxisAlignment,
    Point,
    PositionInfo,
    ReusableWidgetDefinition,
    ShadowInfo,
    SpacingInfo,
    StyleInfo,
    TextStyle,
    TextTheme,
    ThemeModel,
    TypographyInfo,
    ValidationError,
    WidgetNode,
    WidgetProperties,
    WidgetVariant,
    is_valid,
    normalize_font_weight,
    validate_widget_tree,
    walk,
)

__all__ = [
    # Alignment enums
    "MainAxisAlignment",
    "CrossAxisAlignment",
    # Style primitives
    "Point",
    "EdgeInsets",
    "BorderRadius",
    "BorderInfo",
    "ShadowInfo",
    "ColorInfo",
    "TypographyInfo",
    "SpacingInfo",
    "StyleInfo",
    "GradientInfo",
    "BoxDecoration",
    # Layout
    "AlignmentInfo",
    "LayoutInfo",
    "PositionInfo",
    # Core model
    "WidgetProperties",
    "WidgetNode",
    "WidgetVariant",
    "ReusableWidgetDefinition",
    # Theme
    "ColorScheme",
    "TextStyle",
    "TextTheme",
    "ThemeModel",
    "TEXT_STYLE_NAMES",
    # Validation
    "ValidationError",
    "validate_widget_tree",
    "is_valid",
    "walk",
    "normalize_font_weight",
]
