"""Intermediate Representation (IR) models for the target node graph."""

from src.ir.lib import (
    BLACK,
    RGB,
    WHITE,
    AutoLayoutSpec,
    AxisAlign,
    AxisSizing,
    ComponentDefinition,
    ComponentProperty,
    ComponentVariant,
    Constraint,
    Constraints,
    Effect,
    FontName,
    GradientStop,
    LayoutMode,
    LetterSpacing,
    LineHeight,
    NodeProperties,
    Paint,
    PropertyKind,
    TargetNodeSpec,
    VariableBinding,
    Vector,
    to_host_dict,
)

__all__ = [
    # Enums
    "LayoutMode",
    "AxisSizing",
    "AxisAlign",
    "Constraint",
    "PropertyKind",
    # Paint
    "RGB",
    "WHITE",
    "BLACK",
    "GradientStop",
    "Paint",
    "Vector",
    "Effect",
    "FontName",
    "Constraints",
    "LineHeight",
    "LetterSpacing",
    # Core models
    "NodeProperties",
    "AutoLayoutSpec",
    "VariableBinding",
    "TargetNodeSpec",
    # Components
    "ComponentProperty",
    "ComponentVariant",
    "ComponentDefinition",
    "to_host_dict",
]
