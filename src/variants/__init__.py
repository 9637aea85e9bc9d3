"""Variant synthesizer: bounded variant combinations and component properties.

Example usage:
    >>> from src.variants import VariantSynthesizer
    >>> synthesizer = VariantSynthesizer(max_variants=8)
    >>> variants = synthesizer.synthesize_variants(definition)
"""

from .lib import (
    DEFAULT_VARIANT_NAME,
    ICON_PLACEHOLDER,
    SEMANTIC_PROPERTIES,
    MatrixValue,
    PropertyMatrix,
    ValueKind,
    VariantGroup,
    VariantSynthesizer,
    capitalize_first,
    derive_properties,
    format_property_name,
    generate_variant_name,
    synthesize_variants,
)

__all__ = [
    # Matrix
    "ValueKind",
    "MatrixValue",
    "PropertyMatrix",
    # Synthesis
    "VariantSynthesizer",
    "VariantGroup",
    "synthesize_variants",
    "derive_properties",
    # Naming
    "generate_variant_name",
    "format_property_name",
    "capitalize_first",
    # Constants
    "DEFAULT_VARIANT_NAME",
    "ICON_PLACEHOLDER",
    "SEMANTIC_PROPERTIES",
]
