"""Component assembler: component definitions and instances.

Example usage:
    >>> from src.components import ComponentAssembler
    >>> assembler = ComponentAssembler()
    >>> component = assembler.build_component(definition)
    >>> instance = assembler.build_instance(usage, component.name)
"""

from .lib import (
    ComponentAssembler,
    component_slug,
    sanitize_component_name,
    usage_context,
)

__all__ = [
    # Assembler
    "ComponentAssembler",
    # Naming
    "usage_context",
    "sanitize_component_name",
    "component_slug",
]
