"""Design token table built from themes.

Example usage:
    >>> from src.tokens import TokenTable, generate_variable_name
    >>> table = TokenTable.from_theme(theme)
    >>> table.get("Default Colors", generate_variable_name("colorScheme.primary"))
"""

from .lib import (
    FONT_WEIGHT_STYLES,
    MultiModeCollection,
    MultiModeVariable,
    TokenTable,
    Variable,
    VariableCollection,
    VariableMode,
    VariableScope,
    VariableType,
    generate_variable_name,
    map_font_weight,
    typography_variable_name,
)

__all__ = [
    # Enums
    "VariableType",
    "VariableScope",
    # Naming
    "generate_variable_name",
    "typography_variable_name",
    "FONT_WEIGHT_STYLES",
    "map_font_weight",
    # Records
    "Variable",
    "VariableCollection",
    "VariableMode",
    "MultiModeVariable",
    "MultiModeCollection",
    # Table
    "TokenTable",
]
