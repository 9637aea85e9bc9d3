"""Design token (variable) table built from a theme.

Tokens are grouped into collections named ``"{theme} Colors"``,
``"{theme} Typography"``, ``"{theme} Spacing"`` and
``"{theme} Border Radius"``. Multi-mode collections hold one value per
theme mode (e.g. light and dark). The table is built once per conversion
run and is read-only afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from src.core import get_logger
from src.core.errors import InvalidColorError, VariableError
from src.ir import RGB, to_host_dict
from src.mid import ColorScheme, TextStyle, TextTheme, ThemeModel

logger = get_logger("designgen.tokens")


class VariableType(str, Enum):
    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


class VariableScope(str, Enum):
    """Node properties a variable may be bound to."""

    ALL_FILLS = "ALL_FILLS"
    ALL_STROKES = "ALL_STROKES"
    TEXT_CONTENT = "TEXT_CONTENT"
    CORNER_RADIUS = "CORNER_RADIUS"
    WIDTH_HEIGHT = "WIDTH_HEIGHT"
    GAP = "GAP"
    FONT_SIZE = "FONT_SIZE"
    FONT_FAMILY = "FONT_FAMILY"
    FONT_WEIGHT = "FONT_WEIGHT"
    LINE_HEIGHT = "LINE_HEIGHT"
    LETTER_SPACING = "LETTER_SPACING"


# =============================================================================
# Naming and Weight Mapping
# =============================================================================

FONT_WEIGHT_STYLES: dict[str, str] = {
    "100": "Thin",
    "200": "Extra Light",
    "300": "Light",
    "400": "Regular",
    "500": "Medium",
    "600": "Semi Bold",
    "700": "Bold",
    "800": "Extra Bold",
    "900": "Black",
    "normal": "Regular",
    "bold": "Bold",
}


def map_font_weight(weight: str | None) -> str:
    """Map a numeric or keyword font weight to a font style name."""
    if weight is None:
        return "Regular"
    return FONT_WEIGHT_STYLES.get(str(weight), "Regular")


_PATH_PREFIX = re.compile(r"^(colorScheme|textTheme)\.")
_UPPER = re.compile(r"([A-Z])")


def _kebab(value: str) -> str:
    return _UPPER.sub(r"-\1", value).lower().lstrip("-")


def generate_variable_name(theme_path: str) -> str:
    """Derive a token name from a dotted theme path.

    ``colorScheme.onPrimary`` becomes ``on-primary`` and
    ``spacing.medium`` becomes ``spacing-medium``.
    """
    stripped = _PATH_PREFIX.sub("", theme_path)
    return "-".join(_kebab(part) for part in stripped.split(".") if part)


def typography_variable_name(theme_path: str, prop: str) -> str:
    """Token name for one property of a text style.

    ``textTheme.bodyLarge`` with ``fontSize`` gives ``body-large-font-size``.
    Paths outside the text theme fall back to generate_variable_name.
    """
    parts = theme_path.split(".")
    if "textTheme" in parts and len(parts) >= 2:
        index = parts.index("textTheme")
        if index + 1 < len(parts):
            return f"{_kebab(parts[index + 1])}-{_kebab(prop)}"
    return generate_variable_name(theme_path)


# =============================================================================
# Token Records
# =============================================================================

# name -> (ColorScheme field, scopes, description, required)
_FILL_STROKE = (VariableScope.ALL_FILLS, VariableScope.ALL_STROKES)
_FILL = (VariableScope.ALL_FILLS,)
_STROKE = (VariableScope.ALL_STROKES,)

COLOR_TOKENS: tuple[tuple[str, str, tuple[VariableScope, ...], str], ...] = (
    ("primary", "primary", _FILL_STROKE, "Primary brand color"),
    ("on-primary", "on_primary", _FILL_STROKE, "Color for content on primary background"),
    ("secondary", "secondary", _FILL_STROKE, "Secondary brand color"),
    ("on-secondary", "on_secondary", _FILL_STROKE, "Color for content on secondary background"),
    ("error", "error", _FILL_STROKE, "Error state color"),
    ("on-error", "on_error", _FILL_STROKE, "Color for content on error background"),
    ("background", "background", _FILL, "Background color"),
    ("on-background", "on_background", _FILL_STROKE, "Color for content on background"),
    ("surface", "surface", _FILL, "Surface color for cards and sheets"),
    ("on-surface", "on_surface", _FILL_STROKE, "Color for content on surface"),
    ("surface-variant", "surface_variant", _FILL, "Surface variant color"),
    ("on-surface-variant", "on_surface_variant", _FILL_STROKE, "Color for content on surface variant"),
    ("outline", "outline", _STROKE, "Outline color for borders"),
    ("shadow", "shadow", _FILL, "Shadow color"),
)

# suffix -> (TextStyle field, type, scope, description suffix)
TYPOGRAPHY_TOKENS: tuple[tuple[str, str, VariableType, VariableScope, str], ...] = (
    ("font-size", "font_size", VariableType.FLOAT, VariableScope.FONT_SIZE, "font size"),
    ("font-family", "font_family", VariableType.STRING, VariableScope.FONT_FAMILY, "font family"),
    ("font-weight", "font_weight", VariableType.STRING, VariableScope.FONT_WEIGHT, "font weight"),
    ("line-height", "height", VariableType.FLOAT, VariableScope.LINE_HEIGHT, "line height multiplier"),
    ("letter-spacing", "letter_spacing", VariableType.FLOAT, VariableScope.LETTER_SPACING, "letter spacing"),
)


def _value_to_dict(value: Any) -> Any:
    return to_host_dict(value) if isinstance(value, RGB) else value


@dataclass
class Variable:
    """A single-mode token."""

    name: str
    type: VariableType
    scopes: list[VariableScope]
    value: Any
    description: str = ""
    collection: str = ""

    @property
    def id(self) -> str:
        return f"{self.collection}-{self.name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "scopes": [s.value for s in self.scopes],
            "value": _value_to_dict(self.value),
            "description": self.description,
        }


@dataclass
class VariableCollection:
    name: str
    description: str = ""
    variables: list[Variable] = field(default_factory=list)

    def get(self, name: str) -> Variable | None:
        return next((v for v in self.variables if v.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "variables": [v.to_dict() for v in self.variables],
        }


@dataclass
class VariableMode:
    name: str
    mode_id: str


@dataclass
class MultiModeVariable:
    """A token with one value per theme mode, keyed by mode name."""

    name: str
    type: VariableType
    scopes: list[VariableScope]
    values: dict[str, Any]
    description: str = ""
    collection: str = ""

    @property
    def id(self) -> str:
        return f"multimode-{self.collection}-{self.name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "scopes": [s.value for s in self.scopes],
            "values": {k: _value_to_dict(v) for k, v in self.values.items()},
            "description": self.description,
        }


@dataclass
class MultiModeCollection:
    name: str
    description: str = ""
    modes: list[VariableMode] = field(default_factory=list)
    variables: list[MultiModeVariable] = field(default_factory=list)

    def get(self, name: str) -> MultiModeVariable | None:
        return next((v for v in self.variables if v.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "modes": [{"name": m.name, "modeId": m.mode_id} for m in self.modes],
            "variables": [v.to_dict() for v in self.variables],
        }


# =============================================================================
# Token Table
# =============================================================================


class TokenTable:
    """Lookup table of tokens keyed by (collection name, token name).

    Example:
        >>> table = TokenTable.from_theme(theme)
        >>> table.get("Default Colors", "primary").value
        RGB(r=0.129..., g=0.588..., b=0.952...)
    """

    def __init__(self) -> None:
        self._collections: dict[str, VariableCollection] = {}
        self._multi_mode: dict[str, MultiModeCollection] = {}
        self.issues: list[str] = []

    @classmethod
    def from_theme(cls, theme: ThemeModel, theme_name: str = "Default") -> "TokenTable":
        table = cls()
        table.add_theme(theme, theme_name)
        return table

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_theme(self, theme: ThemeModel, theme_name: str = "Default") -> list[VariableCollection]:
        """Add the four single-mode collections for a theme."""
        collections = [
            self._color_collection(theme.color_scheme, f"{theme_name} Colors"),
            self._typography_collection(theme.text_theme, f"{theme_name} Typography"),
            self._scale_collection(
                theme.spacing,
                f"{theme_name} Spacing",
                "spacing",
                [VariableScope.GAP, VariableScope.WIDTH_HEIGHT],
                "Spacing scale",
                "Spacing variables from Flutter spacing scale",
            ),
            self._scale_collection(
                theme.border_radius,
                f"{theme_name} Border Radius",
                "border-radius",
                [VariableScope.CORNER_RADIUS],
                "Border radius",
                "Border radius variables from Flutter border radius scale",
            ),
        ]
        for collection in collections:
            self._collections[collection.name] = collection
        logger.debug(
            "Built %d tokens for theme %s",
            sum(len(c.variables) for c in collections),
            theme_name,
        )
        return collections

    def add_multi_mode(
        self,
        themes: Sequence[ThemeModel],
        theme_names: Sequence[str],
        collection_name: str,
    ) -> list[MultiModeCollection]:
        """Add multi-mode collections with one mode per theme.

        Raises:
            VariableError: If the number of themes and names differ.
        """
        if len(themes) != len(theme_names):
            raise VariableError(
                "Number of themes must match number of theme names", collection_name
            )
        if not themes:
            return []

        modes = [VariableMode(name, f"mode-{i}") for i, name in enumerate(theme_names)]
        collections = [
            self._multi_mode_colors(themes, theme_names, modes, f"{collection_name} Colors"),
            self._multi_mode_typography(themes, theme_names, modes, f"{collection_name} Typography"),
            self._multi_mode_scale(
                [t.spacing for t in themes],
                theme_names,
                modes,
                f"{collection_name} Spacing",
                "spacing",
                [VariableScope.GAP, VariableScope.WIDTH_HEIGHT],
                "Spacing scale",
            ),
            self._multi_mode_scale(
                [t.border_radius for t in themes],
                theme_names,
                modes,
                f"{collection_name} Border Radius",
                "border-radius",
                [VariableScope.CORNER_RADIUS],
                "Border radius",
            ),
        ]
        for collection in collections:
            self._multi_mode[collection.name] = collection
        return collections

    def _parse_color(self, value: str, token: str) -> RGB | None:
        try:
            return RGB.from_hex(value)
        except InvalidColorError as exc:
            message = f"Skipped color token {token}: {exc.message}"
            logger.warning(message)
            self.issues.append(message)
            return None

    def _color_collection(self, scheme: ColorScheme, name: str) -> VariableCollection:
        collection = VariableCollection(
            name,
            f"Color variables from Flutter ColorScheme ({scheme.brightness} mode)",
        )
        for token, attr, scopes, description in COLOR_TOKENS:
            raw = getattr(scheme, attr)
            if raw is None:
                continue
            rgb = self._parse_color(raw, token)
            if rgb is None:
                continue
            collection.variables.append(
                Variable(token, VariableType.COLOR, list(scopes), rgb, description, name)
            )
        return collection

    @staticmethod
    def _style_values(style: TextStyle) -> list[tuple[str, VariableType, VariableScope, str, Any]]:
        values = []
        for suffix, attr, var_type, scope, description in TYPOGRAPHY_TOKENS:
            value = getattr(style, attr)
            if value is None:
                continue
            if attr == "font_weight":
                value = map_font_weight(value)
            values.append((suffix, var_type, scope, description, value))
        return values

    def _typography_collection(self, text_theme: TextTheme, name: str) -> VariableCollection:
        collection = VariableCollection(name, "Typography variables from Flutter TextTheme")
        for style_name, style in text_theme.styles():
            label = _kebab(style_name)
            title = label.replace("-", " ").title()
            for suffix, var_type, scope, description, value in self._style_values(style):
                collection.variables.append(
                    Variable(
                        f"{label}-{suffix}",
                        var_type,
                        [scope],
                        value,
                        f"{title} {description}",
                        name,
                    )
                )
        return collection

    @staticmethod
    def _scale_collection(
        scale: dict[str, Any],
        name: str,
        prefix: str,
        scopes: list[VariableScope],
        label: str,
        description: str,
    ) -> VariableCollection:
        collection = VariableCollection(name, description)
        for key, value in scale.items():
            collection.variables.append(
                Variable(
                    f"{prefix}-{key}",
                    VariableType.FLOAT,
                    list(scopes),
                    value,
                    f"{label} {key} ({value}px)",
                    name,
                )
            )
        return collection

    def _multi_mode_colors(self, themes, theme_names, modes, name) -> MultiModeCollection:
        collection = MultiModeCollection(
            name, "Multi-mode color variables from Flutter ColorSchemes", modes
        )
        for token, attr, scopes, _ in COLOR_TOKENS:
            values: dict[str, Any] = {}
            for theme, mode_name in zip(themes, theme_names):
                raw = getattr(theme.color_scheme, attr)
                if raw is None:
                    continue
                rgb = self._parse_color(raw, token)
                if rgb is not None:
                    values[mode_name] = rgb
            if values:
                collection.variables.append(
                    MultiModeVariable(
                        token,
                        VariableType.COLOR,
                        list(scopes),
                        values,
                        f"{token.replace('-', ' ')} color across theme modes",
                        name,
                    )
                )
        return collection

    def _multi_mode_typography(self, themes, theme_names, modes, name) -> MultiModeCollection:
        collection = MultiModeCollection(
            name, "Multi-mode typography variables from Flutter TextThemes", modes
        )
        merged: dict[str, MultiModeVariable] = {}
        for theme, mode_name in zip(themes, theme_names):
            for style_name, style in theme.text_theme.styles():
                label = _kebab(style_name)
                for suffix, var_type, scope, _, value in self._style_values(style):
                    token = f"{label}-{suffix}"
                    if token not in merged:
                        merged[token] = MultiModeVariable(
                            token,
                            var_type,
                            [scope],
                            {},
                            f"{token.replace('-', ' ')} across theme modes",
                            name,
                        )
                    merged[token].values[mode_name] = value
        collection.variables.extend(merged.values())
        return collection

    @staticmethod
    def _multi_mode_scale(scales, theme_names, modes, name, prefix, scopes, label) -> MultiModeCollection:
        collection = MultiModeCollection(name, f"Multi-mode {label.lower()} variables", modes)
        base = scales[0]
        for key, default in base.items():
            values = {
                mode_name: scale.get(key, default)
                for scale, mode_name in zip(scales, theme_names)
            }
            collection.variables.append(
                MultiModeVariable(
                    f"{prefix}-{key}",
                    VariableType.FLOAT,
                    list(scopes),
                    values,
                    f"{label} {key} across theme modes",
                    name,
                )
            )
        return collection

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, collection: str, name: str) -> Variable | None:
        found = self._collections.get(collection)
        return found.get(name) if found else None

    def get_multi_mode(self, collection: str, name: str) -> MultiModeVariable | None:
        found = self._multi_mode.get(collection)
        return found.get(name) if found else None

    def collections(self) -> list[VariableCollection]:
        return list(self._collections.values())

    def multi_mode_collections(self) -> list[MultiModeCollection]:
        return list(self._multi_mode.values())

    def variable_count(self) -> int:
        return sum(len(c.variables) for c in self._collections.values()) + sum(
            len(c.variables) for c in self._multi_mode.values()
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "collections": [c.to_dict() for c in self.collections()],
            "multiModeCollections": [c.to_dict() for c in self.multi_mode_collections()],
        }


__all__ = [
    "VariableType",
    "VariableScope",
    "FONT_WEIGHT_STYLES",
    "map_font_weight",
    "generate_variable_name",
    "typography_variable_name",
    "Variable",
    "VariableCollection",
    "VariableMode",
    "MultiModeVariable",
    "MultiModeCollection",
    "TokenTable",
]
