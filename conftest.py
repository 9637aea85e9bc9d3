"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Environment isolation for designgen settings
- Common widget tree and theme fixtures
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from src.config import EnvVar

if TYPE_CHECKING:
    from src.mid import ReusableWidgetDefinition, ThemeModel, WidgetNode

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_designgen_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove designgen variables so tests see the documented defaults."""
    for var in EnvVar:
        monkeypatch.delenv(var.value.name, raising=False)


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_theme() -> ThemeModel:
    """Create a small theme with colors, two text styles and spacing.

    Returns:
        A ThemeModel with primary/secondary colors, headlineLarge and
        bodyMedium text styles, spacing and border radius tokens.
    """
    from src.mid import ThemeModel

    return ThemeModel.model_validate(
        {
            "colorScheme": {
                "brightness": "light",
                "primary": "#2196F3",
                "onPrimary": "#FFFFFF",
                "secondary": "#FF9800",
                "surface": "#FFFFFF",
                "onSurface": "#000000",
            },
            "textTheme": {
                "headlineLarge": {
                    "fontSize": 32,
                    "fontWeight": "700",
                    "fontFamily": "Roboto",
                },
                "bodyMedium": {
                    "fontSize": 14,
                    "fontWeight": "400",
                    "height": 1.5,
                    "letterSpacing": 0.25,
                },
            },
            "spacing": {"small": 8, "medium": 16},
            "borderRadius": {"small": 4},
        }
    )


@pytest.fixture
def column_widget() -> WidgetNode:
    """Create a column with a themed heading and a primary button.

    Returns:
        A WidgetNode tree: col -> [title, action -> [action-label]].
    """
    from src.mid import WidgetNode

    return WidgetNode.model_validate(
        {
            "id": "col",
            "type": "Column",
            "layout": {
                "type": "column",
                "spacing": 8,
                "alignment": {"mainAxis": "center", "crossAxis": "stretch"},
                "padding": {"top": 16, "right": 16, "bottom": 16, "left": 16},
            },
            "children": [
                {
                    "id": "title",
                    "type": "Text",
                    "properties": {"data": "Welcome back"},
                    "styling": {
                        "typography": {
                            "fontSize": 32,
                            "isThemeReference": True,
                            "themePath": "textTheme.headlineLarge",
                        }
                    },
                },
                {
                    "id": "action",
                    "type": "ElevatedButton",
                    "properties": {"style": "primary"},
                    "styling": {
                        "colors": [
                            {
                                "property": "backgroundColor",
                                "value": "#2196F3",
                                "isThemeReference": True,
                                "themePath": "colorScheme.primary",
                            }
                        ]
                    },
                    "children": [
                        {
                            "id": "action-label",
                            "type": "Text",
                            "properties": {"data": "Continue"},
                        }
                    ],
                },
            ],
        }
    )


@pytest.fixture
def stack_widget() -> WidgetNode:
    """Create a stack with one flowing and two positioned children.

    Returns:
        A 300x200 stack: background, a badge placed via ``position`` and a
        label placed via ``properties.positioned``.
    """
    from src.mid import WidgetNode

    return WidgetNode.model_validate(
        {
            "id": "stack",
            "type": "Stack",
            "properties": {"width": 300, "height": 200},
            "children": [
                {"id": "background", "type": "Container"},
                {
                    "id": "badge",
                    "type": "Container",
                    "position": {"top": 10, "right": 20, "width": 40, "height": 40},
                },
                {
                    "id": "label",
                    "type": "Text",
                    "properties": {
                        "data": "Sale",
                        "positioned": {"left": 8, "bottom": 8},
                    },
                },
            ],
        }
    )


@pytest.fixture
def button_definition() -> ReusableWidgetDefinition:
    """Create a reusable primary button with two recorded variants.

    Returns:
        A ReusableWidgetDefinition named PrimaryButton used five times.
    """
    from src.mid import ReusableWidgetDefinition

    return ReusableWidgetDefinition.model_validate(
        {
            "id": "btn-def",
            "type": "ElevatedButton",
            "name": "PrimaryButton",
            "properties": {
                "style": "primary",
                "size": "medium",
                "width": 120,
                "height": 40,
            },
            "styling": {
                "colors": [
                    {
                        "property": "backgroundColor",
                        "value": "#2196F3",
                        "isThemeReference": True,
                        "themePath": "colorScheme.primary",
                    }
                ],
                "borders": {
                    "radius": {
                        "topLeft": 8,
                        "topRight": 8,
                        "bottomLeft": 8,
                        "bottomRight": 8,
                    }
                },
            },
            "children": [
                {"id": "btn-def-label", "type": "Text", "properties": {"data": "Submit"}}
            ],
            "variants": [
                {"name": "Disabled", "properties": {"disabled": True}},
                {"name": "Large", "properties": {"size": "large"}},
            ],
            "usageCount": 5,
            "usageIds": ["btn-1", "btn-2"],
        }
    )
