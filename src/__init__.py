"""designgen: Flutter widget trees to design-tool node specs."""

from src.core import DesignGenError, ErrorCollector
from src.mid import ReusableWidgetDefinition, ThemeModel, WidgetNode
from src.pipeline import ConversionResult, Converter, convert
from src.schema import export_json_schema
from src.style import StyleMappingConfig

__all__ = [
    # Input model
    "WidgetNode",
    "ReusableWidgetDefinition",
    "ThemeModel",
    "export_json_schema",
    # Conversion
    "convert",
    "Converter",
    "ConversionResult",
    "StyleMappingConfig",
    # Errors
    "DesignGenError",
    "ErrorCollector",
]
