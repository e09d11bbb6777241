"""Artifact HTML converter.

Turns an SVG drawing or a chart component snippet plus a version label into
a single self-contained HTML page with a persisted light/dark toggle.
"""

from .converter import InputMissing, convert, convert_artifact, validate_arguments
from .extractor import classify, extract
from .generator import HTMLBuilder, render
from .schema import (
    Artifact,
    ChartDeclaration,
    ChartKind,
    ChartSeries,
    ContentKind,
    ConversionResult,
    ConverterSettings,
    ExtractionResult,
)

__all__ = [
    "Artifact",
    "ChartDeclaration",
    "ChartKind",
    "ChartSeries",
    "ContentKind",
    "ConversionResult",
    "ConverterSettings",
    "ExtractionResult",
    "HTMLBuilder",
    "InputMissing",
    "classify",
    "convert",
    "convert_artifact",
    "extract",
    "render",
    "validate_arguments",
]
