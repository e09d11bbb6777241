"""Schema package — typed models and defaults shared by the pipeline.

- models.py: Artifact, ContentKind, ChartKind, ChartDeclaration, etc.
- defaults.py: Named fallback constants (palette, placeholder datasets, ...)
- settings.py: ConverterSettings, the injectable bundle of those defaults
- loader.py: YAML serialization/deserialization of ConverterSettings
"""

from .loader import dump_settings, load_settings, save_settings
from .models import (
    Artifact,
    ChartDeclaration,
    ChartKind,
    ChartSeries,
    ContentKind,
    ConversionResult,
    ExtractionResult,
)
from .settings import ConverterSettings

__all__ = [
    # Models
    "Artifact",
    "ChartDeclaration",
    "ChartKind",
    "ChartSeries",
    "ContentKind",
    "ConversionResult",
    "ExtractionResult",
    "ConverterSettings",
    # Loader
    "dump_settings",
    "load_settings",
    "save_settings",
]
