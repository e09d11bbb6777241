"""Document generator package — HTML rendering engine.

Consumes markup text or an ExtractionResult to produce a self-contained
HTML document with a persisted light/dark toggle.

Modules:
    html_builder: Markup and chart page rendering
    charts: ChartDeclaration -> Chart.js calls
    document: Page shell, styles and theme script
"""

from .charts import build_chart_data, chart_call
from .document import assemble_document
from .html_builder import HTMLBuilder, render

__all__ = [
    "HTMLBuilder",
    "render",
    "assemble_document",
    "build_chart_data",
    "chart_call",
]
