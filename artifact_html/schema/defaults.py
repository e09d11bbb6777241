"""Named defaults for extraction and rendering.

Every literal the fallback chain or the renderer would otherwise hard-code
lives here so that it can be inspected, tested and overridden through
ConverterSettings (see loader.py for the YAML form).
"""

from .models import ChartKind

# Chart.js default-ish palette, cycled when a declaration has no colours
DEFAULT_PALETTE: tuple[str, ...] = (
    "#4E79A7",
    "#F28E2B",
    "#E15759",
    "#76B7B2",
    "#59A14F",
    "#EDC948",
    "#B07AA1",
    "#FF9DA7",
)

# Illustrative data used when a chart tag is present but no data was found.
# Distinct per kind so the panel still communicates which chart was intended.
PLACEHOLDER_DATASETS: dict[ChartKind, dict] = {
    ChartKind.BAR: {
        "labels": ["Q1", "Q2", "Q3", "Q4"],
        "values": [12, 19, 8, 15],
    },
    ChartKind.LINE: {
        "labels": ["Jan", "Feb", "Mar", "Apr", "May", "Jun"],
        "values": [65, 59, 80, 81, 56, 72],
    },
    ChartKind.PIE: {
        "labels": ["Segment A", "Segment B", "Segment C"],
        "values": [55, 30, 15],
    },
}

# Terminal fallback dataset (one bar + one pie)
SAMPLE_LABELS: tuple[str, ...] = ("Category A", "Category B", "Category C", "Category D")
SAMPLE_VALUES: tuple[float, ...] = (40, 25, 20, 15)
SAMPLE_BAR_TITLE = "Sample Bar Chart"
SAMPLE_PIE_TITLE = "Sample Pie Chart"

# Minimum length (chars, brackets included) of a list literal for the
# naming heuristic to treat it as chart data rather than a small constant
MIN_ARRAY_SPAN = 40

# Upper bound on how much source text the extractor scans
MAX_SCAN_CHARS = 200_000

# localStorage key holding the viewer's theme choice
THEME_STORAGE_KEY = "theme"

CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js@4.4.2/dist/chart.umd.min.js"
DATALABELS_URL = (
    "https://cdn.jsdelivr.net/npm/chartjs-plugin-datalabels@2.2.0"
    "/dist/chartjs-plugin-datalabels.min.js"
)

# Error strings returned (not raised) for blank content reaching the core
EMPTY_MARKUP_MESSAGE = "Error: No SVG code provided"
EMPTY_CODE_MESSAGE = "Error: No TypeScript code provided"
