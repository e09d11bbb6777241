"""Chart generation module — turns ChartDeclarations into Chart.js calls.

Each declaration becomes one call to a page-level helper
(``createBarChart`` / ``createLineChart`` / ``createPieChart``) that adds
its own titled panel and canvas. The helpers themselves are defined in
CHART_HELPERS_SCRIPT and rely on Chart.js plus the datalabels plugin.

Usage:
    from artifact_html.generator.charts import chart_call

    js = chart_call(declaration, settings)
"""

from __future__ import annotations

import math
from typing import Any

from artifact_html.generator.document import script_json
from artifact_html.schema.models import ChartDeclaration, ChartKind, ChartSeries
from artifact_html.schema.settings import ConverterSettings


# ---------------------------------------------------------------------------
# Chart kind mapping
# ---------------------------------------------------------------------------

CREATE_FUNCTIONS: dict[ChartKind, str] = {
    ChartKind.BAR: "createBarChart",
    ChartKind.LINE: "createLineChart",
    ChartKind.PIE: "createPieChart",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _safe_value(value: Any) -> float:
    """Coerce a value to a safe float for chart data.  None/NaN/inf → 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value):
            return 0.0
        return float(value)
    return 0.0


def _resolve_colors(series: ChartSeries, series_index: int,
                    kind: ChartKind, settings: ConverterSettings,
                    multi: bool) -> str | list[str]:
    """Fill absent colours from the palette.

    Pie slices and single-series bars get a colour per point; lines and
    multi-series bars get one colour per series.
    """
    if kind is ChartKind.PIE or (kind is ChartKind.BAR and not multi):
        return [c or settings.palette_color(i) for i, c in enumerate(series.colors)]
    explicit = next((c for c in series.colors if c), None)
    return explicit or settings.palette_color(series_index)


# ---------------------------------------------------------------------------
# Chart data builders
# ---------------------------------------------------------------------------

def build_chart_data(declaration: ChartDeclaration,
                     settings: ConverterSettings) -> dict[str, Any]:
    """Build the Chart.js ``data`` object (labels + datasets) for a declaration."""
    multi = len(declaration.series) > 1
    datasets = []
    for idx, series in enumerate(declaration.series):
        colors = _resolve_colors(series, idx, declaration.kind, settings, multi)
        dataset: dict[str, Any] = {
            "label": series.label,
            "data": [_safe_value(v) for v in series.values],
            "backgroundColor": colors,
        }
        if declaration.kind is ChartKind.LINE:
            dataset["borderColor"] = colors
            dataset["fill"] = False
            dataset["tension"] = 0.3
        datasets.append(dataset)
    return {"labels": list(declaration.labels), "datasets": datasets}


def chart_call(declaration: ChartDeclaration, settings: ConverterSettings) -> str:
    """JavaScript statement drawing one declaration as its own panel.

    A failure inside Chart.js is reported in place of the panel.
    """
    fn = CREATE_FUNCTIONS[declaration.kind]
    title = script_json(declaration.title)
    data = script_json(build_chart_data(declaration, settings))
    return (
        f"try {{ {fn}({title}, {data}); }} "
        f"catch (error) {{ showChartError({title}, error); }}"
    )


# ---------------------------------------------------------------------------
# Page helpers
# ---------------------------------------------------------------------------

CHART_HELPERS_SCRIPT = """
        function labelColor() {
            return getComputedStyle(document.body).getPropertyValue('--label-color').trim();
        }

        function baseOptions() {
            return {
                responsive: true,
                maintainAspectRatio: false,
                plugins: {
                    datalabels: {
                        color: labelColor,
                        font: { weight: 'bold' },
                        formatter: function (value) { return value; }
                    },
                    legend: { labels: { color: labelColor } }
                },
                scales: {
                    x: { grid: { display: false }, ticks: { color: labelColor } },
                    y: { grid: { display: false }, ticks: { color: labelColor }, grace: '10%' }
                }
            };
        }

        window.charts = [];
        const chartRoot = document.getElementById('chart-container');

        try {
            Chart.register(ChartDataLabels);
        } catch (error) {
            showChartError('Chart library', error);
        }

        function createChartContainer(title) {
            const wrapper = document.createElement('div');
            wrapper.className = 'chart-container';
            if (title) {
                const heading = document.createElement('h2');
                heading.textContent = title;
                wrapper.appendChild(heading);
            }
            const canvas = document.createElement('canvas');
            wrapper.appendChild(canvas);
            chartRoot.appendChild(wrapper);
            return canvas;
        }

        function showChartError(title, error) {
            console.error('Error rendering chart:', error);
            const panel = document.createElement('div');
            panel.className = 'render-error';
            const heading = document.createElement('h2');
            heading.textContent = 'Could not render ' + (title || 'chart');
            const detail = document.createElement('pre');
            detail.textContent = String(error);
            panel.appendChild(heading);
            panel.appendChild(detail);
            chartRoot.appendChild(panel);
        }

        function drawChart(type, title, data, options) {
            const chart = new Chart(createChartContainer(title), {
                type: type,
                data: data,
                options: options
            });
            window.charts.push(chart);
            return chart;
        }

        function createBarChart(title, data) {
            const options = baseOptions();
            options.plugins.datalabels.anchor = 'end';
            options.plugins.datalabels.align = 'top';
            return drawChart('bar', title, data, options);
        }

        function createLineChart(title, data) {
            return drawChart('line', title, data, baseOptions());
        }

        function createPieChart(title, data) {
            const options = baseOptions();
            delete options.scales;
            options.plugins.datalabels.formatter = function (value, context) {
                const total = context.dataset.data.reduce(function (a, b) { return a + b; }, 0);
                const label = context.chart.data.labels[context.dataIndex];
                const pct = total ? Math.round((value / total) * 100) : 0;
                return label + ': ' + pct + '%';
            };
            return drawChart('pie', title, data, options);
        }

        document.addEventListener('themechange', function () {
            window.charts.forEach(function (chart) { chart.update(); });
        });
"""
