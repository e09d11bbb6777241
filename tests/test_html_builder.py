"""Tests for the HTML builder and the document shell."""

import pytest

from artifact_html.extractor.declarations import extract
from artifact_html.generator import html_builder
from artifact_html.generator.document import assemble_document, error_fragment, script_json
from artifact_html.generator.html_builder import CHART_HEADING, MARKUP_HEADING, HTMLBuilder, render
from artifact_html.schema import defaults
from artifact_html.schema.models import ContentKind
from artifact_html.schema.settings import ConverterSettings


SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><text>a &amp; b</text></svg>'
CODE = 'const salesData = [{ name: "A", value: 1 }, { name: "B", value: 2 }];\n<BarChart data={salesData}></BarChart>'


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def builder():
    return HTMLBuilder()


# ---------------------------------------------------------------------------
# Document shell
# ---------------------------------------------------------------------------

class TestDocumentShell:
    def test_structure(self):
        page = assemble_document("Heading", "v2", "<p>body</p>", ConverterSettings())
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>Heading (v2)</title>" in page
        assert '<span class="version">v2</span>' in page
        assert 'id="theme-toggle"' in page
        assert "<p>body</p>" in page
        assert page.rstrip().endswith("</html>")

    def test_theme_persistence(self):
        page = assemble_document("H", "v1", "", ConverterSettings(theme_storage_key="my-theme"))
        assert 'const themeStorageKey = "my-theme";' in page
        assert "localStorage.getItem(themeStorageKey)" in page
        assert "localStorage.setItem(themeStorageKey" in page
        assert "prefers-color-scheme: dark" in page

    def test_version_is_escaped(self):
        page = assemble_document("H", "<v1>", "", ConverterSettings())
        assert "<v1>" not in page
        assert "&lt;v1&gt;" in page

    def test_head_scripts(self):
        page = assemble_document("H", "v1", "", ConverterSettings(), head_scripts=("https://x/a.js",))
        assert '<script src="https://x/a.js"></script>' in page

    def test_script_json(self):
        assert script_json("a</script>&") == '"a\\u003c/script\\u003e\\u0026"'

    def test_error_fragment_escapes(self):
        fragment = error_fragment("Oops", "<b>bad</b>")
        assert "&lt;b&gt;bad&lt;/b&gt;" in fragment
        assert 'class="render-error"' in fragment


# ---------------------------------------------------------------------------
# Markup rendering
# ---------------------------------------------------------------------------

class TestMarkup:
    def test_embedded_verbatim(self, builder):
        page = builder.render(ContentKind.MARKUP, SVG, "v1")
        assert SVG in page
        assert '<div class="svg-container">' in page
        assert f"<title>{MARKUP_HEADING} (v1)</title>" in page

    def test_no_chart_library(self, builder):
        page = builder.render(ContentKind.MARKUP, SVG, "v1")
        assert defaults.CHART_JS_URL not in page

    @pytest.mark.parametrize("blank", ["", "  \n"])
    def test_blank_markup(self, builder, blank):
        assert builder.render(ContentKind.MARKUP, blank, "v1") == defaults.EMPTY_MARKUP_MESSAGE


# ---------------------------------------------------------------------------
# Chart rendering
# ---------------------------------------------------------------------------

class TestCharts:
    def test_one_call_per_declaration(self, builder):
        result = extract("<BarChart></BarChart><PieChart></PieChart>")
        page = builder.render(ContentKind.CODE, result, "v3")
        assert f"<title>{CHART_HEADING} (v3)</title>" in page
        assert page.count('try { createBarChart("Bar Chart", ') == 1
        assert page.count('try { createPieChart("Pie Chart", ') == 1
        assert page.index("createBarChart(\"Bar Chart\"") < page.index("createPieChart(\"Pie Chart\"")

    def test_libraries_loaded(self, builder):
        page = builder.render(ContentKind.CODE, extract(CODE), "v1")
        assert f'<script src="{defaults.CHART_JS_URL}"></script>' in page
        assert f'<script src="{defaults.DATALABELS_URL}"></script>' in page
        assert 'id="chart-container"' in page

    def test_raw_source_is_extracted(self, builder):
        page = builder.render(ContentKind.CODE, CODE, "v1")
        assert 'createBarChart("sales", ' in page
        assert "<summary>Source</summary>" in page
        assert "&lt;BarChart data={salesData}&gt;" in page

    def test_source_panel_can_be_disabled(self):
        page = HTMLBuilder(ConverterSettings(include_source=False)).render(ContentKind.CODE, CODE, "v1")
        assert "<summary>Source</summary>" not in page

    def test_blank_code_skips_extraction(self, builder, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("extract should not run")

        monkeypatch.setattr(html_builder, "extract", fail)
        assert builder.render(ContentKind.CODE, "   ", "v1") == defaults.EMPTY_CODE_MESSAGE

    def test_failing_chart_reports_in_place(self, builder, monkeypatch):
        real_call = html_builder.chart_call

        def flaky(declaration, settings):
            if declaration.title == "Bar Chart":
                raise ValueError("bad data")
            return real_call(declaration, settings)

        monkeypatch.setattr(html_builder, "chart_call", flaky)
        page = builder.render(ContentKind.CODE, extract("<BarChart></BarChart><PieChart></PieChart>"), "v1")
        assert 'showChartError("Bar Chart", "ValueError: bad data");' in page
        assert 'createPieChart("Pie Chart", ' in page

    def test_render_failure_returns_error_document(self, builder, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("kaput")

        monkeypatch.setattr(builder, "render_charts", boom)
        page = builder.render(ContentKind.CODE, extract(CODE), "v1")
        assert page.startswith("<!DOCTYPE html>")
        assert "RuntimeError: kaput" in page


class TestRenderFunction:
    def test_module_level_render(self):
        page = render(ContentKind.MARKUP, SVG, "latest")
        assert SVG in page
        assert "(latest)</title>" in page
