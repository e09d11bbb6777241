"""Tests for the rendered document QA validator."""

import pytest

from artifact_html.converter import convert
from artifact_html.extractor.declarations import extract
from artifact_html.generator.html_builder import HTMLBuilder
from artifact_html.qa.validator import (
    DocumentValidator,
    Issue,
    QAResult,
    chart_calls,
    validate_document,
)
from artifact_html.schema import defaults
from artifact_html.schema.models import ContentKind
from artifact_html.schema.settings import ConverterSettings


SVG = '<svg viewBox="0 0 4 4"><rect width="4" height="4"/></svg>'
TAGS = "<BarChart></BarChart><PieChart></PieChart>"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def validator():
    return DocumentValidator()


@pytest.fixture
def chart_page():
    result = extract(TAGS)
    return HTMLBuilder().render(ContentKind.CODE, result, "v1"), result


# ---------------------------------------------------------------------------
# Passing documents
# ---------------------------------------------------------------------------

class TestPassing:
    def test_markup_page(self, validator):
        page = convert(SVG, "v1").text
        result = validator.validate(page, ContentKind.MARKUP, SVG)
        assert result.passed, result.report()
        assert result.issues == []

    def test_chart_page(self, validator, chart_page):
        page, extraction = chart_page
        result = validator.validate(page, ContentKind.CODE, extraction)
        assert result.passed, result.report()

    def test_chart_calls_in_order(self, chart_page):
        page, _ = chart_page
        assert chart_calls(page) == [
            ("createBarChart", '"Bar Chart"'),
            ("createPieChart", '"Pie Chart"'),
        ]


# ---------------------------------------------------------------------------
# Failing documents
# ---------------------------------------------------------------------------

class TestFailing:
    def test_error_string_is_not_a_document(self, validator):
        result = validator.validate(defaults.EMPTY_CODE_MESSAGE, ContentKind.CODE, extract(TAGS))
        assert not result.passed
        assert result.errors[0].category == "structure"

    def test_missing_chart_call(self, validator):
        page = HTMLBuilder().render(ContentKind.CODE, extract("<BarChart></BarChart>"), "v1")
        result = validator.validate(page, ContentKind.CODE, extract(TAGS))
        assert not result.passed
        assert any("Expected 2 chart call(s), found 1" in i.message for i in result.errors)

    def test_wrong_kind_and_title(self, validator):
        page = HTMLBuilder().render(ContentKind.CODE, extract("<BarChart></BarChart>"), "v1")
        result = validator.validate(page, ContentKind.CODE, extract("<PieChart></PieChart>"))
        assert len(result.errors) == 2
        assert all(i.chart_index == 0 for i in result.errors)

    def test_storage_key_mismatch(self):
        page = convert(SVG, "v1").text
        result = DocumentValidator(ConverterSettings(theme_storage_key="other")).validate(
            page, ContentKind.MARKUP, SVG)
        assert [i.category for i in result.errors] == ["theme"]

    def test_markup_not_verbatim(self, validator):
        page = convert(SVG, "v1").text
        result = validator.validate(page, ContentKind.MARKUP, SVG.replace("4", "5"))
        assert [i.category for i in result.errors] == ["markup"]

    def test_chart_page_needs_extraction_result(self, validator, chart_page):
        page, _ = chart_page
        result = validator.validate(page, ContentKind.CODE, TAGS)
        assert not result.passed


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

class TestResultTypes:
    def test_issue_str(self):
        assert str(Issue("error", "charts", "boom", chart_index=2)) == "[ERROR] chart 2 (charts): boom"
        assert str(Issue("warning", "theme", "hmm")) == "[WARNING] document (theme): hmm"

    def test_summary_and_report(self):
        result = QAResult(issues=[Issue("warning", "markup", "No wrapper")])
        assert result.passed
        assert result.summary() == "QA PASS: 0 error(s), 1 warning(s)"
        assert result.report().splitlines()[1] == "  [WARNING] document (markup): No wrapper"

    def test_validate_document_function(self):
        page = convert(SVG, "v1").text
        assert validate_document(page, ContentKind.MARKUP, SVG).passed
