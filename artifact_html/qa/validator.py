"""QA validator — inspects a rendered document against what was rendered.

Validates that a built page honours its contract: it is a full document,
the theme toggle is wired to the configured storage key with a system
preference fallback, markup was embedded verbatim, and every chart
declaration produced exactly one panel call, in order.

Usage::

    from artifact_html.qa.validator import DocumentValidator

    validator = DocumentValidator(settings)
    result = validator.validate(document, ContentKind.CODE, extraction_result)
    assert result.passed, result.summary()
"""

import re
from dataclasses import dataclass, field

from artifact_html.generator.charts import CREATE_FUNCTIONS
from artifact_html.generator.document import script_json
from artifact_html.schema.models import ContentKind, ExtractionResult
from artifact_html.schema.settings import ConverterSettings


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class Issue:
    """A single QA issue found during validation."""
    severity: str       # "error" or "warning"
    category: str       # e.g. "structure", "theme", "charts"
    message: str
    chart_index: int = -1   # -1 for document-level issues

    def __str__(self) -> str:
        loc = "document" if self.chart_index < 0 else f"chart {self.chart_index}"
        return f"[{self.severity.upper()}] {loc} ({self.category}): {self.message}"


@dataclass
class QAResult:
    """Aggregated result of QA validation."""
    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        """One-line summary string."""
        status = "PASS" if self.passed else "FAIL"
        return (
            f"QA {status}: {len(self.errors)} error(s), "
            f"{len(self.warnings)} warning(s)"
        )

    def report(self) -> str:
        """Multi-line report of all issues."""
        lines = [self.summary()]
        for issue in self.issues:
            lines.append(f"  {issue}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_CHART_CALL_RE = re.compile(
    r"try \{ (" + "|".join(CREATE_FUNCTIONS.values()) + r")\((\"(?:[^\"\\]|\\.)*\"),"
)


def chart_calls(document: str) -> list[tuple[str, str]]:
    """(function, JSON-encoded title) for each chart call, in document order."""
    return [(m.group(1), m.group(2)) for m in _CHART_CALL_RE.finditer(document)]


# ---------------------------------------------------------------------------
# DocumentValidator
# ---------------------------------------------------------------------------

class DocumentValidator:
    """Validates rendered HTML against the content it was rendered from.

    Parameters
    ----------
    settings : ConverterSettings, optional
        Must match the settings used for rendering (storage key, CDN URL).
    """

    def __init__(self, settings: ConverterSettings | None = None) -> None:
        self.settings = settings or ConverterSettings()

    def validate(self, document: str, kind: ContentKind,
                 payload: str | ExtractionResult) -> QAResult:
        """Run all checks and return the collected issues."""
        result = QAResult()
        if not document.lstrip().startswith("<!DOCTYPE html>"):
            result.issues.append(Issue(
                "error", "structure",
                "Output is not a full HTML document: "
                f"{document.strip()[:80]!r}",
            ))
            return result

        self._check_theme(document, result)
        if kind is ContentKind.MARKUP:
            self._check_markup(document, payload, result)
        else:
            self._check_charts(document, payload, result)
        return result

    def _check_theme(self, document: str, result: QAResult) -> None:
        if 'id="theme-toggle"' not in document:
            result.issues.append(Issue("error", "theme", "Theme toggle input missing"))
        key = script_json(self.settings.theme_storage_key)
        if f"const themeStorageKey = {key};" not in document:
            result.issues.append(Issue(
                "error", "theme",
                f"Theme state not persisted under storage key {self.settings.theme_storage_key!r}",
            ))
        if "prefers-color-scheme: dark" not in document:
            result.issues.append(Issue(
                "warning", "theme", "No system colour-scheme fallback for the toggle",
            ))

    def _check_markup(self, document: str, payload, result: QAResult) -> None:
        if not isinstance(payload, str) or payload not in document:
            result.issues.append(Issue(
                "error", "markup", "Markup is not embedded verbatim in the document",
            ))
        if 'class="svg-container"' not in document:
            result.issues.append(Issue("warning", "markup", "No .svg-container wrapper"))

    def _check_charts(self, document: str, payload, result: QAResult) -> None:
        if not isinstance(payload, ExtractionResult):
            result.issues.append(Issue(
                "error", "charts", "Chart documents must be validated against an ExtractionResult",
            ))
            return
        if self.settings.chart_js_url not in document:
            result.issues.append(Issue("error", "charts", "Chart.js script not referenced"))

        calls = chart_calls(document)
        if len(calls) != len(payload):
            result.issues.append(Issue(
                "error", "charts",
                f"Expected {len(payload)} chart call(s), found {len(calls)}",
            ))

        for idx, (declaration, call) in enumerate(zip(payload, calls)):
            fn, title = call
            expected_fn = CREATE_FUNCTIONS[declaration.kind]
            if fn != expected_fn:
                result.issues.append(Issue(
                    "error", "charts",
                    f"{declaration.title!r} drawn with {fn}, expected {expected_fn}",
                    chart_index=idx,
                ))
            if title != script_json(declaration.title):
                result.issues.append(Issue(
                    "error", "charts",
                    f"Panel title {title} does not match {declaration.title!r}",
                    chart_index=idx,
                ))
            if not declaration.is_valid():
                result.issues.append(Issue(
                    "warning", "charts",
                    f"{declaration.title!r} has series not aligned with its labels",
                    chart_index=idx,
                ))


def validate_document(document: str, kind: ContentKind,
                      payload: str | ExtractionResult,
                      settings: ConverterSettings | None = None) -> QAResult:
    """Convenience function: validate with a one-off DocumentValidator."""
    return DocumentValidator(settings).validate(document, kind, payload)
