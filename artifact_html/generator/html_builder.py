"""HTML builder engine — renders a classified artifact into a full document.

Markup artifacts are embedded byte-for-byte in an ``.svg-container``.
Code artifacts become one Chart.js panel per ChartDeclaration, in
extraction order. Both share the document shell from document.py.

Usage::

    from artifact_html.generator.html_builder import HTMLBuilder

    builder = HTMLBuilder(settings)
    page = builder.render(ContentKind.CODE, extraction_result, "v1")
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable

from artifact_html.extractor.declarations import extract
from artifact_html.generator.charts import CHART_HELPERS_SCRIPT, chart_call
from artifact_html.generator.document import assemble_document, error_fragment, script_json
from artifact_html.schema import defaults
from artifact_html.schema.models import ContentKind, ExtractionResult
from artifact_html.schema.settings import ConverterSettings

logger = logging.getLogger(__name__)

MARKUP_HEADING = "SVG Visualization"
CHART_HEADING = "Chart Visualization"


class HTMLBuilder:
    """Builds presentation documents from markup or chart declarations.

    Parameters
    ----------
    settings : ConverterSettings, optional
        Palette, CDN URLs and theme storage key. Defaults apply when omitted.
    """

    def __init__(self, settings: ConverterSettings | None = None) -> None:
        self.settings = settings or ConverterSettings()

    # -- public API ---------------------------------------------------------

    def render(self, kind: ContentKind, payload: str | ExtractionResult,
               version: str, source: str | None = None) -> str:
        """Render a document, or a short error string for blank input.

        ``payload`` is the markup text for MARKUP. For CODE it is either an
        ExtractionResult or the raw source, which is then extracted here; ``source``
        optionally carries that raw source alongside a ready ExtractionResult.
        Never raises.
        """
        if kind is ContentKind.MARKUP:
            markup = payload if isinstance(payload, str) else ""
            if not markup.strip():
                return defaults.EMPTY_MARKUP_MESSAGE
            return self._guarded(MARKUP_HEADING, version,
                                 lambda: self.render_markup(markup, version))

        if isinstance(payload, str):
            if not payload.strip():
                return defaults.EMPTY_CODE_MESSAGE
            source = payload
            payload = extract(payload, self.settings)
        return self._guarded(CHART_HEADING, version,
                             lambda: self.render_charts(payload, version, source))

    def render_markup(self, markup: str, version: str) -> str:
        """Embed markup verbatim in the page shell."""
        body = (
            '    <div class="container">\n'
            '        <div class="svg-container">\n'
            f"{markup}\n"
            "        </div>\n"
            "    </div>"
        )
        return assemble_document(MARKUP_HEADING, version, body, self.settings)

    def render_charts(self, result: ExtractionResult, version: str,
                      source: str | None = None) -> str:
        """One chart panel per declaration, in order."""
        calls = []
        for declaration in result:
            try:
                calls.append(chart_call(declaration, self.settings))
            except Exception as e:
                logger.exception("Failed to build chart %r", declaration.title)
                calls.append(
                    f"showChartError({script_json(declaration.title)}, "
                    f"{script_json(f'{type(e).__name__}: {e}')});"
                )

        body = '    <div class="container" id="chart-container"></div>'
        if source is not None and self.settings.include_source:
            body += (
                '\n    <details class="source">\n'
                "        <summary>Source</summary>\n"
                f"        <pre><code>{html.escape(source)}</code></pre>\n"
                "    </details>"
            )

        page_script = CHART_HELPERS_SCRIPT + "".join(
            f"\n        {call}" for call in calls
        )
        return assemble_document(
            CHART_HEADING,
            version,
            body,
            self.settings,
            head_scripts=(self.settings.chart_js_url, self.settings.datalabels_url),
            page_script=page_script,
        )

    # -- internals ----------------------------------------------------------

    def _guarded(self, heading: str, version: str, build: Callable[[], str]) -> str:
        """Run a body builder; on failure return a shell reporting the error."""
        try:
            return build()
        except Exception as e:
            logger.exception("Rendering failed for %s", heading)
            body = (
                '    <div class="container">\n'
                f"        {error_fragment('Error rendering artifact', f'{type(e).__name__}: {e}')}\n"
                "    </div>"
            )
            return assemble_document(heading, version, body, self.settings)


def render(kind: ContentKind, payload: str | ExtractionResult, version: str,
           settings: ConverterSettings | None = None) -> str:
    """Convenience function: render with a one-off HTMLBuilder."""
    return HTMLBuilder(settings).render(kind, payload, version)
