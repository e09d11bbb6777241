"""Content classifier: decides whether an artifact is markup or code.

Markup:  trimmed content starts with ``<svg``, or an ``<svg`` opening tag
         with attributes appears anywhere (e.g. SVG wrapped in prose)
Code:    everything else, including empty input
"""

import re

from artifact_html.schema.models import ContentKind

_SVG_ROOT = "<svg"
_SVG_OPEN_TAG_RE = re.compile(r"<svg\s")


def is_markup(content: str) -> bool:
    return content.strip().startswith(_SVG_ROOT) or bool(_SVG_OPEN_TAG_RE.search(content))


def classify(content: str) -> ContentKind:
    """Classify artifact content. Total and pure: never raises."""
    if isinstance(content, str) and is_markup(content):
        return ContentKind.MARKUP
    return ContentKind.CODE
