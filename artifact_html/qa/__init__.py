"""QA validation package for the artifact converter.

Validates rendered HTML against the markup or chart declarations it was
built from: document structure, theme toggle wiring, verbatim markup and
one panel call per declaration.
"""

from .validator import (
    DocumentValidator,
    Issue,
    QAResult,
    validate_document,
)

__all__ = [
    "DocumentValidator",
    "Issue",
    "QAResult",
    "validate_document",
]
