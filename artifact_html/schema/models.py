"""Core models - the contract between classifier, extractor, and renderer.

An Artifact is classified once into a ContentKind. Code artifacts are
reduced by the extractor to an ExtractionResult of ChartDeclarations,
which the renderer turns into chart panels. Nothing here is persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ContentKind(Enum):
    """What an artifact's content is."""
    MARKUP = "markup"    # Renderable vector markup (<svg ...>)
    CODE = "code"        # Component source describing charts


class ChartKind(Enum):
    """Chart kinds the renderer can draw."""
    BAR = "bar"
    LINE = "line"
    PIE = "pie"


# ---------------------------------------------------------------------------
# Input / output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Artifact:
    """Caller-supplied source text plus its version label."""
    content: str
    version: str


@dataclass(frozen=True)
class ConversionResult:
    """Text relayed verbatim to the caller, flagged when it is a diagnostic."""
    text: str
    is_error: bool = False


# ---------------------------------------------------------------------------
# Chart declarations
# ---------------------------------------------------------------------------

@dataclass
class ChartSeries:
    """One data series: a value and an optional colour per label."""
    label: str
    values: list[float] = field(default_factory=list)
    colors: list[str | None] = field(default_factory=list)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"label": self.label, "values": list(self.values)}
        if any(c is not None for c in self.colors):
            d["colors"] = list(self.colors)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "ChartSeries":
        values = [float(v) for v in d.get("values", [])]
        colors = list(d.get("colors", [None] * len(values)))
        return cls(label=d.get("label", ""), values=values, colors=colors)


@dataclass
class ChartDeclaration:
    """Renderer-agnostic description of one chart panel.

    Every series carries exactly one value (and one colour slot) per label.
    The extractor guarantees this before a declaration leaves it; use
    ``is_valid()`` to check a hand-built one.
    """
    title: str
    kind: ChartKind
    labels: list[str]
    series: list[ChartSeries]

    def is_valid(self) -> bool:
        if not self.labels or not self.series:
            return False
        n = len(self.labels)
        return all(len(s.values) == n and len(s.colors) == n for s in self.series)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "kind": self.kind.value,
            "labels": list(self.labels),
            "series": [s.to_dict() for s in self.series],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ChartDeclaration":
        return cls(
            title=d.get("title", ""),
            kind=ChartKind(d.get("kind", "bar")),
            labels=[str(label) for label in d.get("labels", [])],
            series=[ChartSeries.from_dict(s) for s in d.get("series", [])],
        )


@dataclass
class ExtractionResult:
    """Declarations in discovery order, tagged with the stage that found them."""
    declarations: list[ChartDeclaration] = field(default_factory=list)
    stage: str = ""

    def __iter__(self) -> Iterator[ChartDeclaration]:
        return iter(self.declarations)

    def __len__(self) -> int:
        return len(self.declarations)

    def __getitem__(self, index: int) -> ChartDeclaration:
        return self.declarations[index]

    @property
    def titles(self) -> list[str]:
        return [d.title for d in self.declarations]

    def to_dict(self) -> dict:
        return {
            "stage": self.stage,
            "declarations": [d.to_dict() for d in self.declarations],
        }
