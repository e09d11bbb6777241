"""ConverterSettings - the overridable bundle of extraction/rendering defaults."""

from dataclasses import dataclass, field
from typing import Any

from . import defaults
from .models import ChartKind


def _default_placeholders() -> dict[ChartKind, dict]:
    return {
        kind: {"labels": list(ds["labels"]), "values": list(ds["values"])}
        for kind, ds in defaults.PLACEHOLDER_DATASETS.items()
    }


@dataclass
class ConverterSettings:
    """Fallback data, thresholds, and page resources used by the pipeline."""
    palette: list[str] = field(default_factory=lambda: list(defaults.DEFAULT_PALETTE))
    placeholder_datasets: dict[ChartKind, dict] = field(default_factory=_default_placeholders)
    sample_labels: list[str] = field(default_factory=lambda: list(defaults.SAMPLE_LABELS))
    sample_values: list[float] = field(default_factory=lambda: list(defaults.SAMPLE_VALUES))
    min_array_span: int = defaults.MIN_ARRAY_SPAN
    max_scan_chars: int = defaults.MAX_SCAN_CHARS
    theme_storage_key: str = defaults.THEME_STORAGE_KEY
    chart_js_url: str = defaults.CHART_JS_URL
    datalabels_url: str = defaults.DATALABELS_URL
    include_source: bool = True

    def palette_color(self, index: int) -> str:
        """Cycle through the palette; falls back to the built-in one if empty."""
        palette = self.palette or list(defaults.DEFAULT_PALETTE)
        return palette[index % len(palette)]

    def placeholder(self, kind: ChartKind) -> tuple[list[str], list[float]]:
        """Labels and values of the illustrative dataset for a chart kind."""
        ds = self.placeholder_datasets.get(kind) or defaults.PLACEHOLDER_DATASETS[kind]
        return [str(label) for label in ds["labels"]], [float(v) for v in ds["values"]]

    def to_dict(self) -> dict:
        return {
            "extraction": {
                "min_array_span": self.min_array_span,
                "max_scan_chars": self.max_scan_chars,
            },
            "palette": list(self.palette),
            "placeholder_datasets": {
                kind.value: {"labels": list(ds["labels"]), "values": list(ds["values"])}
                for kind, ds in self.placeholder_datasets.items()
            },
            "sample_dataset": {
                "labels": list(self.sample_labels),
                "values": list(self.sample_values),
            },
            "document": {
                "theme_storage_key": self.theme_storage_key,
                "chart_js_url": self.chart_js_url,
                "datalabels_url": self.datalabels_url,
                "include_source": self.include_source,
            },
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ConverterSettings":
        """Build settings from a (possibly partial) dict; missing keys keep defaults.

        Raises:
            ValueError: If a value has the wrong shape.
        """
        base = cls()
        extraction = d.get("extraction", {}) or {}
        document = d.get("document", {}) or {}
        sample = d.get("sample_dataset", {}) or {}

        placeholders = base.placeholder_datasets
        for key, ds in (d.get("placeholder_datasets", {}) or {}).items():
            try:
                kind = ChartKind(key)
            except ValueError:
                raise ValueError(f"Unknown chart kind in placeholder_datasets: {key!r}") from None
            placeholders[kind] = _parse_dataset(ds, f"placeholder_datasets.{key}")

        sample_labels, sample_values = base.sample_labels, base.sample_values
        if sample:
            parsed = _parse_dataset(sample, "sample_dataset")
            sample_labels, sample_values = parsed["labels"], parsed["values"]

        palette = d.get("palette", base.palette)
        if not isinstance(palette, list) or not all(isinstance(c, str) for c in palette):
            raise ValueError("palette must be a list of colour strings")

        return cls(
            palette=list(palette),
            placeholder_datasets=placeholders,
            sample_labels=sample_labels,
            sample_values=sample_values,
            min_array_span=_as_int(extraction, "min_array_span", base.min_array_span),
            max_scan_chars=_as_int(extraction, "max_scan_chars", base.max_scan_chars),
            theme_storage_key=str(document.get("theme_storage_key", base.theme_storage_key)),
            chart_js_url=str(document.get("chart_js_url", base.chart_js_url)),
            datalabels_url=str(document.get("datalabels_url", base.datalabels_url)),
            include_source=_as_bool(document, "include_source", base.include_source),
        )


def _as_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"extraction.{key} must be a non-negative integer, got {value!r}")
    return value


def _as_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"document.{key} must be true or false, got {value!r}")
    return value


def _parse_dataset(ds: Any, where: str) -> dict:
    """Validate a {labels, values} mapping of equal, non-zero length."""
    if not isinstance(ds, dict):
        raise ValueError(f"{where} must be a mapping with labels and values")
    labels = ds.get("labels") or []
    values = ds.get("values") or []
    if not labels or len(labels) != len(values):
        raise ValueError(f"{where} needs non-empty labels and values of equal length")
    try:
        return {"labels": [str(label) for label in labels],
                "values": [float(v) for v in values]}
    except (TypeError, ValueError):
        raise ValueError(f"{where}.values must be numbers") from None
