"""Declaration extraction — recovers chart declarations from component source.

There is no parser here. Chart data is recovered from the raw text by an
ordered chain of heuristics, each tried only if every earlier one found
nothing ("first non-empty wins", no merging across stages):

Array discovery (feeds the stages below):
    - ``[export] [const|let|var] name [: Type] = [ ... ]`` at line start,
      outside any earlier list; closing brackets come from one
      string/comment-aware pass over the text

Stages:
    - usage     Array referenced as ``data={name}`` / ``data="name"`` by a
                BarChart/Bar, LineChart/Line or PieChart/Pie tag
    - naming    Any array longer than ``min_array_span``; kind guessed from
                "bar"/"pie"/"line" in its name, default bar
    - tags      One placeholder chart per BarChart/LineChart/PieChart
                open/close pair
    - fallback  One sample bar chart plus one sample pie chart

Field mapping for list elements (first match wins, per element):
    - label:  name -> label -> first string field of the list -> ""
    - value:  value -> data -> 0
    - colour: color -> fill -> backgroundColor -> absent (usage) or
              palette colour (naming)

Every declaration leaving this module has one value and one colour slot per
label; empty lists are dropped instead of emitted.
"""

from __future__ import annotations

import bisect
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from artifact_html.extractor.literals import (
    bracket_pairs,
    parse_elements,
    tag_extent,
)
from artifact_html.schema import defaults
from artifact_html.schema.models import (
    ChartDeclaration,
    ChartKind,
    ChartSeries,
    ExtractionResult,
)
from artifact_html.schema.settings import ConverterSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Patterns and field names
# ---------------------------------------------------------------------------

_ARRAY_ASSIGN_RE = re.compile(
    r"^[ \t]*(?:export[ \t]+)?(?:(?:const|let|var)[ \t]+)?"
    r"([A-Za-z_$][\w$]*)[ \t]*(?::[^=\n]+)?=[ \t]*\[",
    re.MULTILINE,
)

# Component tags that can carry a data prop, and the chart kind they imply
_TAG_KINDS: dict[str, ChartKind] = {
    "BarChart": ChartKind.BAR,
    "Bar": ChartKind.BAR,
    "LineChart": ChartKind.LINE,
    "Line": ChartKind.LINE,
    "PieChart": ChartKind.PIE,
    "Pie": ChartKind.PIE,
}
_CHART_TAG_RE = re.compile(r"<(BarChart|LineChart|PieChart|Bar|Line|Pie)\b")

# Container tags counted by the tag-presence stage
_CONTAINER_TAGS: dict[str, ChartKind] = {
    "BarChart": ChartKind.BAR,
    "LineChart": ChartKind.LINE,
    "PieChart": ChartKind.PIE,
}
_CONTAINER_OPEN_RE = re.compile(r"<(BarChart|LineChart|PieChart)\b")
_CONTAINER_CLOSE_RE = re.compile(r"</(BarChart|LineChart|PieChart)\s*>")

_DATA_REF_RE = re.compile(
    r"""\bdata\s*=\s*(?:\{\s*([A-Za-z_$][\w$]*)\s*\}|"([A-Za-z_$][\w$]*)"|'([A-Za-z_$][\w$]*)')"""
)
_KEY_HINT_RE = re.compile(
    r"""\b(dataKey|nameKey)\s*=\s*(?:"([^"]+)"|'([^']+)'|\{\s*["']([^"']+)["']\s*\})"""
)

# Kind keywords looked up in identifier names, in priority order
_NAME_KINDS: tuple[tuple[str, ChartKind], ...] = (
    ("bar", ChartKind.BAR),
    ("pie", ChartKind.PIE),
    ("line", ChartKind.LINE),
)

_LABEL_FIELDS = ("name", "label")
_VALUE_FIELDS = ("value", "data")
_COLOR_FIELDS = ("color", "fill", "backgroundColor")

_TITLE_SUFFIX = "Data"
_RESERVED_NAMES = frozenset({"const", "let", "var", "export"})


# ---------------------------------------------------------------------------
# Scan state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ArrayCandidate:
    """A ``name = [ ... ]`` assignment found in the source."""
    name: str
    start: int        # Offset of the opening bracket
    span: str         # Raw text from "[" through "]" (or end of input)
    closed: bool = True

    @property
    def body(self) -> str:
        return self.span[1:-1] if self.closed else self.span[1:]


@dataclass(frozen=True)
class TagUse:
    """A chart component tag that references an array through its data prop."""
    tag: str
    kind: ChartKind
    ref: str
    start: int
    block: str        # Open tag plus children up to the matching close tag


@dataclass(frozen=True)
class ScanContext:
    """Everything a stage may read. Built once per ``extract`` call."""
    text: str
    candidates: tuple[ArrayCandidate, ...]
    settings: ConverterSettings = field(default_factory=ConverterSettings)


Stage = Callable[[ScanContext], list[ChartDeclaration]]


# ---------------------------------------------------------------------------
# Array discovery
# ---------------------------------------------------------------------------

def discover_arrays(text: str) -> tuple[ArrayCandidate, ...]:
    """Collect top-level named list assignments in discovery order.

    Assignments nested inside an earlier list, or sitting in a string or
    comment, are skipped. The first assignment of a name wins.
    """
    pairs = bracket_pairs(text)
    seen: set[str] = set()
    found: list[ArrayCandidate] = []
    covered = 0
    for m in _ARRAY_ASSIGN_RE.finditer(text):
        open_idx = m.end() - 1
        if open_idx < covered or open_idx not in pairs:
            continue
        close_idx = pairs[open_idx]
        closed = close_idx != -1
        end = close_idx + 1 if closed else len(text)
        covered = end
        name = m.group(1)
        if name not in seen and name not in _RESERVED_NAMES:
            seen.add(name)
            found.append(ArrayCandidate(name=name, start=open_idx,
                                        span=text[open_idx:end], closed=closed))
        if not closed:
            # An unclosed list swallows the rest of the text
            break
    return tuple(found)


def _open_tags(text: str, pattern: re.Pattern) -> list[tuple[int, int, str]]:
    """``(start, end, tag)`` for each open tag matched by ``pattern``.

    Tags starting inside the text already scanned for an earlier tag are
    skipped, so each character is scanned at most once.
    """
    tags = []
    resume = 0
    for m in pattern.finditer(text):
        if m.start() < resume:
            continue
        stop, closed = tag_extent(text, m.start())
        if closed:
            tags.append((m.start(), stop, m.group(1)))
            resume = stop + 1
        else:
            resume = stop
    return tags


def _positions(pattern: re.Pattern, text: str) -> dict[str, list[int]]:
    """Start offsets of every match of ``pattern``, grouped by tag name."""
    found: dict[str, list[int]] = {}
    for m in pattern.finditer(text):
        found.setdefault(m.group(1), []).append(m.start())
    return found


def _next_after(positions: list[int], index: int) -> int:
    i = bisect.bisect_right(positions, index)
    return positions[i] if i < len(positions) else -1


def find_tag_uses(text: str) -> list[TagUse]:
    """Find chart tags whose data prop names an identifier, in source order.

    A container's block runs to its close tag or the next container,
    whichever comes first; a Bar/Line/Pie element's block is its open tag.
    """
    closes = _positions(_CONTAINER_CLOSE_RE, text)
    container_starts = [start for start, _, _ in _open_tags(text, _CONTAINER_OPEN_RE)]
    uses: list[TagUse] = []
    for start, end, tag in _open_tags(text, _CHART_TAG_RE):
        open_tag = text[start:end + 1]
        ref = _DATA_REF_RE.search(open_tag)
        if not ref:
            continue
        block = open_tag
        if tag in _CONTAINER_TAGS and not open_tag[:-1].rstrip().endswith("/"):
            limits = [p for p in (_next_after(closes.get(tag, []), end),
                                  _next_after(container_starts, end)) if p != -1]
            if limits:
                block = text[start:min(limits)]
        uses.append(TagUse(
            tag=tag,
            kind=_TAG_KINDS[tag],
            ref=next(g for g in ref.groups() if g),
            start=start,
            block=block,
        ))
    return uses


# ---------------------------------------------------------------------------
# Element -> declaration mapping
# ---------------------------------------------------------------------------

def _title_from_identifier(name: str) -> str:
    """``salesData`` -> ``sales``; names that are only the suffix stay as-is."""
    if name.endswith(_TITLE_SUFFIX) and len(name) > len(_TITLE_SUFFIX):
        return name[: -len(_TITLE_SUFFIX)]
    return name


def _format_label(value: Any) -> str:
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return str(value)


def _first_of(element: dict[str, Any], fields: tuple[str, ...],
              kind: type | tuple[type, ...]) -> Any:
    for f in fields:
        value = element.get(f)
        if isinstance(value, kind):
            return value
    return None


def _keys_of_type(elements: list[dict[str, Any]], kind: type,
                  exclude: set[str]) -> list[str]:
    """Keys holding values of ``kind`` anywhere in the list, in first-seen order."""
    keys: list[str] = []
    for element in elements:
        for key, value in element.items():
            if key not in exclude and key not in keys and isinstance(value, kind):
                keys.append(key)
    return keys


def _key_hints(block: str) -> tuple[list[str], str | None]:
    """``dataKey`` values and the ``nameKey`` value found in a chart block."""
    data_keys: list[str] = []
    name_key: str | None = None
    for m in _KEY_HINT_RE.finditer(block):
        value = next(g for g in m.groups()[1:] if g)
        if m.group(1) == "nameKey":
            name_key = name_key or value
        elif value not in data_keys:
            data_keys.append(value)
    return data_keys, name_key


def conform_series(labels: list[str], series: list[ChartSeries]) -> list[ChartSeries]:
    """Pad (zeros / absent colours) or truncate every series to ``len(labels)``."""
    n = len(labels)
    conformed = []
    for s in series:
        values = list(s.values)[:n]
        values += [0.0] * (n - len(values))
        colors = list(s.colors)[:n]
        colors += [None] * (n - len(colors))
        conformed.append(ChartSeries(label=s.label, values=values, colors=colors))
    return conformed


def build_declaration(
    title: str,
    kind: ChartKind,
    elements: list[dict[str, Any]],
    settings: ConverterSettings,
    *,
    data_keys: list[str] | None = None,
    name_key: str | None = None,
    palette_fallback: bool = False,
) -> ChartDeclaration | None:
    """Map parsed list elements onto a ChartDeclaration.

    Returns None for an empty list, so callers omit it rather than emit a
    declaration without labels.
    """
    if not elements:
        return None

    string_keys = _keys_of_type(elements, str, set(_COLOR_FIELDS) | set(_VALUE_FIELDS))
    label_fields = _LABEL_FIELDS
    if name_key:
        label_fields = (name_key,) + label_fields
    else:
        # A dataKey naming a string field is the category axis (XAxis dataKey)
        hinted = [k for k in (data_keys or []) if k in string_keys]
        if hinted:
            label_fields = (hinted[0],) + label_fields
    fallback_label = next((k for k in string_keys if k not in label_fields), None)
    if fallback_label:
        label_fields = label_fields + (fallback_label,)

    labels = []
    for element in elements:
        value = _first_of(element, label_fields, (str, float))
        labels.append(_format_label(value) if value is not None else "")

    exclude = set(label_fields) | set(_COLOR_FIELDS)
    numeric_keys = _keys_of_type(elements, float, exclude)
    hinted_series = [k for k in (data_keys or []) if k in numeric_keys]

    series: list[ChartSeries] = []
    if hinted_series:
        for key in hinted_series:
            series.append(_series_for_key(key, elements))
    elif any(_first_of(e, _VALUE_FIELDS, float) is not None for e in elements):
        values = [_first_of(e, _VALUE_FIELDS, float) or 0.0 for e in elements]
        series.append(ChartSeries(label=title, values=values))
    elif numeric_keys:
        series.extend(_series_for_key(key, elements) for key in numeric_keys)
    else:
        series.append(ChartSeries(label=title, values=[0.0] * len(elements)))

    if len(series) == 1:
        series[0].label = title
        colors = [_first_of(e, _COLOR_FIELDS, str) for e in elements]
        if palette_fallback:
            colors = [c or settings.palette_color(i) for i, c in enumerate(colors)]
        series[0].colors = colors
    else:
        for idx, s in enumerate(series):
            color = settings.palette_color(idx) if palette_fallback else None
            s.colors = [color] * len(elements)

    return ChartDeclaration(title=title, kind=kind, labels=labels,
                            series=conform_series(labels, series))


def _series_for_key(key: str, elements: list[dict[str, Any]]) -> ChartSeries:
    values = []
    for element in elements:
        value = element.get(key)
        values.append(value if isinstance(value, float) else 0.0)
    return ChartSeries(label=key, values=values)


def _placeholder_declaration(title: str, kind: ChartKind,
                             labels: list[str], values: list[float]) -> ChartDeclaration:
    series = conform_series(labels, [ChartSeries(label=title, values=list(values))])
    return ChartDeclaration(title=title, kind=kind, labels=list(labels), series=series)


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def usage_linked(ctx: ScanContext) -> list[ChartDeclaration]:
    """Arrays bound to a chart component through its data prop."""
    first_use: dict[str, TagUse] = {}
    for use in find_tag_uses(ctx.text):
        first_use.setdefault(use.ref, use)

    declarations = []
    for candidate in ctx.candidates:
        use = first_use.get(candidate.name)
        if use is None:
            continue
        data_keys, name_key = _key_hints(use.block)
        decl = build_declaration(
            _title_from_identifier(candidate.name),
            use.kind,
            parse_elements(candidate.body),
            ctx.settings,
            data_keys=data_keys,
            name_key=name_key,
        )
        if decl is not None:
            declarations.append(decl)
    return declarations


def infer_kind_from_name(name: str) -> ChartKind:
    lowered = name.lower()
    for keyword, kind in _NAME_KINDS:
        if keyword in lowered:
            return kind
    return ChartKind.BAR


def naming_heuristic(ctx: ScanContext) -> list[ChartDeclaration]:
    """Sizeable arrays, charted by what their names suggest."""
    declarations = []
    for candidate in ctx.candidates:
        if len(candidate.span) <= ctx.settings.min_array_span:
            continue
        decl = build_declaration(
            _title_from_identifier(candidate.name),
            infer_kind_from_name(candidate.name),
            parse_elements(candidate.body),
            ctx.settings,
            palette_fallback=True,
        )
        if decl is not None:
            declarations.append(decl)
    return declarations


def tag_presence(ctx: ScanContext) -> list[ChartDeclaration]:
    """One placeholder chart per chart container open/close pair."""
    closes = _positions(_CONTAINER_CLOSE_RE, ctx.text)
    opens = [
        (start, tag) for start, end, tag in _open_tags(ctx.text, _CONTAINER_OPEN_RE)
        if not ctx.text[start:end].rstrip().endswith("/")
    ]

    # Pair each open tag with the first unused close tag after it
    paired: list[tuple[int, str]] = []
    next_close = {tag: 0 for tag in _CONTAINER_TAGS}
    for start, tag in opens:
        positions = closes.get(tag, [])
        idx = next_close[tag]
        while idx < len(positions) and positions[idx] < start:
            idx += 1
        if idx < len(positions):
            paired.append((start, tag))
            idx += 1
        next_close[tag] = idx

    declarations = []
    counts: dict[ChartKind, int] = {}
    for _, tag in paired:
        kind = _CONTAINER_TAGS[tag]
        counts[kind] = counts.get(kind, 0) + 1
        title = f"{kind.value.capitalize()} Chart"
        if counts[kind] > 1:
            title = f"{title} {counts[kind]}"
        labels, values = ctx.settings.placeholder(kind)
        declarations.append(_placeholder_declaration(title, kind, labels, values))
    return declarations


def terminal_fallback(ctx: ScanContext) -> list[ChartDeclaration]:
    """Sample bar and pie charts, so the result is never empty."""
    labels = list(ctx.settings.sample_labels)
    values = list(ctx.settings.sample_values)
    return [
        _placeholder_declaration(defaults.SAMPLE_BAR_TITLE, ChartKind.BAR, labels, values),
        _placeholder_declaration(defaults.SAMPLE_PIE_TITLE, ChartKind.PIE, labels, values),
    ]


STAGES: tuple[tuple[str, Stage], ...] = (
    ("usage", usage_linked),
    ("naming", naming_heuristic),
    ("tags", tag_presence),
    ("fallback", terminal_fallback),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract(code: str, settings: ConverterSettings | None = None,
            stages: tuple[tuple[str, Stage], ...] = STAGES) -> ExtractionResult:
    """Run the fallback chain over ``code``. Never raises; never returns empty.

    A stage that raises is logged and treated as having found nothing.
    """
    settings = settings or ConverterSettings()
    text = code if isinstance(code, str) else ""
    if settings.max_scan_chars and len(text) > settings.max_scan_chars:
        logger.debug("Scanning first %d of %d chars", settings.max_scan_chars, len(text))
        text = text[: settings.max_scan_chars]

    try:
        candidates = discover_arrays(text)
    except Exception:
        logger.warning("Array discovery failed; continuing without candidates",
                       exc_info=True)
        candidates = ()

    ctx = ScanContext(text=text, candidates=candidates, settings=settings)
    for name, stage in stages:
        try:
            declarations = [d for d in stage(ctx) if d.is_valid()]
        except Exception:
            logger.warning("Extraction stage %r failed; falling through", name,
                           exc_info=True)
            continue
        if declarations:
            logger.debug("Stage %r produced %d declaration(s)", name, len(declarations))
            return ExtractionResult(declarations=declarations, stage=name)
        logger.debug("Stage %r produced nothing", name)

    # Only reachable when the configured sample dataset itself is unusable
    builtin = ScanContext(text=text, candidates=candidates)
    return ExtractionResult(declarations=terminal_fallback(builtin), stage="fallback")
