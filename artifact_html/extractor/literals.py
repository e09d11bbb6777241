"""Tolerant scanner for list and object literals embedded in source text.

This is not a parser. It only knows enough about quoting, comments and
bracket nesting to cut a literal out of surrounding code and read flat
``key: value`` pairs from it. Anything it does not understand (function
calls, identifiers, template expressions) comes back as ``None`` so the
caller can fall back to a default.
"""

from __future__ import annotations

import re
from typing import Any

_OPENERS = "[{("
_CLOSERS = "]})"
_QUOTES = "\"'`"

_NUMBER_RE = re.compile(r"^[-+]?(?:\d[\d_]*(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?$")
_CAST_TYPE_RE = re.compile(r"^[\w.<>\[\]]+$")
_KEY_RE = re.compile(r"""^\s*(?:"([^"]*)"|'([^']*)'|([A-Za-z_$][\w$]*))\s*:(?!:)""")

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"', "`": "`"}


def _skip_quoted(text: str, i: int) -> int:
    """Return the index just past the string literal starting at ``text[i]``."""
    quote = text[i]
    i += 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            # Unterminated single-line string; resume on the next line
            return i
        i += 1
    return n


def _skip_comment(text: str, i: int) -> int:
    """Return the index past a comment starting at ``text[i]``, or ``i`` if none."""
    if text.startswith("//", i):
        end = text.find("\n", i)
        return len(text) if end == -1 else end
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        return len(text) if end == -1 else end + 2
    return i


def _skip_inert(text: str, i: int) -> int:
    """Skip a string or comment at ``i``; returns ``i`` unchanged otherwise."""
    if text[i] in _QUOTES:
        return _skip_quoted(text, i)
    return _skip_comment(text, i)


def bracket_pairs(text: str) -> dict[int, int]:
    """Map every opening bracket in code to its closing bracket, in one pass.

    Brackets inside strings and comments are not keys. Openers that are
    never closed map to -1.
    """
    pairs: dict[int, int] = {}
    stack: list[int] = []
    i = 0
    n = len(text)
    while i < n:
        j = _skip_inert(text, i)
        if j != i:
            i = j
            continue
        ch = text[i]
        if ch in _OPENERS:
            pairs[i] = -1
            stack.append(i)
        elif ch in _CLOSERS and stack:
            pairs[stack.pop()] = i
        i += 1
    return pairs


def tag_extent(text: str, start: int) -> tuple[int, bool]:
    """Scan the JSX open tag that begins at ``start``.

    Braced attribute expressions (``data={rows}``, ``fill={() => x}``) are
    stepped over. Returns ``(index, True)`` for the ``>`` ending the tag, or
    ``(index, False)`` where the scan gave up: another tag opening at brace
    depth 0, or the end of the text.
    """
    depth = 0
    i = start + 1
    n = len(text)
    while i < n:
        j = _skip_inert(text, i)
        if j != i:
            i = j
            continue
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
        elif ch == ">" and depth == 0:
            return i, True
        elif ch == "<" and depth == 0:
            return i, False
        i += 1
    return n, False


def split_top_level(body: str) -> list[str]:
    """Split ``body`` on commas that are not nested, quoted, or commented."""
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    n = len(body)
    while i < n:
        j = _skip_inert(body, i)
        if j != i:
            i = j
            continue
        ch = body[i]
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            parts.append(body[start:i])
            start = i + 1
        i += 1
    parts.append(body[start:])
    return [p for p in (_strip_comments(p).strip() for p in parts) if p]


def _strip_comments(text: str) -> str:
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        if text[i] in _QUOTES:
            j = _skip_quoted(text, i)
            out.append(text[i:j])
            i = j
            continue
        j = _skip_comment(text, i)
        if j != i:
            out.append(" ")
            i = j
            continue
        out.append(text[i])
        i += 1
    return "".join(out)


def _unquote(literal: str) -> str:
    inner = literal[1:-1]
    out: list[str] = []
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch == "\\" and i + 1 < len(inner):
            out.append(_ESCAPES.get(inner[i + 1], inner[i + 1]))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def parse_scalar(text: str) -> str | float | None:
    """Read a string or numeric literal; anything else is ``None``."""
    text = text.strip()
    # Drop TypeScript casts such as `12 as number`
    head, sep, cast = text.rpartition(" as ")
    if sep and _CAST_TYPE_RE.match(cast.strip()):
        text = head.rstrip()
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        if text[0] == "`" and "${" in text:
            return None
        return _unquote(text)
    if _NUMBER_RE.match(text):
        try:
            return float(text.replace("_", ""))
        except ValueError:
            return None
    return None


def parse_object(text: str) -> dict[str, Any]:
    """Read the flat ``key: value`` pairs of an object literal.

    Nested values, spreads and shorthand properties are skipped; values
    that are not plain literals map to ``None``.
    """
    text = text.strip()
    if text.startswith("{"):
        text = text[1:]
    if text.endswith("}"):
        text = text[:-1]

    result: dict[str, Any] = {}
    for entry in split_top_level(text):
        m = _KEY_RE.match(entry)
        if not m:
            continue
        key = next(g for g in m.groups() if g is not None)
        value_text = entry[m.end():].strip()
        if value_text[:1] in _OPENERS:
            continue
        result.setdefault(key, parse_scalar(value_text))
    return result


def parse_elements(body: str) -> list[dict[str, Any]]:
    """Read the elements of a list literal body as field dicts.

    Object elements become their parsed fields. Bare numbers become
    ``{"value": n}`` and bare strings ``{"name": s}``; other elements are
    dropped.
    """
    elements: list[dict[str, Any]] = []
    for part in split_top_level(body):
        if part.startswith("{"):
            elements.append(parse_object(part))
            continue
        scalar = parse_scalar(part)
        if isinstance(scalar, float):
            elements.append({"value": scalar})
        elif isinstance(scalar, str):
            elements.append({"name": scalar})
    return elements
