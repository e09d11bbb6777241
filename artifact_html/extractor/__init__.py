"""Extraction engine — classifies artifacts and recovers chart declarations.

Uses text heuristics rather than a parser: the classifier looks for an SVG
root, and the declaration chain degrades from data-bound charts to
placeholder charts but always returns something to render.
"""

from .classifier import classify, is_markup
from .declarations import STAGES, discover_arrays, extract

__all__ = ["STAGES", "classify", "discover_arrays", "extract", "is_markup"]
