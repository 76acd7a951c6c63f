"""Occurrence package - keyword indexing and position maps for long text.

Public API:
- OccurrenceMap: Marker overlay, highlighted markup and snippets for one text
- OccurrenceIndex / OccurrenceMarker: Result models
- CoordinateMap: Offset-to-axis linear mapping
- indices: Pure keyword indexing function
- highlight_markup: Rejoin an index with matches wrapped in colored spans
"""

from textmark.occurrence.indexing import compile_keyword, highlight_markup, indices
from textmark.occurrence.mapping import CoordinateMap
from textmark.occurrence.models import OccurrenceIndex, OccurrenceMarker
from textmark.occurrence.occurrence_map import OccurrenceMap

__all__ = [
    "CoordinateMap",
    "OccurrenceIndex",
    "OccurrenceMap",
    "OccurrenceMarker",
    "compile_keyword",
    "highlight_markup",
    "indices",
]
