"""Annotate package - dynamic term tagging over segmented text.

Public API:
- Annotator: Tagging state machine with channels and interaction bindings
- Channel: Frozen channel definition (marker class + optional observers)
- Term / Unit: Segmented term and addressable rendered unit
- MarkerSurface / HtmlMarkerSurface: Marker side-effect boundary
- TextResolver / PlainTextResolver: Event-to-text resolution
- canonicalize, split_terms, selection_canonicals: Segmentation utilities
"""

from textmark.annotate.annotator import Annotator, PlainTextResolver, TextResolver
from textmark.annotate.models import (
    INTERACTION_KINDS,
    Channel,
    InteractionKind,
    Term,
    Unit,
)
from textmark.annotate.segmentation import (
    PUNCTUATION_PATTERN,
    STOPWORDS,
    build_stopwords,
    canonicalize,
    selection_canonicals,
    split_terms,
)
from textmark.annotate.surface import SYNTHETIC_SEPARATOR, HtmlMarkerSurface, MarkerSurface

__all__ = [
    # Constants
    "INTERACTION_KINDS",
    "PUNCTUATION_PATTERN",
    "STOPWORDS",
    "SYNTHETIC_SEPARATOR",
    # Models
    "Channel",
    "InteractionKind",
    "Term",
    "Unit",
    # Surface and resolution
    "HtmlMarkerSurface",
    "MarkerSurface",
    "PlainTextResolver",
    "TextResolver",
    # Public API
    "Annotator",
    "build_stopwords",
    "canonicalize",
    "selection_canonicals",
    "split_terms",
]
