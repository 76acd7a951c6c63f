"""textmark - interactive term tagging and keyword occurrence maps."""

from textmark.annotate import Annotator, Channel
from textmark.occurrence import OccurrenceMap, indices

__all__ = ["Annotator", "Channel", "OccurrenceMap", "indices"]

__version__ = "0.1.0"
