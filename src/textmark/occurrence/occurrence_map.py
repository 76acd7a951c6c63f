"""Position map of keyword occurrences across a long document.

An OccurrenceMap fixes the coordinate mapping for one text when it is
built. Each ``highlight`` call indexes a keyword afresh, replaces the marker
overlay and the highlighted markup, and remembers the keyword so hovering a
marker can produce its snippet without re-indexing the full text.
"""

from __future__ import annotations

import html
import logging
from typing import Any

from textmark.config import TextMarkConfig, config
from textmark.occurrence.indexing import highlight_markup, indices
from textmark.occurrence.mapping import CoordinateMap
from textmark.occurrence.models import OccurrenceMarker

logger = logging.getLogger(__name__)


class OccurrenceMap:
    """Keyword occurrence overlay with on-demand snippets.

    Args:
        text: Full document text
        map_extent: Visual length of the map axis
        map_margin: Space reserved at both ends of the axis
        snippet_half_width: Characters kept on each side of an occurrence
        default_color: Color used when highlight is called without one
        selector: Base selector for marker ids and highlight classes

    Any argument left as None falls back to the project configuration.
    """

    def __init__(
        self,
        text: str,
        *,
        map_extent: float | None = None,
        map_margin: float | None = None,
        snippet_half_width: int | None = None,
        default_color: str | None = None,
        selector: str | None = None,
    ) -> None:
        overrides: dict[str, Any] = {
            "map_extent": map_extent,
            "map_margin": map_margin,
            "snippet_half_width": snippet_half_width,
            "highlight_color": default_color,
            "occurrence_selector": selector,
        }
        settings = TextMarkConfig(
            **{
                **config.model_dump(),
                **{key: value for key, value in overrides.items() if value is not None},
            }
        )

        self.text = text
        self.snippet_half_width = settings.snippet_half_width
        self.default_color = settings.highlight_color
        self.selector = settings.occurrence_selector
        self.coordinates = CoordinateMap(
            length=len(text),
            extent=settings.map_extent,
            margin=settings.map_margin,
        )

        self.keyword: str | None = None
        self.markers: list[OccurrenceMarker] = []
        self.highlighted_markup = html.escape(text, quote=False)
        self._markers_by_id: dict[str, OccurrenceMarker] = {}

    @property
    def match_class(self) -> str:
        return f"{self.selector}-match"

    def map_scale(self, position: int) -> float:
        """Coordinate of a character offset on the map axis."""
        return self.coordinates.scale(position)

    def marker_id(self, position: int) -> str:
        return f"{self.selector}-{position}"

    def highlight(self, keyword: str | None, color: str | None = None) -> list[OccurrenceMarker]:
        """Index a keyword and replace the marker overlay and highlighted text.

        Args:
            keyword: Case-insensitive regular expression
            color: Highlight color (default: the configured color)

        Returns:
            One marker per occurrence, in document order

        Raises:
            InvalidKeywordError: If the keyword is not a valid pattern
            InvalidColorError: If the color is not a CSS color
        """
        color = color or self.default_color
        index = indices(self.text, keyword)
        markup = highlight_markup(index, color, self.match_class)
        coordinates = self.coordinates.scale_many(index.positions)

        self.keyword = keyword or None
        self.markers = [
            OccurrenceMarker(
                marker_id=self.marker_id(position),
                position=position,
                coordinate=float(coordinate),
                color=color,
            )
            for position, coordinate in zip(index.positions, coordinates, strict=True)
        ]
        self._markers_by_id = {marker.marker_id: marker for marker in self.markers}
        self.highlighted_markup = markup

        logger.info("Highlighted %d occurrences of %r", len(self.markers), keyword)
        return self.markers

    def hover(self, marker_id: str) -> str | None:
        """Snippet for a marker of the current overlay, or None if unknown."""
        marker = self._markers_by_id.get(marker_id)
        if marker is None or self.keyword is None:
            logger.debug("Hover on unknown marker %r", marker_id)
            return None
        return self.text_snippet(marker.position, self.keyword, marker.color)

    def text_snippet(self, position: int, keyword: str | None, color: str | None = None) -> str:
        """Excerpt around a position with the keyword re-highlighted.

        The window ``[position - W, position + W)`` is clamped to the text
        bounds, and matches are located again inside the window so their
        boundaries are relative to the snippet.
        """
        start = max(0, position - self.snippet_half_width)
        end = min(len(self.text), position + self.snippet_half_width)
        snippet = self.text[start:end] if start < end else ""
        return highlight_markup(indices(snippet, keyword), color or self.default_color, self.match_class)
