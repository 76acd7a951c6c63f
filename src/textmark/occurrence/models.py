"""Data models for keyword occurrence maps.

- OccurrenceIndex: Match end offsets of a keyword, with the text split around them
- OccurrenceMarker: One occurrence placed on the coordinate axis
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class OccurrenceIndex:
    """Every non-overlapping match of a keyword within a text.

    Attributes:
        split_text: Text segments between matches; always one more segment
            than there are matches
        positions: Character offset immediately after each match
        matches: Substring each match actually covered
    """

    split_text: list[str]
    positions: list[int] = field(default_factory=list)
    matches: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.positions)

    def rejoin(self) -> str:
        """Reconstruct the original text from segments and matched substrings."""
        parts = [self.split_text[0]]
        for matched, segment in zip(self.matches, self.split_text[1:], strict=True):
            parts.append(matched)
            parts.append(segment)
        return "".join(parts)


@dataclass(frozen=True)
class OccurrenceMarker:
    """Visual marker for one occurrence on the position map.

    Attributes:
        marker_id: Addressable id of the form ``<selector>-<position>``
        position: End offset of the occurrence in the full text
        coordinate: Position on the map axis
        color: Highlight color used for the marker and its snippet
    """

    marker_id: str
    position: int
    coordinate: float
    color: str
