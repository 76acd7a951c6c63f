"""Marker surface: the side-effect boundary of the annotator.

The annotator never touches markup directly. It reads and writes marker
classes on addressable units through the MarkerSurface protocol, so any
rendering technology can sit behind it. HtmlMarkerSurface is the in-memory
implementation that renders an HTML string.
"""

from __future__ import annotations

import html
from collections.abc import Sequence
from typing import Protocol

from textmark.annotate.models import Term, Unit

# Separator appended after every rendered unit so adjacent units stay
# independently clickable even when the source has no trailing space.
SYNTHETIC_SEPARATOR = " "


class MarkerSurface(Protocol):
    """Abstract surface holding marker classes for addressable units."""

    def add_marker(self, unit_id: int, marker: str) -> None: ...

    def remove_marker(self, unit_id: int, marker: str) -> None: ...

    def has_marker(self, unit_id: int, marker: str) -> bool: ...

    def toggle_marker(self, unit_id: int, marker: str) -> bool: ...

    def units_with_secondary_selector(self, canonical: str) -> Sequence[int]: ...

    def reset(self) -> None: ...


class HtmlMarkerSurface:
    """In-memory marker surface that renders terms as HTML spans.

    Taggable terms become ``<span class="{base}" data-canonical="{canonical}">``
    units whose class list gains one marker class per tagging channel,
    stopwords and punctuation-only terms become plain ``<span>`` elements,
    and whitespace runs are emitted verbatim. The canonical form has its own
    attribute so a word such as "mark" never reads as a marker class.
    """

    def __init__(self, terms: Sequence[Term], base_selector: str = "text") -> None:
        self.base_selector = base_selector
        self.units: list[Unit] = []
        # Each slot is either pre-rendered text or the id of a unit
        self._layout: list[str | int] = []
        self._markers: dict[int, dict[str, None]] = {}
        self._by_canonical: dict[str, list[int]] = {}

        for term in terms:
            if term.is_whitespace:
                self._layout.append(term.raw)
            elif term.is_taggable:
                unit = Unit(unit_id=len(self.units), raw=term.raw, canonical=term.canonical)
                self.units.append(unit)
                self._markers[unit.unit_id] = {}
                self._by_canonical.setdefault(unit.canonical, []).append(unit.unit_id)
                self._layout.append(unit.unit_id)
            else:
                self._layout.append(f"<span>{html.escape(term.raw, quote=False)}</span>{SYNTHETIC_SEPARATOR}")

        self.pristine = self.render()

    def add_marker(self, unit_id: int, marker: str) -> None:
        self._markers[unit_id][marker] = None

    def remove_marker(self, unit_id: int, marker: str) -> None:
        self._markers[unit_id].pop(marker, None)

    def has_marker(self, unit_id: int, marker: str) -> bool:
        return marker in self._markers[unit_id]

    def toggle_marker(self, unit_id: int, marker: str) -> bool:
        if self.has_marker(unit_id, marker):
            self.remove_marker(unit_id, marker)
            return False
        self.add_marker(unit_id, marker)
        return True

    def units_with_secondary_selector(self, canonical: str) -> list[int]:
        return list(self._by_canonical.get(canonical, ()))

    def markers(self, unit_id: int) -> list[str]:
        """Marker classes currently on a unit, in the order they were added."""
        return list(self._markers[unit_id])

    def reset(self) -> None:
        """Drop every marker, returning the surface to its pristine state."""
        for markers in self._markers.values():
            markers.clear()

    def render(self) -> str:
        """Render the current markup string."""
        parts: list[str] = []
        for slot in self._layout:
            if isinstance(slot, str):
                parts.append(slot)
            else:
                parts.append(self._render_unit(self.units[slot]))
        return "".join(parts)

    def _render_unit(self, unit: Unit) -> str:
        classes = [self.base_selector, *self._markers[unit.unit_id]]
        class_attr = html.escape(" ".join(classes), quote=True)
        canonical_attr = html.escape(unit.canonical, quote=True)
        return (
            f'<span class="{class_attr}" data-canonical="{canonical_attr}">'
            f"{html.escape(unit.raw, quote=False)}</span>{SYNTHETIC_SEPARATOR}"
        )
