"""Core data models for the annotator.

This module contains the dataclasses used throughout term tagging:
- Term: One whitespace-delimited segment of the source text
- Unit: An addressable rendered term that can carry channel markers
- Channel: A tagging dimension with its marker class and observers
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from textmark.errors import InvalidChannelError

InteractionKind = Literal["primary-click", "secondary-click", "range-selection"]
"""Logical interaction kinds an annotator can bind to a channel."""

INTERACTION_KINDS: tuple[str, ...] = ("primary-click", "secondary-click", "range-selection")

# A marker class must be usable as a single CSS class token
_CLASS_TOKEN_PATTERN = re.compile(r"^-?[_a-zA-Z][_a-zA-Z0-9-]*$")


@dataclass(frozen=True)
class Term:
    """Single segment of the source text.

    Attributes:
        raw: Original substring, punctuation and case preserved
        canonical: Punctuation-stripped, lowercased form used as tag identity
        is_stopword: True if canonical is in the stopword set
        is_whitespace: True for the whitespace runs kept between words
    """

    raw: str
    canonical: str
    is_stopword: bool = False
    is_whitespace: bool = False

    @property
    def is_taggable(self) -> bool:
        """True if the term is rendered as an addressable unit."""
        return not self.is_whitespace and not self.is_stopword and bool(self.canonical)


@dataclass(frozen=True)
class Unit:
    """Addressable rendered term.

    Attributes:
        unit_id: Ordinal of the unit among all addressable units (0-indexed)
        raw: Original text rendered inside the unit
        canonical: Secondary selector shared by every instance of the term
    """

    unit_id: int
    raw: str
    canonical: str


UnitHandler = Callable[[Unit], object]


@dataclass(frozen=True)
class Channel:
    """Tagging dimension with its own marker class and observers.

    Attributes:
        name: Channel identifier used by toggle/add/remove/clear
        marker_class: CSS class applied to units tagged on this channel
        on_add: Called with the first matching unit when a term becomes tagged
        on_remove: Called with the first matching unit when a term is untagged
    """

    name: str
    marker_class: str
    on_add: UnitHandler | None = None
    on_remove: UnitHandler | None = None

    def validate(self) -> None:
        """Check the channel definition, raising InvalidChannelError if unusable."""
        if not self.name:
            raise InvalidChannelError("Channel name must be non-empty")
        if not _CLASS_TOKEN_PATTERN.match(self.marker_class):
            raise InvalidChannelError(
                f"Channel {self.name!r}: marker class {self.marker_class!r} "
                "is not a single CSS class token"
            )
        for slot in ("on_add", "on_remove"):
            handler = getattr(self, slot)
            if handler is not None and not callable(handler):
                raise InvalidChannelError(
                    f"Channel {self.name!r}: {slot} must be callable, "
                    f"got {type(handler).__name__}"
                )

    def notify(self, added: bool, unit: Unit) -> None:
        """Invoke the observer for the given transition, if present."""
        handler = self.on_add if added else self.on_remove
        if handler is not None:
            handler(unit)
