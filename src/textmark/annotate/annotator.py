"""Term tagging state machine with per-channel observers.

An Annotator segments a text into terms, renders them as addressable units
and keeps one marker class per channel on those units. Every instance of a
term shares its canonical form, so tagging one instance tags all of them:
the first unit decides the new state and the state is applied uniformly.
Each operation notifies the channel's observer at most once, with the first
matching unit, no matter how many units it touched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from textmark.annotate.models import INTERACTION_KINDS, Channel, InteractionKind, Term, Unit
from textmark.annotate.segmentation import (
    build_stopwords,
    canonicalize,
    selection_canonicals,
    split_terms,
)
from textmark.annotate.surface import HtmlMarkerSurface
from textmark.config import config
from textmark.errors import InvalidChannelError, UnknownChannelError, UnknownInteractionError

logger = logging.getLogger(__name__)


# =============================================================================
# EVENT RESOLUTION
# =============================================================================


class TextResolver(Protocol):
    """Resolves a raw interaction event to the plain text it targets."""

    def resolve(self, event: object) -> str: ...


class PlainTextResolver:
    """Default resolver: accepts strings or objects with a ``text`` attribute."""

    def resolve(self, event: object) -> str:
        if isinstance(event, str):
            return event
        text = getattr(event, "text", None)
        if isinstance(text, str):
            return text
        raise TypeError(f"Cannot resolve text from event of type {type(event).__name__}")


# =============================================================================
# ANNOTATOR
# =============================================================================


class Annotator:
    """Dynamically tag the terms of a text on independent channels.

    Args:
        text: Text to segment and render
        channels: Channels to register up front
        stopwords: Canonical forms that are never taggable (default: the
            fixed stopword set plus ``extra_stopwords`` from config)
        base_selector: Class shared by every addressable unit
        resolver: Turns interaction events into plain text

    Example:
        >>> seen = []
        >>> annotator = Annotator("Cat and cat.", [Channel("left", "mark", on_add=seen.append)])
        >>> annotator.toggle("left", "cat")
        True
        >>> [unit.raw for unit in seen]
        ['Cat']
    """

    def __init__(
        self,
        text: str,
        channels: Iterable[Channel] = (),
        *,
        stopwords: Iterable[str] | None = None,
        base_selector: str | None = None,
        resolver: TextResolver | None = None,
    ) -> None:
        self.text = text
        if stopwords is None:
            self.stopwords = build_stopwords(config.extra_stopwords)
        else:
            self.stopwords = frozenset(canonicalize(word) for word in stopwords)
        self.resolver: TextResolver = resolver or PlainTextResolver()

        self.terms: list[Term] = split_terms(text, self.stopwords)
        self.surface = HtmlMarkerSurface(self.terms, base_selector or config.base_selector)

        self._channels: dict[str, Channel] = {}
        self._bindings: dict[str, str] = {}
        for channel in channels:
            self.add_channel(channel)

        logger.debug(
            "Annotator ready: %d terms, %d addressable units",
            len(self.terms),
            len(self.surface.units),
        )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    @property
    def units(self) -> Sequence[Unit]:
        """Addressable units in document order."""
        return self.surface.units

    @property
    def markup(self) -> str:
        """Current markup, including every channel's markers."""
        return self.surface.render()

    @property
    def pristine_markup(self) -> str:
        """Markup as rendered at construction, before any tagging."""
        return self.surface.pristine

    # -------------------------------------------------------------------------
    # Channels
    # -------------------------------------------------------------------------

    def add_channel(self, channel: Channel) -> None:
        """Register a channel after validating it."""
        channel.validate()
        if channel.name in self._channels:
            raise InvalidChannelError(f"Channel {channel.name!r} is already registered")
        self._channels[channel.name] = channel
        logger.debug("Registered channel %r (marker %r)", channel.name, channel.marker_class)

    def channel(self, channel_id: str) -> Channel:
        """Look up a registered channel, raising UnknownChannelError if absent."""
        try:
            return self._channels[channel_id]
        except KeyError:
            raise UnknownChannelError(channel_id) from None

    # -------------------------------------------------------------------------
    # Tagging
    # -------------------------------------------------------------------------

    def toggle(self, channel_id: str, term: str) -> bool | None:
        """Flip a term's membership in a channel.

        Args:
            channel_id: Registered channel name
            term: Canonical form (raw forms are canonicalized first)

        Returns:
            True if the term is now tagged, False if untagged, None if no
            unit matched (unknown term, stopword or empty canonical form)
        """
        return self._set(channel_id, term, None)

    def add(self, channel_id: str, term: str) -> bool | None:
        """Tag every instance of a term on a channel."""
        return self._set(channel_id, term, True)

    def remove(self, channel_id: str, term: str) -> bool | None:
        """Untag every instance of a term on a channel."""
        return self._set(channel_id, term, False)

    def _set(self, channel_id: str, term: str, state: bool | None) -> bool | None:
        channel = self.channel(channel_id)
        canonical = canonicalize(term)
        unit_ids = self.surface.units_with_secondary_selector(canonical) if canonical else []
        if not unit_ids:
            logger.debug("No units for %r on channel %r; nothing to do", canonical, channel_id)
            return None

        first = unit_ids[0]
        if state is None:
            state = not self.surface.has_marker(first, channel.marker_class)

        for unit_id in unit_ids:
            if state:
                self.surface.add_marker(unit_id, channel.marker_class)
            else:
                self.surface.remove_marker(unit_id, channel.marker_class)

        logger.debug(
            "%s %r on channel %r (%d units)",
            "Tagged" if state else "Untagged",
            canonical,
            channel_id,
            len(unit_ids),
        )
        channel.notify(state, self.surface.units[first])
        return state

    def is_tagged(self, channel_id: str, term: str) -> bool:
        """Whether a term (raw or canonical) is tagged on a channel."""
        channel = self.channel(channel_id)
        unit_ids = self.surface.units_with_secondary_selector(canonicalize(term))
        return bool(unit_ids) and self.surface.has_marker(unit_ids[0], channel.marker_class)

    def tagged(self, channel_id: str) -> list[str]:
        """Canonical forms currently tagged on a channel, in document order."""
        channel = self.channel(channel_id)
        found: dict[str, None] = {}
        for unit in self.surface.units:
            if self.surface.has_marker(unit.unit_id, channel.marker_class):
                found[unit.canonical] = None
        return list(found)

    def clear(self, channel_id: str | None = None) -> None:
        """Remove one channel's markers, or reset the markup entirely.

        No observers are notified.
        """
        if channel_id is None:
            self.surface.reset()
            logger.debug("Reset markup to pristine state")
            return

        channel = self.channel(channel_id)
        for unit in self.surface.units:
            self.surface.remove_marker(unit.unit_id, channel.marker_class)
        logger.debug("Cleared channel %r", channel_id)

    # -------------------------------------------------------------------------
    # Interactions
    # -------------------------------------------------------------------------

    def register_interaction(self, kind: InteractionKind, channel_id: str) -> None:
        """Bind an interaction kind to a channel, replacing any previous binding."""
        if kind not in INTERACTION_KINDS:
            raise UnknownInteractionError(
                f"Unknown interaction kind {kind!r}; expected one of {INTERACTION_KINDS}"
            )
        self.channel(channel_id)
        self._bindings[kind] = channel_id
        logger.debug("Bound %s to channel %r", kind, channel_id)

    def handle(self, kind: InteractionKind, event: object) -> list[bool | None]:
        """Deliver an interaction event.

        Clicks toggle the canonical form of the target text. A range
        selection toggles every taggable term of the selected text, in the
        order the terms occur.

        Returns:
            The result of each toggle performed (empty if the event was a no-op)
        """
        if kind not in INTERACTION_KINDS:
            raise UnknownInteractionError(f"Unknown interaction kind {kind!r}")

        text = self.resolver.resolve(event)
        if kind == "range-selection":
            canonicals = selection_canonicals(text, self.stopwords)
        else:
            canonical = canonicalize(text.strip())
            canonicals = [canonical] if canonical else []
        if not canonicals:
            return []

        channel_id = self._bindings.get(kind)
        if channel_id is None:
            logger.debug("No channel bound to %s; ignoring event", kind)
            return []

        return [self.toggle(channel_id, canonical) for canonical in canonicals]

    def primary_click(self, event: object) -> list[bool | None]:
        return self.handle("primary-click", event)

    def secondary_click(self, event: object) -> list[bool | None]:
        return self.handle("secondary-click", event)

    def select(self, event: object) -> list[bool | None]:
        return self.handle("range-selection", event)
