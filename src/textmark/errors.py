"""Exception hierarchy for textmark.

Silent no-ops (empty canonical forms, keywords without matches) never raise.
These exceptions are reserved for misconfiguration by the integrating caller.
"""

from __future__ import annotations


class TextMarkError(Exception):
    """Base exception for all textmark errors."""

    pass


class ChannelError(TextMarkError):
    """Base exception for tag channel misconfiguration."""

    pass


class UnknownChannelError(ChannelError, KeyError):
    """Raised when an operation names a channel that was never registered."""

    def __init__(self, channel_id: str) -> None:
        super().__init__(channel_id)
        self.channel_id = channel_id

    def __str__(self) -> str:
        return f"Unknown channel: {self.channel_id!r}"


class InvalidChannelError(ChannelError, ValueError):
    """Raised when a channel definition fails validation at registration."""

    pass


class UnknownInteractionError(TextMarkError, ValueError):
    """Raised when binding an interaction kind that does not exist."""

    pass


class InvalidKeywordError(TextMarkError, ValueError):
    """Raised when a keyword is not a valid regular expression."""

    pass


class InvalidColorError(TextMarkError, ValueError):
    """Raised when a highlight color is not a CSS color name, hex or function."""

    pass
