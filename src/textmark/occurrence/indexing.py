"""Keyword indexing over long text.

Keywords are case-insensitive regular expressions searched globally and
without overlap: after each match, searching resumes at the match's end.
Callers passing literal text must escape it themselves (``re.escape``).
"""

from __future__ import annotations

import html
import logging
import re

from textmark.config import COLOR_PATTERN
from textmark.errors import InvalidColorError, InvalidKeywordError
from textmark.occurrence.models import OccurrenceIndex

logger = logging.getLogger(__name__)


def compile_keyword(keyword: str | None) -> re.Pattern[str] | None:
    """Compile a keyword pattern, or return None for an empty keyword.

    Raises:
        InvalidKeywordError: If the keyword is not a valid regular expression
    """
    if not keyword:
        return None
    try:
        return re.compile(keyword, re.IGNORECASE)
    except re.error as e:
        raise InvalidKeywordError(f"Invalid keyword pattern {keyword!r}: {e}") from e


def indices(text: str, keyword: str | None) -> OccurrenceIndex:
    """Locate every occurrence of a keyword in text.

    Zero-width matches are skipped, so every recorded occurrence covers at
    least one character.

    Args:
        text: Text to search
        keyword: Case-insensitive regular expression

    Returns:
        OccurrenceIndex; for an empty or non-matching keyword, no positions
        and ``split_text == [text]``

    Example:
        >>> indices("The cat saw the dog", "the").positions
        [3, 15]
    """
    pattern = compile_keyword(keyword)
    if pattern is None:
        return OccurrenceIndex(split_text=[text])

    split_text: list[str] = []
    positions: list[int] = []
    matches: list[str] = []
    last_end = 0

    for match in pattern.finditer(text):
        if match.end() == match.start():
            continue
        split_text.append(text[last_end : match.start()])
        positions.append(match.end())
        matches.append(match.group(0))
        last_end = match.end()

    split_text.append(text[last_end:])
    logger.debug("Indexed %d occurrences of %r in %d chars", len(positions), keyword, len(text))
    return OccurrenceIndex(split_text=split_text, positions=positions, matches=matches)


def highlight_markup(index: OccurrenceIndex, color: str, css_class: str) -> str:
    """Rejoin an index with each match wrapped in a colored span.

    Text outside the spans is HTML escaped.

    Raises:
        InvalidColorError: If the color is not a CSS color name, hex value
            or rgb()/hsl() function
    """
    if not COLOR_PATTERN.fullmatch(color):
        raise InvalidColorError(f"Invalid highlight color {color!r}")
    style = html.escape(f"background-color: {color}", quote=True)
    parts = [html.escape(index.split_text[0], quote=False)]
    for matched, segment in zip(index.matches, index.split_text[1:], strict=True):
        parts.append(
            f'<span class="{css_class}" style="{style}">'
            f"{html.escape(matched, quote=False)}</span>"
        )
        parts.append(html.escape(segment, quote=False))
    return "".join(parts)
