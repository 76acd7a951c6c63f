"""Term segmentation and canonicalization.

Text is split on whitespace runs while the runs themselves are kept as
separate terms, so joining every term's raw text reproduces the input.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from textmark.annotate.models import Term

# Characters removed when building a term's canonical form
PUNCTUATION_PATTERN = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")

# Capturing group keeps the whitespace runs in the split result
WHITESPACE_SPLIT_PATTERN = re.compile(r"(\s+)")

STOPWORDS: frozenset[str] = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "but",
        "by",
        "for",
        "from",
        "has",
        "have",
        "he",
        "her",
        "his",
        "i",
        "if",
        "in",
        "into",
        "is",
        "it",
        "its",
        "me",
        "my",
        "no",
        "not",
        "of",
        "on",
        "or",
        "our",
        "she",
        "so",
        "such",
        "that",
        "the",
        "their",
        "them",
        "then",
        "there",
        "these",
        "they",
        "this",
        "to",
        "was",
        "we",
        "were",
        "will",
        "with",
        "you",
        "your",
    }
)


def canonicalize(term: str) -> str:
    """Strip punctuation and lowercase a term.

    Examples:
        >>> canonicalize("Cat,")
        'cat'
        >>> canonicalize("(well-known)")
        'wellknown'
        >>> canonicalize("...")
        ''
    """
    return PUNCTUATION_PATTERN.sub("", term).lower()


def build_stopwords(extra: Iterable[str] = ()) -> frozenset[str]:
    """Return the fixed stopword set extended with canonicalized extras."""
    extras = {canonicalize(word) for word in extra}
    extras.discard("")
    return STOPWORDS | extras


def split_terms(text: str, stopwords: frozenset[str] = STOPWORDS) -> list[Term]:
    """Split text into terms, keeping whitespace runs as their own terms.

    Args:
        text: Text to segment
        stopwords: Canonical forms that are never taggable

    Returns:
        Terms in document order; empty boundary segments are dropped
    """
    terms: list[Term] = []
    # Odd indices of a capturing split are the separators
    for index, piece in enumerate(WHITESPACE_SPLIT_PATTERN.split(text)):
        if not piece:
            continue
        if index % 2:
            terms.append(Term(raw=piece, canonical="", is_whitespace=True))
            continue
        canonical = canonicalize(piece)
        terms.append(
            Term(raw=piece, canonical=canonical, is_stopword=canonical in stopwords)
        )
    return terms


def selection_canonicals(selection: str, stopwords: frozenset[str] = STOPWORDS) -> list[str]:
    """Canonical forms of the taggable terms in a selection, in order.

    Repeated terms are kept; each occurrence counts as its own toggle.
    """
    return [term.canonical for term in split_terms(selection, stopwords) if term.is_taggable]
