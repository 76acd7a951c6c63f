"""Shared pytest fixtures for textmark tests."""

from pathlib import Path
from typing import Any

import pytest

from textmark.annotate import Annotator, Channel, Unit

FIXTURES_DIR = Path(__file__).parent / "fixtures"
TEXTS_DIR = FIXTURES_DIR / "texts"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def texts_dir() -> Path:
    """Return path to sample text fixtures."""
    return TEXTS_DIR


@pytest.fixture
def load_text() -> callable:
    """Factory fixture to load sample text files.

    Usage:
        def test_something(load_text):
            content = load_text("manifesto.txt")
    """

    def _load(name: str) -> str:
        path = TEXTS_DIR / name
        return path.read_text(encoding="utf-8")

    return _load


@pytest.fixture
def fox_text(load_text: callable) -> str:
    """The pangram, without its trailing newline."""
    return load_text("fox.txt").rstrip("\n")


@pytest.fixture
def manifesto_text(load_text: callable) -> str:
    """Multi-paragraph text with repeated, mixed-case keywords."""
    return load_text("manifesto.txt")


# =============================================================================
# ANNOTATOR FIXTURES
# =============================================================================


class RecordingObserver:
    """Collects channel callbacks as (event, unit) pairs."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Unit]] = []

    def on_add(self, unit: Unit) -> None:
        self.events.append(("add", unit))

    def on_remove(self, unit: Unit) -> None:
        self.events.append(("remove", unit))

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


@pytest.fixture
def observer() -> RecordingObserver:
    """Fresh callback recorder."""
    return RecordingObserver()


@pytest.fixture
def make_annotator(observer: RecordingObserver) -> callable:
    """Factory fixture building an annotator with 'left' and 'right' channels.

    The 'left' channel reports to the shared observer fixture; 'right' has
    no observers.
    """

    def _make(text: str, **kwargs: Any) -> Annotator:
        channels = [
            Channel("left", "mark", on_add=observer.on_add, on_remove=observer.on_remove),
            Channel("right", "mark-secondary"),
        ]
        return Annotator(text, channels, **kwargs)

    return _make
