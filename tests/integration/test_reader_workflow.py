"""Integration tests: tagging and occurrence mapping over one document."""

import re

import pytest

from textmark import Annotator, Channel, OccurrenceMap


@pytest.mark.integration
def test_tagging_drives_occurrence_lookup(manifesto_text: str) -> None:
    """Words tagged by a reader can be mapped across the whole document."""
    tagged: list[str] = []
    annotator = Annotator(
        manifesto_text,
        [Channel("study", "mark", on_add=lambda unit: tagged.append(unit.canonical))],
    )
    annotator.register_interaction("range-selection", "study")
    annotator.select("the spectre of communism")

    assert tagged == ["spectre", "communism"]

    occurrence_map = OccurrenceMap(manifesto_text, map_extent=400.0, map_margin=8.0)
    for word in annotator.tagged("study"):
        markers = occurrence_map.highlight(re.escape(word))
        snippets = [occurrence_map.hover(marker.marker_id) for marker in markers]

        assert len(markers) == 4
        assert all(f">{word}<" in snippet.lower() for snippet in snippets)

    annotator.clear()
    assert annotator.markup == annotator.pristine_markup
