"""Unit tests for the HTML marker surface."""

import pytest

from textmark.annotate import HtmlMarkerSurface, split_terms


@pytest.fixture
def surface() -> HtmlMarkerSurface:
    """Surface over a text with a repeated term and a stopword."""
    return HtmlMarkerSurface(split_terms("Bread and bread!", frozenset({"and"})))


class TestHtmlMarkerSurface:
    """Tests for marker bookkeeping and rendering."""

    @pytest.mark.unit
    def test_units_indexed_by_secondary_selector(self, surface: HtmlMarkerSurface) -> None:
        """All instances of a canonical form are found, in order."""
        assert surface.units_with_secondary_selector("bread") == [0, 1]
        assert surface.units_with_secondary_selector("and") == []
        assert surface.units_with_secondary_selector("missing") == []

    @pytest.mark.unit
    def test_toggle_marker_reports_new_state(self, surface: HtmlMarkerSurface) -> None:
        """toggle_marker returns True when added and False when removed."""
        assert surface.toggle_marker(0, "mark") is True
        assert surface.has_marker(0, "mark")
        assert not surface.has_marker(1, "mark")
        assert surface.toggle_marker(0, "mark") is False
        assert not surface.has_marker(0, "mark")

    @pytest.mark.unit
    def test_remove_missing_marker_is_harmless(self, surface: HtmlMarkerSurface) -> None:
        """Removing a marker that is not present leaves the unit unchanged."""
        surface.remove_marker(1, "mark")
        assert surface.markers(1) == []

    @pytest.mark.unit
    def test_markers_render_in_insertion_order(self, surface: HtmlMarkerSurface) -> None:
        """Marker classes follow the base selector in insertion order."""
        surface.add_marker(1, "b")
        surface.add_marker(1, "a")
        assert '<span class="text b a" data-canonical="bread">bread!</span> ' in surface.render()

    @pytest.mark.unit
    def test_reset_restores_pristine(self, surface: HtmlMarkerSurface) -> None:
        """reset() drops every marker."""
        surface.add_marker(0, "mark")
        surface.add_marker(1, "other")
        assert surface.render() != surface.pristine
        surface.reset()
        assert surface.render() == surface.pristine
