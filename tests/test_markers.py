# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for hour-marker resolution.
"""

import pytest

from clock_analogue.markers import HOUR_MARKER_TEMPLATES, marker_label, resolve_hour_markers


class TestTemplates:
    """Test the named templates."""

    @pytest.mark.parametrize("name", sorted(HOUR_MARKER_TEMPLATES))
    def test_templates_have_twelve_labels(self, name):
        assert len(resolve_hour_markers(name)) == 12

    def test_roman(self):
        markers = resolve_hour_markers("roman")
        assert markers[0] == "I"
        assert markers[11] == "XII"

    def test_roman_minimal_positions(self):
        markers = resolve_hour_markers("romanMinimal")
        filled = {i: label for i, label in enumerate(markers) if label}
        assert filled == {2: "III", 5: "VI", 8: "IX", 11: "XII"}

    def test_numeral_minimal_positions(self):
        markers = resolve_hour_markers("numeralMinimal")
        filled = {i: label for i, label in enumerate(markers) if label}
        assert filled == {2: "3", 5: "6", 8: "9", 11: "12"}


class TestLiteralLists:
    """Test literal comma-separated selectors."""

    def test_twelve_items_accepted(self):
        selector = "a,b,c,d,e,f,g,h,i,j,k,l"
        assert resolve_hour_markers(selector) == tuple(selector.split(","))

    @pytest.mark.parametrize("selector", ["none", "a,b,c", "1,2,3,4,5,6,7,8,9,10,11,12,13", ""])
    def test_wrong_count_means_no_markers(self, selector):
        assert resolve_hour_markers(selector) == ()


class TestSlotAssignment:
    """Test the label-to-slot offset."""

    def test_last_label_at_top(self):
        markers = tuple("a,b,c,d,e,f,g,h,i,j,k,l".split(","))
        assert marker_label(markers, 0) == "l"
        assert marker_label(markers, 1) == "a"
        assert marker_label(markers, 11) == "k"

    def test_numeral_slots_match_clock_positions(self):
        markers = resolve_hour_markers("numeral")
        assert [marker_label(markers, i) for i in range(12)] == [
            "12", "1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11"
        ]
