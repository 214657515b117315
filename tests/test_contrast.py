# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for the contrast color algorithm.
"""

import pytest

from clock_analogue.contrast import DARK_COLOR, LIGHT_COLOR, contrast_color, luma, parse_hex_color


class TestContrastColor:
    """Test marker color selection."""

    def test_black_gets_light(self):
        assert contrast_color("#000000") == LIGHT_COLOR == "#eee"

    def test_white_gets_dark(self):
        assert contrast_color("#ffffff") == DARK_COLOR == "#333"

    def test_default_background(self):
        """The default face is light enough for dark markers."""
        assert contrast_color("#9dadbd") == DARK_COLOR

    def test_threshold(self):
        assert luma((128, 128, 128)) == 128
        assert contrast_color("#808080") == DARK_COLOR
        assert contrast_color("#7f7f7f") == LIGHT_COLOR

    def test_shorthand(self):
        assert parse_hex_color("#fff") == (255, 255, 255)
        assert contrast_color("#000") == LIGHT_COLOR

    @pytest.mark.parametrize("value", ["red", "#12345", "#gggggg", ""])
    def test_malformed_gets_light(self, value):
        assert parse_hex_color(value) is None
        assert contrast_color(value) == LIGHT_COLOR
