# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for clock option resolution.
"""

import pytest

from clock_analogue.options import (
    ClockConfiguration,
    coerce_boolean,
    coerce_number,
    observed_attributes,
    resolve_options,
)


class TestDefaults:
    """Test that defaults are applied when no overrides are given."""

    def test_no_overrides(self):
        """Empty overrides should yield every documented default."""
        config = resolve_options({})

        assert config.size == 100
        assert config.background == "#9dadbd"
        assert config.show_seconds is True
        assert config.snap is True
        assert config.hour_markers == "none"
        assert config.font_family == '"Open Sans", Ubuntu, sans-serif'

    def test_none_overrides(self):
        """None and missing values should both use the default."""
        assert resolve_options(None) == ClockConfiguration()
        assert resolve_options({"size": None}).size == 100

    def test_configuration_is_frozen(self):
        """Snapshots should be immutable."""
        config = resolve_options({})
        with pytest.raises(Exception):
            config.size = 50


class TestBooleanCoercion:
    """Test boolean option coercion."""

    @pytest.mark.parametrize("value", ["false", "0", 0, 0.0, False])
    def test_falsy_tokens(self, value):
        assert coerce_boolean(value) is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "False", "off", 1, True])
    def test_other_present_values_are_true(self, value):
        """Only the exact falsy tokens turn an option off."""
        assert coerce_boolean(value) is True

    def test_empty_string_is_false(self):
        """An empty attribute value follows truthiness."""
        assert coerce_boolean("") is False

    def test_resolve_show_seconds(self):
        config = resolve_options({"showSeconds": "false", "snap": "0"})
        assert config.show_seconds is False
        assert config.snap is False


class TestNumberCoercion:
    """Test size coercion."""

    def test_numeric_string(self):
        assert coerce_number("200", 100) == 200
        assert coerce_number("150.5", 100) == 150.5

    def test_native_number_passes_through(self):
        assert coerce_number(250, 100) == 250

    @pytest.mark.parametrize("value", ["big", "-5", "0", "nan", True])
    def test_malformed_falls_back(self, value):
        assert coerce_number(value, 100) == 100

    def test_resolve_size(self):
        assert resolve_options({"size": "300"}).size == 300
        assert resolve_options({"size": "huge"}).size == 100


class TestOverrideLookup:
    """Test attribute name matching."""

    def test_lowercase_attribute_names(self):
        """Host attributes arrive lower-cased."""
        config = resolve_options({"showseconds": "false", "hourmarkers": "roman"})
        assert config.show_seconds is False
        assert config.hour_markers == "roman"

    def test_strings_pass_through(self):
        config = resolve_options({"background": "#123456", "fontFamily": "Serif"})
        assert config.background == "#123456"
        assert config.font_family == "Serif"

    def test_unknown_keys_ignored(self):
        assert resolve_options({"colour": "red"}) == ClockConfiguration()

    def test_to_attributes(self):
        attrs = resolve_options({"size": 50}).to_attributes()
        assert attrs["size"] == 50
        assert attrs["showSeconds"] is True
        assert set(attrs) == {"size", "background", "showSeconds", "snap", "hourMarkers", "fontFamily"}

    def test_observed_attributes(self):
        observed = observed_attributes()
        assert "showseconds" in observed
        assert "hourmarkers" in observed
        assert "time" in observed
