# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for the command-line entry point.
"""

from unittest.mock import patch

import yaml


class TestParseOverrides:
    """Test KEY=VALUE parsing."""

    def test_pairs(self):
        from clock_analogue.main import parse_overrides

        assert parse_overrides(["size=200", "hourMarkers=I,II,III"]) == {
            "size": "200",
            "hourMarkers": "I,II,III",
        }

    def test_malformed_pairs_skipped(self):
        from clock_analogue.main import parse_overrides

        assert parse_overrides(["size", "=5"]) == {}
        assert parse_overrides(None) == {}


class TestMain:
    """Test host selection."""

    def test_runs_window_by_default(self, temp_dir):
        from clock_analogue.main import main

        with patch("clock_analogue.hosts.pygame_host.run_window") as run_window:
            assert main(["--config", str(temp_dir / "missing.yaml"), "--set", "size=240"]) == 0

        run_window.assert_called_once()
        attributes = run_window.call_args[0][0]
        assert attributes == {"size": "240"}
        assert run_window.call_args[1]["windowed"] is True

    def test_fullscreen_flag(self, temp_dir):
        from clock_analogue.main import main

        with patch("clock_analogue.hosts.pygame_host.run_window") as run_window:
            main(["--config", str(temp_dir / "missing.yaml"), "--fullscreen"])

        assert run_window.call_args[1]["windowed"] is False

    def test_web_flag(self, sample_config_yaml):
        from clock_analogue.main import main

        with patch("clock_analogue.web.app.run_web_server") as run_web_server:
            main(["--config", str(sample_config_yaml), "--web"])

        config = run_web_server.call_args[0][0]
        assert config.clock["hourMarkers"] == "numeralMinimal"

    def test_web_enabled_in_config(self, temp_dir, sample_config_dict):
        from clock_analogue.main import main

        sample_config_dict["web"]["enabled"] = True
        config_path = temp_dir / "config.yaml"
        with open(config_path, 'w') as f:
            yaml.dump(sample_config_dict, f)

        with patch("clock_analogue.web.app.run_web_server") as run_web_server:
            main(["--config", str(config_path)])

        run_web_server.assert_called_once()

    def test_save_config_writes_and_exits(self, sample_config_yaml, temp_dir):
        from clock_analogue.config import load_config
        from clock_analogue.main import main

        out_path = temp_dir / "saved" / "config.yaml"
        with patch("clock_analogue.hosts.pygame_host.run_window") as run_window:
            assert main([
                "--config", str(sample_config_yaml),
                "--set", "time=07:30",
                "--fullscreen",
                "--save-config", str(out_path),
            ]) == 0

        run_window.assert_not_called()
        saved = load_config(str(out_path))
        assert saved.clock["time"] == "07:30"
        assert saved.clock["hourMarkers"] == "numeralMinimal"
        assert saved.display.windowed is False
