# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Pytest configuration and shared fixtures for clock-analogue tests.
"""

import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from clock_analogue.animation import Scheduler

# pygame must not open a real window in tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class ManualScheduler(Scheduler):
    """Scheduler driven by explicit advance() calls."""

    def __init__(self):
        self.now_ms = 0.0
        self.timers = []  # [handle, due, callback]
        self.cancelled = []
        self._next_handle = 0

    def call_later(self, delay_ms, callback):
        self._next_handle += 1
        self.timers.append([self._next_handle, self.now_ms + delay_ms, callback])
        return self._next_handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.timers = [t for t in self.timers if t[0] != handle]

    def advance(self, ms):
        """Move time forward, firing due timers in order."""
        self.now_ms += ms
        fired = 0
        while True:
            due = [t for t in self.timers if t[1] <= self.now_ms]
            if not due:
                return fired
            timer = min(due, key=lambda t: t[1])
            self.timers.remove(timer)
            timer[2]()
            fired += 1


class SteppingClock:
    """Callable clock returning a settable datetime."""

    def __init__(self, value):
        self.value = value

    def __call__(self):
        return self.value


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def scheduler():
    """Manual scheduler for animation tests."""
    return ManualScheduler()


@pytest.fixture
def clock():
    """Live clock fixed at 10:08:30.250 until changed."""
    return SteppingClock(datetime(2025, 1, 6, 10, 8, 30, 250000))


@pytest.fixture
def sample_config_dict():
    """Return a minimal valid config dictionary."""
    return {
        "clock": {
            "size": 200,
            "background": "#000000",
            "showSeconds": False,
            "snap": True,
            "hourMarkers": "numeralMinimal",
        },
        "display": {
            "width": 320,
            "height": 240,
            "windowed": True,
            "background_color": [0, 0, 0],
        },
        "web": {
            "enabled": False,
            "port": 8080,
            "host": "127.0.0.1",
        },
    }


@pytest.fixture
def sample_config_yaml(temp_dir, sample_config_dict):
    """Create a temporary config.yaml file."""
    import yaml
    config_path = temp_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config_dict, f)
    return config_path
