# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Configuration management for clock-analogue.
Handles loading, validation, and defaults for the application settings.
"""

import os
import yaml
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
import logging

from .contrast import parse_hex_color
from .markers import HOUR_MARKER_TEMPLATES, MARKER_COUNT
from .options import DECLARED_OPTIONS, TIME_ATTRIBUTE, lookup_override
from .time_sampler import parse_fixed_time

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_PATHS = [
    "/etc/clock-analogue/config.yaml",
    os.path.expanduser("~/.config/clock-analogue/config.yaml"),
    "./config.yaml",
]

MINUTES_PER_DAY = 24 * 60


@dataclass
class DisplayConfig:
    """pygame window settings."""
    width: int = 480
    height: int = 480
    windowed: bool = True
    background_color: List[int] = field(default_factory=lambda: [0, 0, 0])


@dataclass
class WebConfig:
    """Web interface settings."""
    enabled: bool = False
    port: int = 8080
    host: str = "127.0.0.1"


@dataclass
class ClockAppConfig:
    """Main configuration class."""
    # Attribute overrides for the clock (size, background, showSeconds, ...)
    clock: Dict[str, Any] = field(default_factory=dict)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    web: WebConfig = field(default_factory=WebConfig)

    # Runtime state (not persisted)
    config_path: Optional[str] = None


def _dict_to_dataclass(data: Dict[str, Any], cls: type) -> Any:
    """Convert a dictionary to a dataclass instance, ignoring unknown keys."""
    if data is None:
        return cls()

    field_names = set(cls.__dataclass_fields__)
    kwargs = {key: value for key, value in data.items() if key in field_names}
    return cls(**kwargs)


def _normalize_time(value: Any) -> Any:
    """
    Undo YAML 1.1 sexagesimal parsing of unquoted times.

    PyYAML reads 13:15 as 795 and 13:15:30 as 47730. Values below one day
    of minutes are taken as HH:MM, larger ones as HH:MM:SS.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return value
    if value < MINUTES_PER_DAY:
        return f"{value // 60:02d}:{value % 60:02d}"
    hours, rest = divmod(value, 3600)
    return f"{hours:02d}:{rest // 60:02d}:{rest % 60:02d}"


def _parse_clock_overrides(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("Ignoring 'clock' section: expected a mapping")
        return {}
    overrides = {str(k): v for k, v in data.items() if v is not None}
    for key in list(overrides):
        if key.lower() == TIME_ATTRIBUTE:
            overrides[key] = _normalize_time(overrides[key])
    return overrides


def load_config(config_path: Optional[str] = None) -> ClockAppConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, searches default locations.

    Returns:
        ClockAppConfig instance with loaded or default values.
    """
    # Find config file
    if config_path:
        paths_to_try = [config_path]
    else:
        paths_to_try = DEFAULT_CONFIG_PATHS

    config_data = {}
    found_path = None

    for path in paths_to_try:
        expanded_path = os.path.expanduser(path)
        if os.path.exists(expanded_path):
            try:
                with open(expanded_path, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
                found_path = expanded_path
                logger.info(f"Loaded config from {expanded_path}")
                break
            except Exception as e:
                logger.warning(f"Failed to load config from {expanded_path}: {e}")

    if not found_path:
        logger.info("No config file found, using defaults")

    if not isinstance(config_data, dict):
        logger.warning("Config file does not contain a mapping, using defaults")
        config_data = {}

    return ClockAppConfig(
        clock=_parse_clock_overrides(config_data.get('clock')),
        display=_dict_to_dataclass(config_data.get('display'), DisplayConfig),
        web=_dict_to_dataclass(config_data.get('web'), WebConfig),
        config_path=found_path,
    )


def save_config(config: ClockAppConfig, config_path: Optional[str] = None) -> str:
    """
    Save configuration to a YAML file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.

    Returns:
        Path where config was saved.
    """
    if config_path is None:
        config_path = config.config_path or DEFAULT_CONFIG_PATHS[0]

    config_path = os.path.expanduser(config_path)

    # Ensure directory exists
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = config_to_dict(config)

    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved config to {config_path}")
    return config_path


def config_to_dict(config: ClockAppConfig) -> Dict[str, Any]:
    """Convert config to dictionary for serialization."""
    def dataclass_to_dict(obj: Any) -> Any:
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                if field_name == 'config_path':
                    continue  # Skip runtime state
                value = getattr(obj, field_name)
                result[field_name] = dataclass_to_dict(value)
            return result
        elif isinstance(obj, list):
            return [dataclass_to_dict(item) for item in obj]
        elif isinstance(obj, dict):
            return {k: dataclass_to_dict(v) for k, v in obj.items()}
        else:
            return obj

    return dataclass_to_dict(config)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: ClockAppConfig) -> List[str]:
    """
    Validate configuration and return list of problems.

    The clock itself accepts any value; this reports values that would be
    silently defaulted or ignored so they can be logged.

    Returns:
        List of error messages. Empty if valid.
    """
    errors = []

    # Check clock overrides
    known = {option.attribute.lower() for option in DECLARED_OPTIONS} | {TIME_ATTRIBUTE}
    for key in config.clock:
        if str(key).lower() not in known:
            errors.append(f"Unknown clock option '{key}'")

    size = lookup_override(config.clock, 'size')
    if size is not None:
        try:
            if isinstance(size, bool) or float(size) <= 0:
                raise ValueError(size)
        except (TypeError, ValueError):
            errors.append("Clock size must be a positive number")

    background = lookup_override(config.clock, 'background')
    if background is not None and parse_hex_color(background) is None:
        errors.append("Clock background must be a hex color like '#9dadbd'")

    markers = lookup_override(config.clock, 'hourMarkers')
    if markers is not None and markers != 'none' and markers not in HOUR_MARKER_TEMPLATES:
        if len(str(markers).split(',')) != MARKER_COUNT:
            errors.append(
                f"hourMarkers must be one of {sorted(HOUR_MARKER_TEMPLATES)} "
                f"or a list of {MARKER_COUNT} comma-separated labels"
            )

    fixed_time = lookup_override(config.clock, TIME_ATTRIBUTE)
    if fixed_time is not None and str(fixed_time).strip() and parse_fixed_time(str(fixed_time)) is None:
        errors.append(f"Clock time '{fixed_time}' is not a valid time of day (HH:MM[:SS])")

    # Check display settings
    if not all(_is_int(v) and v >= 1 for v in (config.display.width, config.display.height)):
        errors.append("Display width and height must be positive integers")

    # Check web settings
    if not (_is_int(config.web.port) and 1 <= config.web.port <= 65535):
        errors.append("Web port must be an integer between 1 and 65535")

    return errors
