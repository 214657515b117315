# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Clock options: declared defaults and override resolution.

Overrides arrive as attribute-like key/value pairs (strings from a query
string or a host attribute, native values from YAML). Each declared option
has a kind that decides how a present override is coerced. Resolution never
raises; malformed values fall back to the default.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class OptionKind(Enum):
    """How an override value is coerced."""
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


@dataclass(frozen=True)
class OptionSpec:
    """A declared option: attribute name, dataclass field, kind and default."""
    attribute: str
    field_name: str
    kind: OptionKind
    default: Any


DEFAULT_BACKGROUND = "#9dadbd"
DEFAULT_FONT_FAMILY = '"Open Sans", Ubuntu, sans-serif'

# Declared configuration surface, in attribute order
DECLARED_OPTIONS = (
    OptionSpec("size", "size", OptionKind.NUMBER, 100),
    OptionSpec("background", "background", OptionKind.STRING, DEFAULT_BACKGROUND),
    OptionSpec("showSeconds", "show_seconds", OptionKind.BOOLEAN, True),
    OptionSpec("snap", "snap", OptionKind.BOOLEAN, True),
    OptionSpec("hourMarkers", "hour_markers", OptionKind.STRING, "none"),
    OptionSpec("fontFamily", "font_family", OptionKind.STRING, DEFAULT_FONT_FAMILY),
)

# The fixed-time override is observed but is not part of the configuration
TIME_ATTRIBUTE = "time"

FALSY_TOKENS = ("false", "0")


@dataclass(frozen=True)
class ClockConfiguration:
    """Resolved clock options. Derived on every read, never cached."""
    size: float = 100
    background: str = DEFAULT_BACKGROUND
    show_seconds: bool = True
    snap: bool = True
    hour_markers: str = "none"
    font_family: str = DEFAULT_FONT_FAMILY

    def to_attributes(self) -> Dict[str, Any]:
        """Return the configuration keyed by attribute name."""
        return {
            option.attribute: getattr(self, option.field_name)
            for option in DECLARED_OPTIONS
        }


def coerce_boolean(value: Any) -> bool:
    """Interpret an attribute value as a boolean.

    Real booleans pass through; "false", "0" and numeric zero are False;
    anything else follows Python truthiness.
    """
    if isinstance(value, bool):
        return value
    if value in FALSY_TOKENS or (isinstance(value, (int, float)) and value == 0):
        return False
    return bool(value)


def coerce_number(value: Any, default: float) -> float:
    """Interpret an attribute value as a positive number."""
    if isinstance(value, bool):
        logger.warning(f"Ignoring boolean size value {value!r}, using {default}")
        return default
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            logger.warning(f"Invalid numeric value {value!r}, using {default}")
            return default
        if number.is_integer():
            number = int(number)

    if number != number or number <= 0 or number == float("inf"):
        logger.warning(f"Size must be a positive number, got {value!r}; using {default}")
        return default
    return number


def lookup_override(overrides: Optional[Mapping[str, Any]], name: str) -> Any:
    """Find an override by attribute name, ignoring case.

    Host attributes are case-insensitive, so "showseconds" matches
    "showSeconds". An exact match wins over a case-folded one.
    """
    if not overrides:
        return None
    if name in overrides:
        return overrides[name]
    folded = name.lower()
    for key, value in overrides.items():
        if isinstance(key, str) and key.lower() == folded:
            return value
    return None


def _coerce(option: OptionSpec, value: Any) -> Any:
    if option.kind is OptionKind.BOOLEAN:
        return coerce_boolean(value)
    if option.kind is OptionKind.NUMBER:
        return coerce_number(value, option.default)
    return value if isinstance(value, str) else str(value)


def resolve_options(overrides: Optional[Mapping[str, Any]] = None) -> ClockConfiguration:
    """
    Merge declared defaults with caller-supplied overrides.

    Args:
        overrides: Attribute-like mapping. Missing keys and None values use
            the declared default.

    Returns:
        ClockConfiguration snapshot.
    """
    kwargs = {}
    for option in DECLARED_OPTIONS:
        value = lookup_override(overrides, option.attribute)
        kwargs[option.field_name] = option.default if value is None else _coerce(option, value)
    return ClockConfiguration(**kwargs)


def observed_attributes() -> tuple:
    """Attribute names whose change triggers a re-render (lower-cased)."""
    return tuple(option.attribute.lower() for option in DECLARED_OPTIONS) + (TIME_ATTRIBUTE,)
