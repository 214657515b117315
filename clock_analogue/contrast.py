# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Marker color selection by background luma."""

import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

LIGHT_COLOR = "#eee"
DARK_COLOR = "#333"

LUMA_THRESHOLD = 128


def parse_hex_color(value: str) -> Optional[Tuple[int, int, int]]:
    """
    Decode "#rrggbb" or "#rgb" into 8-bit channels.

    Returns:
        (r, g, b) tuple, or None if the value is not a hex color.
    """
    text = str(value).strip()
    if not text.startswith('#'):
        return None
    digits = text[1:]
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    if len(digits) != 6:
        return None
    try:
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    except ValueError:
        return None


def luma(rgb: Tuple[int, int, int]) -> float:
    """Perceived brightness (YIQ luma) of an RGB color, 0-255."""
    r, g, b = rgb
    return (r * 299 + g * 587 + b * 114) / 1000


def contrast_color(background: str) -> str:
    """
    Choose a legible marker color for a background.

    Args:
        background: Background color as "#rrggbb" or "#rgb".

    Returns:
        LIGHT_COLOR for dark backgrounds, DARK_COLOR for light ones.
        Undecodable colors get LIGHT_COLOR.
    """
    rgb = parse_hex_color(background)
    if rgb is None:
        logger.warning(f"Cannot decode background color {background!r}, using light markers")
        return LIGHT_COLOR
    return LIGHT_COLOR if luma(rgb) < LUMA_THRESHOLD else DARK_COLOR
