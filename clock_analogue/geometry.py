# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Clock geometry: hand rotation angles and hour-marker placement.

Angles are in degrees, clockwise, with 0 at 12 o'clock. Display transforms
add HAND_OFFSET because an unrotated hand points at 3 o'clock.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .time_sampler import TimeSample

HAND_OFFSET = -90

DEGREES_PER_HOUR = 360 / 12
DEGREES_PER_MINUTE = 360 / 60
DEGREES_PER_SECOND = 360 / 60

# Marker circle, in percent of the face
MARKER_CENTER = 50
MARKER_RADIUS = 43


@dataclass(frozen=True)
class HandRotation:
    """Pre-offset hand angles in degrees."""
    hours: float
    minutes: float
    seconds: float

    def to_dict(self) -> dict:
        return {
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
        }


def hand_rotations(sample: TimeSample, snap: bool) -> HandRotation:
    """
    Convert a time sample into hand angles.

    Args:
        sample: Time of day.
        snap: True to move each hand in whole steps of its own unit; False
            to advance each hand by the fraction of the next finer unit.

    Returns:
        HandRotation with pre-offset angles.
    """
    hours = DEGREES_PER_HOUR * (sample.hour % 12)
    minutes = DEGREES_PER_MINUTE * sample.minute
    seconds = DEGREES_PER_SECOND * sample.second

    if snap:
        return HandRotation(hours=hours, minutes=minutes, seconds=seconds)

    return HandRotation(
        hours=hours + DEGREES_PER_HOUR * sample.minute / 60,
        minutes=minutes + DEGREES_PER_MINUTE * sample.second / 60,
        seconds=DEGREES_PER_SECOND * (sample.second + sample.millisecond / 1000),
    )


def display_angle(degrees: float) -> float:
    """Angle as applied to a hand element."""
    return degrees + HAND_OFFSET


def rotation_transform(degrees: float) -> str:
    """CSS transform for a pre-offset hand angle."""
    return f"rotate({format_number(display_angle(degrees))}deg)"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def marker_position(index: int) -> Tuple[int, int]:
    """
    Position of hour marker `index` as whole percentages of the face.

    Index 0 is at the top (12 o'clock); indices proceed clockwise in 30
    degree steps.
    """
    angle = math.pi * index / 6 - math.pi / 2
    x = round_half_up(MARKER_CENTER + MARKER_RADIUS * math.cos(angle))
    y = round_half_up(MARKER_CENTER + MARKER_RADIUS * math.sin(angle))
    return x, y


def format_number(value: float) -> str:
    """Format a number for CSS: integral values without a decimal point."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip('0').rstrip('.')
