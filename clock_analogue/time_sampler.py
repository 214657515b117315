# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Time sampling from the live clock or a fixed override."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

# Fixed times are parsed against this date; only the time of day is used
REFERENCE_DATE = "1999-01-01"

FIXED_TIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


@dataclass(frozen=True)
class TimeSample:
    """A normalized time of day."""
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    @classmethod
    def from_datetime(cls, value: datetime) -> "TimeSample":
        return cls(
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            millisecond=value.microsecond // 1000,
        )

    def to_dict(self) -> dict:
        return {
            "hour": self.hour,
            "minute": self.minute,
            "second": self.second,
            "millisecond": self.millisecond,
        }


MIDNIGHT = TimeSample()


def parse_fixed_time(text: str) -> Optional[TimeSample]:
    """
    Parse the trailing time-of-day token of a fixed-time override.

    "1999/12/31 13:15:30" and "13:15:30" both yield 13:15:30.000.

    Args:
        text: Override text; only the last whitespace-separated token is read.

    Returns:
        TimeSample, or None if the token is not a valid time of day.
    """
    tokens = str(text).split()
    if not tokens:
        return None
    token = tokens[-1]

    for fmt in FIXED_TIME_FORMATS:
        try:
            parsed = datetime.strptime(f"{REFERENCE_DATE} {token}", fmt)
        except ValueError:
            continue
        return TimeSample.from_datetime(parsed)
    return None


def sample_time(
    fixed_time_text: Optional[str] = None,
    now: Optional[Callable[[], datetime]] = None
) -> Tuple[TimeSample, bool]:
    """
    Produce the current time sample.

    Args:
        fixed_time_text: Fixed-time override. None or empty means live time.
        now: Clock callable for live samples (defaults to datetime.now).

    Returns:
        Tuple of (sample, is_live). A fixed override is never live, even
        when it cannot be parsed; an unparseable override reads as midnight.
    """
    if fixed_time_text is not None and str(fixed_time_text).strip():
        sample = parse_fixed_time(fixed_time_text)
        if sample is None:
            logger.warning(f"Could not parse fixed time {fixed_time_text!r}, showing midnight")
            return MIDNIGHT, False
        return sample, False

    clock = now or datetime.now
    return TimeSample.from_datetime(clock()), True
