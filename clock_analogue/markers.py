# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Hour-marker templates and label resolution."""

import logging
from typing import Tuple

logger = logging.getLogger(__name__)

MARKER_COUNT = 12

# Registry of named marker templates (comma lists, listed from 1 o'clock)
HOUR_MARKER_TEMPLATES = {
    'roman': 'I,II,III,IV,V,VI,VII,VIII,IX,X,XI,XII',
    'romanMinimal': ',,III,,,VI,,,IX,,,XII',
    'numeral': '1,2,3,4,5,6,7,8,9,10,11,12',
    'numeralMinimal': ',,3,,,6,,,9,,,12',
}

HourMarkerSet = Tuple[str, ...]

NO_MARKERS: HourMarkerSet = ()


def resolve_hour_markers(selector: str) -> HourMarkerSet:
    """
    Expand a marker selector into 12 labels, or none.

    Args:
        selector: A template name from HOUR_MARKER_TEMPLATES, or a literal
            comma-separated list of exactly 12 labels.

    Returns:
        Tuple of 12 labels (some possibly empty), or an empty tuple.
    """
    template = HOUR_MARKER_TEMPLATES.get(selector)
    if template is not None:
        return tuple(template.split(','))

    labels = tuple(str(selector).split(','))
    if len(labels) != MARKER_COUNT:
        if selector != 'none':
            logger.debug(f"Hour marker selector has {len(labels)} items, markers disabled")
        return NO_MARKERS
    return labels


def marker_label(markers: HourMarkerSet, slot: int) -> str:
    """Label for a face slot (0 is 12 o'clock).

    Lists run from 1 o'clock, so slot 0 takes the last label and slot i
    takes label i - 1.
    """
    return markers[MARKER_COUNT - 1] if slot == 0 else markers[slot - 1]
