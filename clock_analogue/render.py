# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Render pipeline: builds the clock element tree and its stylesheet.

Every pass builds a fresh tree and registry; nothing from a previous pass is
reused. Hands receive the supplied rotations before the result is returned.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Optional

from .elements import Element, ElementKey, ElementRegistry, Role
from .geometry import HandRotation, display_angle, format_number, marker_position, rotation_transform
from .markers import MARKER_COUNT, HourMarkerSet, marker_label
from .options import DEFAULT_BACKGROUND, DEFAULT_FONT_FAMILY, ClockConfiguration

logger = logging.getLogger(__name__)

# Hex, named, or rgb()/hsl() colors; nothing that can close a declaration
CSS_COLOR_PATTERN = re.compile(r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]+|(rgba?|hsla?)\([0-9.,%\s/+-]*\))$")
FONT_FAMILY_FORBIDDEN = set("<>{};\\/\r\n")


@dataclass
class RenderResult:
    """Output of a render pass."""
    tree: Element
    stylesheet: str
    host_style: str
    registry: ElementRegistry
    configuration: ClockConfiguration
    marker_color: str

    def to_html(self) -> str:
        """Tree and stylesheet inside an open shadow root template."""
        # A stylesheet must never close its own <style> element
        stylesheet = self.stylesheet.replace("</", "<\\/")
        return (
            '<template shadowrootmode="open">'
            f'{self.tree.to_html()}<style>{stylesheet}</style>'
            '</template>'
        )


def apply_rotations(registry: ElementRegistry, rotations: HandRotation) -> None:
    """Set hand transforms on the registered hand elements.

    Missing hands (no seconds hand when seconds are hidden) are skipped.
    """
    for role, degrees in (
        (Role.HAND_HOURS, rotations.hours),
        (Role.HAND_MINUTES, rotations.minutes),
        (Role.HAND_SECONDS, rotations.seconds),
    ):
        element = registry.get(role)
        if element is None:
            continue
        element.rotation = display_angle(degrees)
        element.transform = rotation_transform(degrees)


def render(
    configuration: ClockConfiguration,
    hour_markers: HourMarkerSet,
    rotations: HandRotation,
    marker_color: str
) -> RenderResult:
    """
    Build the clock tree and stylesheet.

    Args:
        configuration: Resolved clock options.
        hour_markers: 12 labels, or empty for no markers.
        rotations: Hand angles to apply to the new hands.
        marker_color: Foreground color for marker labels.

    Returns:
        RenderResult with a freshly built tree and registry.
    """
    registry = ElementRegistry()

    def element(key: ElementKey, classes: str, children=None, tag: str = 'div',
                text: Optional[str] = None) -> Element:
        el = Element(
            tag=tag,
            classes=classes.split(),
            text=text or None,
            children=[c for c in (children or []) if c is not None],
        )
        return registry.register(key, el)

    markers = None
    if len(hour_markers) == MARKER_COUNT:
        markers = element(
            ElementKey(Role.MARKERS),
            'hours',
            [
                element(ElementKey(Role.MARKER, i), f'hour hour-{i}', tag='li',
                        text=marker_label(hour_markers, i))
                for i in range(MARKER_COUNT)
            ],
            tag='ol'
        )

    center_classes = 'clock-center with-seconds' if configuration.show_seconds else 'clock-center'
    tree = element(ElementKey(Role.CLOCK), 'clock', [
        element(ElementKey(Role.FACE), 'clockface'),
        element(ElementKey(Role.CENTER), center_classes),
        element(ElementKey(Role.HAND_SECONDS), 'hand seconds') if configuration.show_seconds else None,
        element(ElementKey(Role.HAND_MINUTES), 'hand minutes'),
        element(ElementKey(Role.HAND_HOURS), 'hand hours'),
        markers,
    ])

    apply_rotations(registry, rotations)

    logger.debug(
        f"Rendered clock: size={configuration.size}, seconds={configuration.show_seconds}, "
        f"markers={len(hour_markers)}"
    )

    return RenderResult(
        tree=tree,
        stylesheet=build_stylesheet(configuration, hour_markers, marker_color),
        host_style=f"width:{format_number(configuration.size)}px",
        registry=registry,
        configuration=configuration,
        marker_color=marker_color,
    )


def scaled_px(size: float, px: float, rounding: Callable[[float], float] = lambda v: v) -> str:
    """A dimension designed for a 100px clock, scaled to `size`."""
    return f"{format_number(rounding(size / 100 * px))}px"


def css_color(value: str, default: str = DEFAULT_BACKGROUND) -> str:
    """Return `value` if it is a plain CSS color, else `default`."""
    if isinstance(value, str) and CSS_COLOR_PATTERN.match(value.strip()):
        return value.strip()
    logger.warning(f"Rejecting CSS color {value!r}, using {default}")
    return default


def css_font_family(value: str, default: str = DEFAULT_FONT_FAMILY) -> str:
    """Return `value` if it can sit inside a font-family declaration, else `default`."""
    if isinstance(value, str) and value.strip() and not FONT_FAMILY_FORBIDDEN.intersection(value):
        return value
    logger.warning(f"Rejecting font family {value!r}, using default")
    return default


def build_stylesheet(
    configuration: ClockConfiguration,
    hour_markers: HourMarkerSet,
    marker_color: str
) -> str:
    """Stylesheet for the clock tree, scaled to the configured size.

    Caller-supplied colors and font names are checked before they are
    interpolated; anything that could end a declaration falls back to the
    declared default.
    """
    size = configuration.size
    background = css_color(configuration.background)
    font_family = css_font_family(configuration.font_family)
    marker_color = css_color(marker_color, '#333')

    def rpx(px: float, rounding: Callable[[float], float] = lambda v: v) -> str:
        return scaled_px(size, px, rounding)

    rules = []
    for i in range(len(hour_markers)):
        x, y = marker_position(i)
        rules.append(f"li.hour.hour-{i} {{ top: {y}%; left: {x}%; }}")
    marker_rules = '\n'.join(rules)

    return f"""
    .clock, .clock * {{
      box-sizing: border-box;
    }}
    .clock {{
      position: relative;
      width: {rpx(100)};
      height: {rpx(100)};
    }}

    .clockface {{
      position: absolute;
      background-color: {background};
      border-radius: 50%;
      height: 100%;
      width: 100%;
      box-shadow: inset 0 0 10px 10px rgba(0,0,0,.1);
    }}

    .clock-center,
    .clock-center.with-seconds:after {{
      display: block;
      position: absolute;
      top: 50%;
      left: 50%;
      transform-origin: center center;
      transform: translate(-50%, -50%);
      border-radius: 50%;
    }}
    .clock-center {{
      z-index: 50;
      width: {rpx(6)};
      height: {rpx(6)};
      border: {rpx(1, math.floor)} solid #444;
      background-color: #444;
    }}
    .clock-center.with-seconds {{
      background-color: #F00;
    }}
    .clock-center.with-seconds:after {{
      content: " ";
      display: block;
      width: {rpx(2.5)};
      height: {rpx(2.5)};
      background-color: #444;
    }}

    .hand {{
      position: absolute;
      width: 50%;
      top: 50%;
      left: 50%;
      transform-origin: left;
    }}

    .hand:before,
    .hand:after {{
      position: absolute;
      content: " ";
      display: block;
    }}

    .hand.seconds,
    .hand.hours,
    .hand.minutes {{
      height: 0;
    }}

    .hand.hours:before,
    .hand.minutes:before {{
      left: 0;
      right: 0;
      top: -{rpx(1)};
      height: {rpx(2)};
      background-color: #444;
    }}

    .hand.hours:after,
    .hand.minutes:after {{
      right: 0;
      top: -{rpx(2.25)};
      left: {rpx(6)};
      height: {rpx(2.5)};
      border: {rpx(1, math.floor)} solid #444;
      background-color: #FFF;
      border-radius: {rpx(2)};
    }}

    .hand.seconds:before {{
      left: 0;
      right: 0;
      top: -{rpx(0.25)};
      height: {rpx(0.5)};
      background-color: #F00;
    }}
    .hand.seconds:after {{
      left: -{rpx(10)};
      right: 0;
      height: {rpx(0.5)};
      background-color: #F00;
    }}

    .hand.hours    {{ width: 33%;   z-index: 15; }}
    .hand.minutes  {{ width: 46%;   z-index: 10; }}
    .hand.seconds  {{ width: 48%;   z-index: 20; }}

    ol,li {{
      display: block;
      list-style: none;
      position: absolute;
      margin: 0;
      padding: 0;
    }}
    ol.hours {{
      z-index: 5;
      width: 100%;
      height: 100%;
    }}
    li.hour {{
      text-align: center;
      font-family: {font_family};
      font-size: {rpx(7)};
      font-weight: bold;
      transform: translate(-50%, -50%);
      color: {marker_color};
    }}
    {marker_rules}
    """
