# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
pygame host for the clock widget.

Paints the rendered element tree onto a pygame surface and runs the
animation loop's timers from the window's frame loop, so ticks and
repaints share one thread.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from typing import Any, Callable, Dict, List, Optional, Tuple

import pygame

from ..animation import AnimationLoop, Scheduler
from ..contrast import parse_hex_color
from ..elements import Element, Role
from ..geometry import marker_position
from ..options import DEFAULT_FONT_FAMILY
from ..render import RenderResult
from ..widget import ClockAnalogue

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

HAND_COLOR = (0x44, 0x44, 0x44)
HAND_FILL_COLOR = (0xFF, 0xFF, 0xFF)
SECONDS_COLOR = (0xFF, 0x00, 0x00)
FALLBACK_FACE_COLOR = (0x9D, 0xAD, 0xBD)


class EventLoopScheduler(Scheduler):
    """Timer queue drained by the host's frame loop."""

    def __init__(self, ticks: Callable[[], int] = pygame.time.get_ticks):
        """
        Args:
            ticks: Millisecond clock (pygame.time.get_ticks by default).
        """
        self._ticks = ticks
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._counter = itertools.count()
        self._cancelled: set = set()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        handle = next(self._counter)
        heapq.heappush(self._queue, (self._ticks() + delay_ms, handle, callback))
        return handle

    def cancel(self, handle: Any) -> None:
        if any(entry[1] == handle for entry in self._queue):
            self._cancelled.add(handle)

    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return sum(1 for entry in self._queue if entry[1] not in self._cancelled)

    def run_due(self) -> int:
        """Fire every timer that is due. Returns the number fired."""
        now = self._ticks()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _due, handle, callback = heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            callback()
            fired += 1
        return fired


def parse_font_family(font_family: str) -> List[str]:
    """Split a CSS font-family list into plain family names."""
    names = []
    for part in font_family.split(','):
        name = part.strip().strip('"\'').strip()
        if name:
            names.append(name)
    return names


def resolve_color(value: str, fallback: Color) -> Color:
    """Hex or named color to an RGB tuple."""
    rgb = parse_hex_color(value)
    if rgb is not None:
        return rgb
    try:
        color = pygame.Color(value)
        return (color.r, color.g, color.b)
    except (ValueError, TypeError):
        logger.debug(f"Unknown color {value!r}, using fallback")
        return fallback


class ClockPainter:
    """Draws a RenderResult onto a pygame surface."""

    # Hand length as a fraction of the clock size
    HAND_LENGTHS = {
        Role.HAND_HOURS: 0.33,
        Role.HAND_MINUTES: 0.46,
        Role.HAND_SECONDS: 0.48,
    }

    def __init__(self):
        self._font_cache: Dict[tuple, pygame.font.Font] = {}

    def get_font(self, size: int, font_family: str) -> pygame.font.Font:
        """Get a cached bold font for the first matching family."""
        cache_key = (size, font_family)
        if cache_key not in self._font_cache:
            if not pygame.font.get_init():
                pygame.font.init()
            names = parse_font_family(font_family) or parse_font_family(DEFAULT_FONT_FAMILY)
            self._font_cache[cache_key] = pygame.font.SysFont(names, size, bold=True)
        return self._font_cache[cache_key]

    def paint(
        self,
        result: RenderResult,
        surface: pygame.Surface,
        origin: Tuple[int, int] = (0, 0)
    ) -> pygame.Rect:
        """
        Paint the clock.

        Args:
            result: Current render result (hand rotations already applied).
            surface: Target surface.
            origin: Top-left corner of the clock on the surface.

        Returns:
            Rect covering the clock.
        """
        config = result.configuration
        size = float(config.size)
        scale = size / 100
        center = (origin[0] + size / 2, origin[1] + size / 2)
        registry = result.registry

        face_color = resolve_color(config.background, FALLBACK_FACE_COLOR)
        pygame.draw.circle(surface, face_color, _point(center), int(size / 2))

        # Layers in z-index order: markers, minutes, hours, seconds, center
        self._draw_markers(surface, result, origin, size)
        for role in (Role.HAND_MINUTES, Role.HAND_HOURS):
            hand = registry.get(role)
            if hand is not None:
                self._draw_hand(surface, hand, center, size * self.HAND_LENGTHS[role], scale)
        seconds = registry.get(Role.HAND_SECONDS)
        if seconds is not None:
            self._draw_seconds_hand(surface, seconds, center, size * self.HAND_LENGTHS[Role.HAND_SECONDS], scale)
        self._draw_center(surface, registry.get(Role.CENTER), center, scale)

        return pygame.Rect(origin[0], origin[1], int(size), int(size))

    def _draw_markers(self, surface: pygame.Surface, result: RenderResult,
                      origin: Tuple[int, int], size: float) -> None:
        markers = result.registry.markers()
        if not markers:
            return
        color = resolve_color(result.marker_color, HAND_COLOR)
        font = self.get_font(max(1, int(size * 0.07)), result.configuration.font_family)
        for index, element in enumerate(markers):
            if not element.text:
                continue
            x_pct, y_pct = marker_position(index)
            label = font.render(element.text, True, color)
            # Centered on the marker position
            rect = label.get_rect(center=(
                int(origin[0] + size * x_pct / 100),
                int(origin[1] + size * y_pct / 100)
            ))
            surface.blit(label, rect)

    def _draw_hand(self, surface: pygame.Surface, hand: Element,
                   center: Tuple[float, float], length: float, scale: float) -> None:
        """Hour/minute hand: dark bar with a light inset from 6% onward."""
        angle = math.radians(hand.rotation or 0)
        end = _polar(center, length, angle)
        pygame.draw.line(surface, HAND_COLOR, _point(center), _point(end), max(1, round(2 * scale)))

        inset_start = _polar(center, 6 * scale, angle)
        outline = max(1, math.floor(scale))
        pygame.draw.line(surface, HAND_COLOR, _point(inset_start), _point(end),
                         max(1, round(2.5 * scale)) + 2 * outline)
        pygame.draw.line(surface, HAND_FILL_COLOR, _point(inset_start), _point(end),
                         max(1, round(2.5 * scale)))

    def _draw_seconds_hand(self, surface: pygame.Surface, hand: Element,
                           center: Tuple[float, float], length: float, scale: float) -> None:
        """Thin red hand with a short tail behind the pivot."""
        angle = math.radians(hand.rotation or 0)
        end = _polar(center, length, angle)
        tail = _polar(center, -10 * scale, angle)
        pygame.draw.line(surface, SECONDS_COLOR, _point(tail), _point(end), max(1, round(0.5 * scale)))

    def _draw_center(self, surface: pygame.Surface, center_el: Optional[Element],
                     center: Tuple[float, float], scale: float) -> None:
        with_seconds = center_el is not None and center_el.has_class('with-seconds')
        radius = max(1, round(3 * scale))
        pygame.draw.circle(surface, SECONDS_COLOR if with_seconds else HAND_COLOR, _point(center), radius)
        pygame.draw.circle(surface, HAND_COLOR, _point(center), radius, max(1, math.floor(scale)))
        if with_seconds:
            pygame.draw.circle(surface, HAND_COLOR, _point(center), max(1, round(1.25 * scale)))


def _polar(center: Tuple[float, float], distance: float, angle: float) -> Tuple[float, float]:
    # Screen coordinates: y grows downward, so positive angles run clockwise
    return (center[0] + distance * math.cos(angle), center[1] + distance * math.sin(angle))


def _point(p: Tuple[float, float]) -> Tuple[int, int]:
    return (int(round(p[0])), int(round(p[1])))


def run_window(
    attributes: Optional[Dict[str, Any]] = None,
    width: int = 480,
    height: int = 480,
    windowed: bool = True,
    background_color: Optional[List[int]] = None
) -> None:
    """
    Show the clock in a pygame window until it is closed (blocking).

    Args:
        attributes: Clock attribute overrides.
        width: Window width in pixels.
        height: Window height in pixels.
        windowed: False for fullscreen.
        background_color: Window background [R, G, B].
    """
    pygame.init()
    flags = 0 if windowed else pygame.FULLSCREEN
    screen = pygame.display.set_mode((width, height), flags)
    pygame.display.set_caption("clock-analogue")
    window_color = tuple(background_color or (0, 0, 0))

    scheduler = EventLoopScheduler()
    painter = ClockPainter()
    widget = ClockAnalogue(attributes, scheduler=scheduler)
    frame_clock = pygame.time.Clock()

    logger.info(f"Window {width}x{height} ({'windowed' if windowed else 'fullscreen'})")

    try:
        widget.attach()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False

            scheduler.run_due()

            screen.fill(window_color)
            result = widget.result
            if result is not None:
                size = int(result.configuration.size)
                origin = ((screen.get_width() - size) // 2, (screen.get_height() - size) // 2)
                painter.paint(result, screen, origin)
            pygame.display.flip()

            frame_clock.tick(AnimationLoop.FPS)
    finally:
        widget.detach()
        pygame.quit()
        logger.info("Window closed")
