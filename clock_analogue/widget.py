# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
ClockAnalogue widget.

Ties the pieces together behind a host lifecycle:
- attach(): initial render and start of the animation loop
- attribute_changed(): full re-render (and restart of a halted loop)
- detach(): stops the animation loop

Configuration and time are derived from the current attributes on every
read; only the render result is kept between calls.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from .animation import AnimationLoop, LoopState, Scheduler
from .contrast import contrast_color
from .geometry import HandRotation, hand_rotations
from .markers import HourMarkerSet, resolve_hour_markers
from .options import TIME_ATTRIBUTE, ClockConfiguration, lookup_override, observed_attributes, resolve_options
from .render import RenderResult, apply_rotations, render
from .time_sampler import TimeSample, sample_time

logger = logging.getLogger(__name__)


class ClockAnalogue:
    """Analogue clock widget driven by attribute-like overrides."""

    OBSERVED_ATTRIBUTES = observed_attributes()

    def __init__(
        self,
        attributes: Optional[Dict[str, Any]] = None,
        scheduler: Optional[Scheduler] = None,
        now: Optional[Callable[[], datetime]] = None,
        on_render: Optional[Callable[[RenderResult], None]] = None
    ):
        """
        Initialize the widget.

        Args:
            attributes: Initial attribute overrides (see options.DECLARED_OPTIONS
                and the "time" attribute).
            scheduler: Host timer facility. Without one the widget can only
                take snapshots.
            now: Clock callable for live time (defaults to datetime.now).
            on_render: Called with each new RenderResult.
        """
        self._attributes: Dict[str, Any] = dict(attributes or {})
        self._scheduler = scheduler
        self._now = now
        self._on_render = on_render
        self._result: Optional[RenderResult] = None
        self._attached = False
        self._loop = AnimationLoop(scheduler, self.update_rotations) if scheduler else None

    # --- Derived state ------------------------------------------------------

    @property
    def options(self) -> ClockConfiguration:
        return resolve_options(self._attributes)

    @property
    def fixed_time(self) -> Optional[str]:
        value = lookup_override(self._attributes, TIME_ATTRIBUTE)
        return None if value is None else str(value)

    def sample(self) -> Tuple[TimeSample, bool]:
        return sample_time(self.fixed_time, self._now)

    @property
    def hour_markers(self) -> HourMarkerSet:
        return resolve_hour_markers(self.options.hour_markers)

    def rotations(self) -> Tuple[HandRotation, bool]:
        sample, live = self.sample()
        return hand_rotations(sample, self.options.snap), live

    @property
    def result(self) -> Optional[RenderResult]:
        """The current render result, if rendered."""
        return self._result

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def loop_state(self) -> LoopState:
        return self._loop.state if self._loop else LoopState.STOPPED

    # --- Attributes ---------------------------------------------------------

    def get_attribute(self, name: str) -> Any:
        return lookup_override(self._attributes, name)

    def set_attribute(self, name: str, value: Any) -> None:
        old = self.get_attribute(name)
        self._drop_attribute(name)
        self._attributes[name] = value
        self._notify(name, old, value)

    def remove_attribute(self, name: str) -> None:
        old = self.get_attribute(name)
        if self._drop_attribute(name):
            self._notify(name, old, None)

    def _drop_attribute(self, name: str) -> bool:
        folded = name.lower()
        keys = [k for k in self._attributes if isinstance(k, str) and k.lower() == folded]
        for key in keys:
            del self._attributes[key]
        return bool(keys)

    def _notify(self, name: str, old: Any, new: Any) -> None:
        if self._attached and name.lower() in self.OBSERVED_ATTRIBUTES:
            self.attribute_changed(name, old, new)

    # --- Lifecycle ----------------------------------------------------------

    def attach(self) -> RenderResult:
        """Host attached the widget: render and start ticking."""
        self._attached = True
        result = self.render()
        if self._loop:
            self._loop.start()
        logger.info(f"Clock attached (loop {self.loop_state.value})")
        return result

    def attribute_changed(self, name: str, old: Any, new: Any) -> RenderResult:
        """An observed attribute changed: rebuild the whole tree."""
        logger.debug(f"Attribute {name!r} changed: {old!r} -> {new!r}")
        result = self.render()
        if self._attached and self._loop and not self._loop.running:
            _sample, live = self.sample()
            if live:
                self._loop.start()
        return result

    def detach(self) -> None:
        """Host removed the widget: stop ticking."""
        self._attached = False
        if self._loop:
            self._loop.stop()
        logger.info("Clock detached")

    # --- Rendering ----------------------------------------------------------

    def render(self) -> RenderResult:
        """Full render pass from the current attributes."""
        configuration = self.options
        rotations, _live = self.rotations()
        self._result = render(
            configuration,
            resolve_hour_markers(configuration.hour_markers),
            rotations,
            contrast_color(configuration.background),
        )
        if self._on_render:
            self._on_render(self._result)
        return self._result

    def update_rotations(self) -> bool:
        """Apply fresh rotations to the existing hands. Returns True if live."""
        rotations, live = self.rotations()
        if self._result is not None:
            apply_rotations(self._result.registry, rotations)
        return live

    def snapshot(self) -> RenderResult:
        """Render once with the current rotations; never schedules."""
        return self.render()
