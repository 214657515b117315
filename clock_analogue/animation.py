# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Animation loop: keeps hand rotations in step with the clock."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Host timer facility. Callbacks must run on the host's own loop."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        """Run `callback` once after `delay_ms`; return a handle for cancel()."""
        pass

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback. Unknown or fired handles are ignored."""
        pass


class LoopState(Enum):
    """Animation loop state."""
    STOPPED = "stopped"
    RUNNING = "running"  # Live time, next tick scheduled
    FIXED = "fixed"      # Fixed time, no tick scheduled


class CancellationToken:
    """Captured by a loop run; once cancelled, its ticks do nothing."""

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class AnimationLoop:
    """
    Self-rescheduling tick bounded to FPS.

    The update callback applies fresh rotations to the existing hands and
    returns whether time is live. Liveness is re-checked on every tick, so a
    fixed-time override halts the loop on the next cycle.
    """

    FPS = 60

    def __init__(self, scheduler: Scheduler, update: Callable[[], bool]):
        """
        Args:
            scheduler: Host timer facility.
            update: Applies rotations; returns True while time is live.
        """
        self._scheduler = scheduler
        self._update = update
        self._token: Optional[CancellationToken] = None
        self._handle: Any = None
        self.state = LoopState.STOPPED
        self.tick_count = 0

    @property
    def interval_ms(self) -> float:
        return 1000 / self.FPS

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    def start(self) -> None:
        """Start (or restart) the loop with a fresh token and tick now."""
        self.stop()
        self._token = CancellationToken()
        logger.debug("Animation loop started")
        self._tick(self._token)

    def stop(self) -> None:
        """Cancel the current run and any pending tick."""
        if self._token is not None:
            self._token.cancel()
            self._token = None
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
        if self.state is not LoopState.STOPPED:
            logger.debug("Animation loop stopped")
        self.state = LoopState.STOPPED

    def _tick(self, token: CancellationToken) -> None:
        if token.cancelled:
            return
        self._handle = None
        self.tick_count += 1

        live = self._update()

        # update() may have stopped the loop (e.g. widget detached)
        if token.cancelled:
            return

        if live:
            self.state = LoopState.RUNNING
            self._handle = self._scheduler.call_later(
                self.interval_ms, lambda: self._tick(token)
            )
        else:
            if self.state is LoopState.RUNNING:
                logger.info("Fixed time set, animation halted")
            self.state = LoopState.FIXED
