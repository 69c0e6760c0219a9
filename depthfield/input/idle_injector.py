from __future__ import annotations
import logging
import time
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from depthfield.api.frame_data import Blob, ForceSource

log = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class IdleForceInjector:
    """
    Keeps the field moving when nobody is in front of the sensor.

    Once more than `timeout_ms` has passed since the last frame with any blobs,
    every call to `inject` yields one force source at a random screen position.
    """

    def __init__(
        self,
        screen_size: Tuple[int, int],
        timeout_ms: float = 1000,
        radius: float = 250.0,
        strength: float = -0.5,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.screen_size = screen_size
        self.timeout_ms = timeout_ms
        self.radius = radius
        self.strength = strength
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock
        self.last_activity_ms = clock()
        self._idle = False

    def note_blobs(self, blobs: Sequence[Blob], now_ms: Optional[float] = None) -> None:
        if blobs:
            self.last_activity_ms = self.clock() if now_ms is None else now_ms

    def is_idle(self, now_ms: Optional[float] = None) -> bool:
        now = self.clock() if now_ms is None else now_ms
        return (now - self.last_activity_ms) > self.timeout_ms

    def inject(self, now_ms: Optional[float] = None) -> Tuple[ForceSource, ...]:
        idle = self.is_idle(now_ms)
        if idle != self._idle:
            log.info("Idle wander %s", "on" if idle else "off")
            self._idle = idle
        if not idle:
            return ()
        w, h = self.screen_size
        x = float(self.rng.uniform(0, w))
        y = float(self.rng.uniform(0, h))
        return (ForceSource(x=x, y=y, radius=self.radius, strength=self.strength),)
