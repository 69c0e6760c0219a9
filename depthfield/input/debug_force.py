from __future__ import annotations
import pygame
from typing import Dict, Optional, Set, Tuple

from depthfield.api.config import FieldConfig
from depthfield.api.frame_data import ForceSource

# mouse button -> (radius px, strength)
DEFAULT_BUTTONS: Dict[int, Tuple[float, float]] = {
    1: (120.0, -6.0),
    3: (240.0, -2.0),
}


class DebugForceInjector:
    """Mouse stand-in for a visitor: each held button pushes dots away from the cursor."""

    def __init__(self, cfg: FieldConfig, buttons: Optional[Dict[int, Tuple[float, float]]] = None):
        self.enabled = cfg.debug
        self.mirror = cfg.mirror
        self.buttons = dict(DEFAULT_BUTTONS if buttons is None else buttons)
        self.cursor: Tuple[float, float] = (0.0, 0.0)
        self.held: Set[int] = set()

    def _track(self, pos, width: int) -> None:
        x, y = pos
        self.cursor = (float(width - 1 - x if self.mirror else x), float(y))

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> None:
        if not self.enabled:
            return
        kind = event.type
        if kind in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
            self._track(event.pos, screen_size[0])
        if kind == pygame.MOUSEBUTTONDOWN and event.button in self.buttons:
            self.held.add(event.button)
        elif kind == pygame.MOUSEBUTTONUP:
            self.held.discard(event.button)
        elif kind == pygame.WINDOWFOCUSLOST:
            self.held.clear()

    def emit_sources(self) -> Tuple[ForceSource, ...]:
        if not self.enabled:
            return ()
        x, y = self.cursor
        return tuple(
            ForceSource(x=x, y=y, radius=self.buttons[b][0], strength=self.buttons[b][1])
            for b in sorted(self.held)
        )
