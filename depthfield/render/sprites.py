from __future__ import annotations
from typing import List, Tuple

import numpy as np
import pygame

# dim -> bright as dots speed up
DOT_TINTS = [(90, 110, 140), (140, 170, 210), (200, 220, 250), (255, 255, 255)]
SPEED_STEPS = (0.4, 1.5, 4.0)  # px / step
SOURCE_SIZE = 64


def _soft_dot(size: int, color: Tuple[int, int, int]) -> pygame.Surface:
    """Radial falloff disc drawn once at SOURCE_SIZE."""
    surf = pygame.Surface((size, size), pygame.SRCALPHA)
    c = size / 2.0
    for r in range(size // 2, 0, -1):
        a = int(255 * (1.0 - (r / c)) ** 0.6)
        pygame.draw.circle(surf, (*color, a), (int(c), int(c)), r)
    return surf


class DotSprites:
    """
    Dot sprites pre-scaled once to the particle diameter, then blitted in one batch.
    """

    def __init__(self, radius: float):
        self.radius = radius
        d = max(2, int(round(radius * 2)))
        self.sprites: List[pygame.Surface] = [
            pygame.transform.smoothscale(_soft_dot(SOURCE_SIZE, tint), (d, d))
            for tint in DOT_TINTS
        ]
        self.half = d / 2.0

    def draw(self, surface: pygame.Surface, positions: np.ndarray, speeds: np.ndarray) -> None:
        level = np.searchsorted(SPEED_STEPS, speeds)
        xs = (positions[:, 0] - self.half).astype(np.int32)
        ys = (positions[:, 1] - self.half).astype(np.int32)
        sprites = self.sprites
        surface.blits(
            [(sprites[lv], (x, y)) for lv, x, y in zip(level.tolist(), xs.tolist(), ys.tolist())],
            doreturn=False,
        )
