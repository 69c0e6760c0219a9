from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Tuple

from depthfield.api.config import FieldConfig


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: FieldConfig
    screen_size: Tuple[int, int]
