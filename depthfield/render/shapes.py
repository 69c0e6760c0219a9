import pygame
from typing import Tuple

from depthfield.api.frame_data import ForceSource


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), pos)


def draw_force_source(surface: pygame.Surface, src: ForceSource, color=(255, 120, 60)):
    pygame.draw.circle(surface, color, (int(src.x), int(src.y)), max(1, int(src.radius)), width=1)
