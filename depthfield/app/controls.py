from __future__ import annotations
import logging

import pygame

from depthfield.api.config import FieldConfig

log = logging.getLogger(__name__)


class KeyboardControls:
    """
    Runtime toggles on the shared FieldConfig. Changes are picked up by the
    pipeline at the start of the next frame.

        Up / Down   depth threshold +/- threshold_step
        B           blur mask before blob extraction
        D           draw blobs in the preview
        P           camera preview window
        R           reset dots onto their anchors
        Esc         quit
    """

    def __init__(self, cfg: FieldConfig):
        self.cfg = cfg
        self.quit_requested = False
        self.reset_requested = False

    def handle_key(self, key: int) -> None:
        cfg = self.cfg
        if key == pygame.K_ESCAPE:
            self.quit_requested = True
        elif key == pygame.K_UP:
            cfg.depth_threshold += cfg.threshold_step
            log.info("Depth threshold: %d", cfg.depth_threshold)
        elif key == pygame.K_DOWN:
            cfg.depth_threshold = max(1, cfg.depth_threshold - cfg.threshold_step)
            log.info("Depth threshold: %d", cfg.depth_threshold)
        elif key == pygame.K_b:
            cfg.blur = not cfg.blur
            log.info("Blur: %s", "on" if cfg.blur else "off")
        elif key == pygame.K_d:
            cfg.draw_blobs = not cfg.draw_blobs
            log.info("Draw blobs: %s", "on" if cfg.draw_blobs else "off")
        elif key == pygame.K_p:
            cfg.show_preview = not cfg.show_preview
            log.info("Preview: %s", "on" if cfg.show_preview else "off")
        elif key == pygame.K_r:
            self.reset_requested = True

    def handle_pygame_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit_requested = True
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)
