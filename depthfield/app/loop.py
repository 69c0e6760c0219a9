from __future__ import annotations
import logging
import pygame

from depthfield.api.config import FieldConfig
from depthfield.app.context import Context
from depthfield.app.controls import KeyboardControls
from depthfield.app.pipeline import FramePipeline
from depthfield.detect.blob_detector import MaskPreview
from depthfield.input.debug_force import DebugForceInjector
from depthfield.render.shapes import draw_force_source, draw_text
from depthfield.render.sprites import DotSprites
from depthfield.sim.particle_grid import ParticleGrid
from depthfield.video.depth_camera import KinectDepthCamera, ReplayDepthSource

log = logging.getLogger(__name__)

BACKGROUND = (8, 9, 12)


def open_depth_source(cfg: FieldConfig):
    source = ReplayDepthSource(cfg.replay) if cfg.replay else KinectDepthCamera(index=cfg.cam_index)
    if not source.open():
        log.warning("Depth source unavailable; the field will only wander")
    return source


def run_field(cfg: FieldConfig):
    pygame.init()
    pygame.display.set_caption("Depth Field")
    screen = pygame.display.set_mode(cfg.screen_size)
    clock = pygame.time.Clock()

    source = open_depth_source(cfg)
    pipeline = FramePipeline(cfg)
    grid = ParticleGrid(
        cfg.screen_size,
        cols=cfg.grid_cols,
        rows=cfg.grid_rows,
        friction=cfg.friction,
        spring_stiffness=cfg.spring_stiffness,
        dot_radius=cfg.dot_radius,
    )
    sprites = DotSprites(cfg.dot_radius)
    controls = KeyboardControls(cfg)
    debug_input = DebugForceInjector(cfg)
    preview = MaskPreview()

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not cfg.mirror else pygame.Surface(cfg.screen_size).convert()

    ctx = Context(screen=render_surface, clock=clock, cfg=cfg, screen_size=cfg.screen_size)
    log.info("Running %dx%d dots on %dx%d", cfg.grid_cols, cfg.grid_rows, *cfg.screen_size)

    try:
        while not controls.quit_requested:
            clock.tick(cfg.fps)
            for event in pygame.event.get():
                controls.handle_pygame_event(event)
                debug_input.handle_pygame_event(event, cfg.screen_size)

            if controls.reset_requested:
                grid.reset()
                controls.reset_requested = False

            frame = pipeline.process(source, extra_sources=debug_input.emit_sources())
            grid.advance(frame.force_sources)

            # ---- draw to render_surface ----
            draw_frame(ctx, grid, sprites, frame)

            # ---- present to window ----
            if cfg.mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))
            pygame.display.flip()

            if cfg.show_preview and pipeline.detector.last_work is not None:
                preview.show(pipeline.detector.last_work, pipeline.last_blobs,
                             cfg.draw_blobs, cfg.min_vertex_count, cfg.depth_threshold)
            else:
                preview.hide()

    finally:
        source.close()
        preview.teardown()
        pygame.quit()


def draw_frame(ctx: Context, grid: ParticleGrid, sprites: DotSprites, frame) -> None:
    surface = ctx.screen
    surface.fill(BACKGROUND)
    sprites.draw(surface, grid.positions, grid.speeds())

    if ctx.cfg.draw_blobs:
        for src in frame.force_sources:
            draw_force_source(surface, src)
    if ctx.cfg.debug:
        status = f"{ctx.clock.get_fps():5.1f} fps  blobs {frame.blob_count} sources {frame.source_count}  " \
                 f"threshold {ctx.cfg.depth_threshold}{'  idle' if frame.idle else ''}"
        draw_text(surface, status, (16, 16), size=22)
