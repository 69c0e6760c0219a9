from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class FieldConfig:
    screen_size: Tuple[int, int] = (1280, 720)

    # depth -> blobs
    depth_threshold: int = 1400
    threshold_step: int = 50
    min_vertex_count: int = 50
    prescale: float = 0.5
    blur: bool = False
    blur_radius: int = 5
    draw_blobs: bool = False

    # particle grid
    grid_cols: int = 50
    grid_rows: int = 50
    friction: float = 0.05
    spring_stiffness: float = 0.0003
    dot_radius: float = 4.0

    # idle wander
    idle_timeout_ms: int = 1000
    idle_radius: float = 250.0
    idle_strength: float = -0.5

    # runtime
    cam_index: int = 0
    replay: Optional[str] = None
    fps: int = 60
    show_preview: bool = False
    mirror: bool = False
    debug: bool = False
    seed: Optional[int] = None
