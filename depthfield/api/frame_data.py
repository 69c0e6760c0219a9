from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Blob:
    # bounding box normalized to [0, 1] of the (pre-scaled) mask
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    vertex_count: int
    # pixel contour in the pre-scaled mask, only used for preview drawing
    contour: Optional[np.ndarray] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ForceSource:
    x: float
    y: float
    radius: float
    strength: float  # < 0 pushes particles away


@dataclass
class FrameData:
    timestamp: float
    force_sources: Tuple[ForceSource, ...]
    blob_count: int = 0  # raw blobs, before the vertex filter
    source_count: int = 0  # blob-derived sources
    idle: bool = False
