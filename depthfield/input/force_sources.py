from typing import Iterable, Tuple

import numpy as np

from depthfield.api.frame_data import Blob, ForceSource

# uniform strength draw per blob per frame; negative => repulsive
STRENGTH_MIN = -12.0
STRENGTH_MAX = -0.1


def blob_to_force_source(blob: Blob, screen_size: Tuple[int, int], strength: float) -> ForceSource:
    w, h = screen_size
    bw = blob.x_max - blob.x_min
    bh = blob.y_max - blob.y_min
    x = (blob.x_min + bw / 2.0) * w
    y = (blob.y_min + bh / 2.0) * h
    # mean of box width/height in pixels, halved again
    radius = (bw * w + bh * h) / 4.0
    return ForceSource(x=x, y=y, radius=radius, strength=strength)


def build_force_sources(
    blobs: Iterable[Blob],
    screen_size: Tuple[int, int],
    min_vertex_count: int,
    rng: np.random.Generator,
) -> Tuple[ForceSource, ...]:
    """
    Map each blob with at least `min_vertex_count` contour points to a repulsive
    circular force source in screen space. Smaller blobs are sensor speckle and dropped.
    """
    out = []
    for b in blobs:
        if b.vertex_count < min_vertex_count:
            continue
        strength = float(rng.uniform(STRENGTH_MIN, STRENGTH_MAX))
        out.append(blob_to_force_source(b, screen_size, strength))
    return tuple(out)
