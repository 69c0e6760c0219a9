from __future__ import annotations
from typing import Sequence, Union

import numpy as np

WHITE = 255
BLACK = 0


def threshold_depth(
    raw_depths: Union[np.ndarray, Sequence[int]], width: int, height: int, threshold: int
) -> np.ndarray:
    """
    Turn a raw depth buffer into a binary foreground mask (uint8 {0,255}, shape (height, width)).

    A pixel is foreground iff 0 < depth < threshold. Depth 0 is the sensor's
    "no reading" value and is always background.
    """
    depth = np.asarray(raw_depths).reshape((height, width))
    fg = (depth > 0) & (depth < threshold)
    return np.where(fg, WHITE, BLACK).astype(np.uint8)
