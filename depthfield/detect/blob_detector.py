from __future__ import annotations
from typing import List, Optional

import cv2
import numpy as np

from depthfield.api.frame_data import Blob

BLOB_COLOR = (0, 200, 255)
BBOX_COLOR = (0, 255, 0)


class BlobDetector:
    """
    Foreground mask -> (optional pre-scale, blur) -> external contours -> Blobs.

    Bounding boxes are normalized by the working (scaled) image size, so they can be
    mapped straight onto any screen size.
    """

    def __init__(self, prescale: float = 0.5, blur: bool = False, blur_radius: int = 5):
        self.prescale = prescale
        self.blur = blur
        self.blur_radius = blur_radius
        self.last_work: Optional[np.ndarray] = None

    def prepare(self, mask: np.ndarray) -> np.ndarray:
        work = mask
        if self.prescale and self.prescale != 1.0:
            h, w = mask.shape[:2]
            size = (max(1, int(round(w * self.prescale))), max(1, int(round(h * self.prescale))))
            work = cv2.resize(work, size, interpolation=cv2.INTER_NEAREST)
        if self.blur and self.blur_radius > 1:
            k = int(self.blur_radius)
            work = cv2.blur(work, (k, k))
            # back to a hard mask so contours stay stable
            _, work = cv2.threshold(work, 127, 255, cv2.THRESH_BINARY)
        return work

    def detect(self, mask: np.ndarray) -> List[Blob]:
        work = self.prepare(mask)
        self.last_work = work
        h, w = work.shape[:2]
        cnts, _ = cv2.findContours(work, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_NONE)

        blobs: List[Blob] = []
        for c in cnts:
            x, y, bw, bh = cv2.boundingRect(c)
            blobs.append(
                Blob(
                    x_min=x / float(w),
                    x_max=(x + bw) / float(w),
                    y_min=y / float(h),
                    y_max=(y + bh) / float(h),
                    vertex_count=len(c),
                    contour=c,
                )
            )
        return blobs


def draw_blobs(frame_bgr: np.ndarray, blobs: List[Blob], min_vertex_count: int = 0) -> np.ndarray:
    """Overlay contours and bounding boxes on a BGR copy of the frame (same size as the scaled mask)."""
    out = frame_bgr.copy()
    h, w = out.shape[:2]
    for b in blobs:
        color = BBOX_COLOR if b.vertex_count >= min_vertex_count else (90, 90, 90)
        if b.contour is not None:
            cv2.drawContours(out, [b.contour], -1, BLOB_COLOR, 1)
        p1 = (int(b.x_min * w), int(b.y_min * h))
        p2 = (int(b.x_max * w) - 1, int(b.y_max * h) - 1)
        cv2.rectangle(out, p1, p2, color, 1)
        cv2.putText(out, str(b.vertex_count), (p1[0], max(10, p1[1] - 4)),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.4, color, 1, cv2.LINE_AA)
    return out


class MaskPreview:
    """OpenCV window with the working mask and, optionally, blob outlines."""

    def __init__(self, name: str = "Depth Mask"):
        self.name = name
        self._open = False

    def show(self, mask: np.ndarray, blobs: List[Blob], draw: bool, min_vertex_count: int,
             threshold: int) -> None:
        if not self._open:
            cv2.namedWindow(self.name, cv2.WINDOW_NORMAL)
            cv2.resizeWindow(self.name, 640, 360)
            self._open = True
        frame = cv2.cvtColor(mask, cv2.COLOR_GRAY2BGR)
        if draw:
            frame = draw_blobs(frame, blobs, min_vertex_count)
        cv2.putText(frame, f"threshold {threshold}", (8, 16),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.45, (255, 255, 255), 1, cv2.LINE_AA)
        cv2.imshow(self.name, frame)
        cv2.waitKey(1)

    def hide(self) -> None:
        if self._open:
            cv2.destroyWindow(self.name)
            self._open = False

    def teardown(self) -> None:
        self.hide()
        cv2.destroyAllWindows()
