from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import cv2
import numpy as np

log = logging.getLogger(__name__)


class KinectDepthCamera:
    """
    Kinect 2 depth stream through OpenCV's OpenNI2 backend (libfreenect2 OpenNI2 driver).

    latest_depth() returns a (H, W) uint16 array in millimetres. If the sensor has
    nothing new, the previous buffer is handed back; None until the first frame.
    """

    def __init__(self, index: int = 0):
        self.index = index
        self.cap: Optional[cv2.VideoCapture] = None
        self._last: Optional[np.ndarray] = None

    def open(self) -> bool:
        self.cap = cv2.VideoCapture(cv2.CAP_OPENNI2 + self.index)
        if not self.cap.isOpened():
            log.warning("Kinect (OpenNI2 index %d) not available", self.index)
            self.cap.release()
            self.cap = None
            return False
        w = int(self.cap.get(cv2.CAP_OPENNI_DEPTH_GENERATOR + cv2.CAP_PROP_FRAME_WIDTH))
        h = int(self.cap.get(cv2.CAP_OPENNI_DEPTH_GENERATOR + cv2.CAP_PROP_FRAME_HEIGHT))
        log.info("Kinect depth stream opened: %dx%d", w, h)
        return True

    def is_connected(self) -> bool:
        return self.cap is not None and self.cap.isOpened()

    def latest_depth(self) -> Optional[np.ndarray]:
        if not self.is_connected():
            return None
        if not self.cap.grab():
            return self._last
        ok, depth = self.cap.retrieve(flag=cv2.CAP_OPENNI_DEPTH_MAP)
        if ok and depth is not None:
            self._last = np.ascontiguousarray(depth)
        return self._last

    def close(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None


class ReplayDepthSource:
    """
    Plays back recorded depth frames from a .npy file, looping forever.
    Accepts a single (H, W) frame or a (N, H, W) stack.
    """

    def __init__(self, source: Union[str, Path, np.ndarray]):
        self.source = source
        self.frames: Optional[np.ndarray] = None
        self._i = 0

    def open(self) -> bool:
        if isinstance(self.source, np.ndarray):
            frames = self.source
        else:
            path = Path(self.source)
            if not path.exists():
                log.warning("Replay file %s not found", path)
                return False
            frames = np.load(path)
        if frames.ndim == 2:
            frames = frames[None, :, :]
        if frames.ndim != 3 or frames.shape[0] == 0:
            raise ValueError(f"Replay depth must be (H, W) or (N, H, W), got {frames.shape}")
        self.frames = frames
        self._i = 0
        log.info("Replaying %d depth frame(s) of %dx%d", frames.shape[0], frames.shape[2], frames.shape[1])
        return True

    def is_connected(self) -> bool:
        return self.frames is not None

    def latest_depth(self) -> Optional[np.ndarray]:
        if self.frames is None:
            return None
        frame = self.frames[self._i]
        self._i = (self._i + 1) % self.frames.shape[0]
        return frame

    @property
    def size(self) -> Tuple[int, int]:
        if self.frames is None:
            return 0, 0
        return self.frames.shape[2], self.frames.shape[1]

    def close(self) -> None:
        self.frames = None
