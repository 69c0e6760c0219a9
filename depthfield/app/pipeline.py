from __future__ import annotations
import logging
import time
from typing import Callable, Iterable, List, Optional

import numpy as np

from depthfield.api.config import FieldConfig
from depthfield.api.frame_data import Blob, ForceSource, FrameData
from depthfield.detect.blob_detector import BlobDetector
from depthfield.detect.depth_threshold import threshold_depth
from depthfield.input.force_sources import build_force_sources
from depthfield.input.idle_injector import IdleForceInjector, monotonic_ms

log = logging.getLogger(__name__)


class FramePipeline:
    """
    depth buffer -> mask -> blobs -> force sources (+ idle wander, + extra sources).

    Reads the tunables from `cfg` on every call, so keyboard changes land on the
    next frame. Every call returns a brand new tuple of sources.
    """

    def __init__(
        self,
        cfg: FieldConfig,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], float] = monotonic_ms,
        detector: Optional[BlobDetector] = None,
        idle: Optional[IdleForceInjector] = None,
    ):
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.clock = clock
        self.detector = detector or BlobDetector(cfg.prescale, cfg.blur, cfg.blur_radius)
        self.idle = idle or IdleForceInjector(
            screen_size=cfg.screen_size,
            timeout_ms=cfg.idle_timeout_ms,
            radius=cfg.idle_radius,
            strength=cfg.idle_strength,
            rng=self.rng,
            clock=clock,
        )

        self.last_mask: Optional[np.ndarray] = None
        self.last_blobs: List[Blob] = []
        self._was_connected: Optional[bool] = None

    def _sync_detector(self) -> None:
        self.detector.prescale = self.cfg.prescale
        self.detector.blur = self.cfg.blur
        self.detector.blur_radius = self.cfg.blur_radius

    def detect(self, depth: np.ndarray) -> List[Blob]:
        self._sync_detector()
        h, w = depth.shape[:2]
        mask = threshold_depth(depth, w, h, self.cfg.depth_threshold)
        self.last_mask = mask
        return self.detector.detect(mask)

    def process(self, depth_source, extra_sources: Iterable[ForceSource] = ()) -> FrameData:
        now = self.clock()

        connected = depth_source is not None and depth_source.is_connected()
        if connected != self._was_connected:
            if not connected:
                log.warning("No depth camera connected; running idle wander only")
            self._was_connected = connected

        blobs: List[Blob] = []
        if connected:
            depth = depth_source.latest_depth()
            if depth is not None:
                blobs = self.detect(depth)
        self.last_blobs = blobs

        # idle check sees the previous activity time, so the frame a person
        # walks back in still carries the wander source
        wander = self.idle.inject(now)
        self.idle.note_blobs(blobs, now)
        from_blobs = build_force_sources(
            blobs, self.cfg.screen_size, self.cfg.min_vertex_count, self.rng)

        return FrameData(
            timestamp=time.time(),
            force_sources=from_blobs + wander + tuple(extra_sources),
            blob_count=len(blobs),
            source_count=len(from_blobs),
            idle=bool(wander),
        )
