"""
Lattice of dot particles, each tied to its own fixed anchor by a zero-length spring.

State (N dots):
- pos, vel: Nx2 in screen pixels, pixels / step
- mass, radius: N

Per step:
- forces: pending collision push + force sources + anchor springs
- integrate: explicit Euler with multiplicative friction
- collisions: soft-circle overlap push, stored for the next step

Anchors are locked; they are only spring targets and are not part of
pos/vel, so they are never drawn, collided or pushed.
"""

from __future__ import annotations
import logging
from typing import Iterable, Tuple

import numpy as np

from depthfield.api.frame_data import ForceSource

log = logging.getLogger(__name__)

_NEIGHBOR_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)]


class ParticleGrid:
    def __init__(
        self,
        screen_size: Tuple[int, int],
        cols: int = 50,
        rows: int = 50,
        friction: float = 0.05,
        spring_stiffness: float = 0.0003,
        dot_radius: float = 4.0,
        dot_mass: float = 1.0,
        collision_stiffness: float = 0.5,
    ):
        self.screen_size = screen_size
        self.cols = cols
        self.rows = rows
        self.friction = friction
        self.spring_stiffness = spring_stiffness
        self.collision_stiffness = collision_stiffness

        w, h = screen_size
        xs = (np.arange(cols) + 0.5) * (w / float(cols))
        ys = (np.arange(rows) + 0.5) * (h / float(rows))
        gx, gy = np.meshgrid(xs, ys)
        self._anchors = np.stack([gx.ravel(), gy.ravel()], axis=1).astype(np.float64)

        n = self._anchors.shape[0]
        self.mass = np.full(n, float(dot_mass))
        self.radius = np.full(n, float(dot_radius))
        self.reset()

        log.debug("Particle grid %dx%d (%d dots) on %dx%d", cols, rows, n, w, h)

    def reset(self) -> None:
        """Put every dot back on its anchor, at rest."""
        self.pos = self._anchors.copy()
        self.vel = np.zeros_like(self.pos)
        self._pending = np.zeros_like(self.pos)

    def __len__(self) -> int:
        return self.pos.shape[0]

    @property
    def anchors(self) -> np.ndarray:
        return self._anchors.copy()

    @property
    def positions(self) -> np.ndarray:
        return self.pos

    @property
    def velocities(self) -> np.ndarray:
        return self.vel

    def speeds(self) -> np.ndarray:
        return np.hypot(self.vel[:, 0], self.vel[:, 1])

    # -----------------------------
    # Step
    # -----------------------------

    def advance(self, force_sources: Iterable[ForceSource]) -> None:
        force = self._pending
        for src in force_sources:
            self._apply_source(force, src)
        force += self.spring_stiffness * (self._anchors - self.pos)

        vel = self.vel + force / self.mass[:, None]
        vel *= (1.0 - self.friction)
        pos = self.pos + vel

        self.pos = pos
        self.vel = vel
        self._pending = self._collision_forces()

    def _apply_source(self, force: np.ndarray, src: ForceSource) -> None:
        """
        Radial attraction with a smooth falloff inside the source radius:
        f = unit(src - p) * (1 - d^2 / r^2) * strength, so negative strength pushes away.
        """
        r2 = float(src.radius) * float(src.radius)
        if r2 <= 0:
            return
        d = np.array([src.x, src.y]) - self.pos
        d2 = d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1]
        inside = d2 < r2
        if not np.any(inside):
            return

        dist = np.sqrt(d2[inside])
        # a dot sitting exactly on the source gets no direction
        dirn = d[inside] / np.maximum(dist, 1e-9)[:, None]
        mag = (1.0 - d2[inside] / r2) * src.strength
        force[inside] += dirn * mag[:, None]

    # -----------------------------
    # Collisions
    # -----------------------------

    def _candidate_pairs(self, cell_size: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Uniform-grid neighbour search: every (i, j), i < j, whose cells touch.
        """
        n = self.pos.shape[0]
        cell = np.floor(self.pos / cell_size).astype(np.int64)
        cell -= cell.min(axis=0)
        # +1 border on each axis so neighbour offsets never wrap into another column
        stride = int(cell[:, 1].max()) + 3
        keys = (cell[:, 0] + 1) * stride + (cell[:, 1] + 1)

        order = np.argsort(keys, kind="stable")
        sorted_keys = keys[order]
        idx = np.arange(n)

        left, right = [], []
        for dx, dy in _NEIGHBOR_OFFSETS:
            nk = keys + dx * stride + dy
            lo = np.searchsorted(sorted_keys, nk, side="left")
            hi = np.searchsorted(sorted_keys, nk, side="right")
            counts = hi - lo
            total = int(counts.sum())
            if total == 0:
                continue
            i = np.repeat(idx, counts)
            offs = np.arange(total) - np.repeat(np.cumsum(counts) - counts, counts)
            j = order[np.repeat(lo, counts) + offs]
            keep = i < j
            left.append(i[keep])
            right.append(j[keep])

        if not left:
            empty = np.zeros(0, dtype=np.int64)
            return empty, empty
        return np.concatenate(left), np.concatenate(right)

    def _collision_forces(self) -> np.ndarray:
        out = np.zeros_like(self.pos)
        if self.pos.shape[0] < 2 or self.collision_stiffness <= 0:
            return out
        reach = 2.0 * float(self.radius.max())
        if reach <= 0:
            return out

        i, j = self._candidate_pairs(reach)
        if i.size == 0:
            return out

        d = self.pos[j] - self.pos[i]
        dist = np.hypot(d[:, 0], d[:, 1])
        overlap = self.radius[i] + self.radius[j] - dist
        hit = overlap > 0
        if not np.any(hit):
            return out

        i, j, d, dist, overlap = i[hit], j[hit], d[hit], dist[hit], overlap[hit]
        dirn = d / np.maximum(dist, 1e-9)[:, None]
        push = dirn * (self.collision_stiffness * overlap)[:, None]
        np.add.at(out, i, -push)
        np.add.at(out, j, push)
        return out
