import numpy as np
import pytest

from depthfield.api.frame_data import Blob
from depthfield.input.force_sources import STRENGTH_MAX, STRENGTH_MIN, build_force_sources


def blob(vertices, x=(0.4, 0.6), y=(0.4, 0.6)):
    return Blob(x_min=x[0], x_max=x[1], y_min=y[0], y_max=y[1], vertex_count=vertices)


@pytest.fixture
def rng():
    return np.random.default_rng(7)


def test_centered_blob(rng):
    sources = build_force_sources([blob(60)], (1000, 1000), 50, rng)
    assert len(sources) == 1
    s = sources[0]
    assert (s.x, s.y) == (pytest.approx(500.0), pytest.approx(500.0))
    assert s.radius == pytest.approx(100.0)
    assert STRENGTH_MIN <= s.strength <= STRENGTH_MAX


def test_small_blob_is_dropped(rng):
    assert build_force_sources([blob(40)], (1000, 1000), 50, rng) == ()


def test_vertex_count_at_threshold_is_kept(rng):
    assert len(build_force_sources([blob(50)], (1000, 1000), 50, rng)) == 1


def test_non_square_screen():
    s = build_force_sources([blob(80, x=(0.0, 0.5), y=(0.5, 1.0))], (1280, 720), 50,
                            np.random.default_rng(0))[0]
    assert s.x == pytest.approx(320.0)
    assert s.y == pytest.approx(540.0)
    assert s.radius == pytest.approx((640 + 360) / 4.0)


def test_never_more_sources_than_blobs(rng):
    blobs = [blob(v) for v in (10, 49, 50, 51, 200, 3)]
    sources = build_force_sources(blobs, (640, 480), 50, rng)
    assert len(sources) == 3
    assert len(sources) <= len(blobs)


def test_strengths_are_repulsive_and_in_range():
    rng = np.random.default_rng(1)
    sources = build_force_sources([blob(60)] * 200, (100, 100), 50, rng)
    strengths = np.array([s.strength for s in sources])
    assert (strengths < 0).all()
    assert strengths.min() >= STRENGTH_MIN
    assert strengths.max() <= STRENGTH_MAX
    assert len(np.unique(strengths)) > 1


def test_seeded_generator_replays():
    blobs = [blob(60), blob(70, x=(0.1, 0.2))]
    a = build_force_sources(blobs, (800, 600), 50, np.random.default_rng(42))
    b = build_force_sources(blobs, (800, 600), 50, np.random.default_rng(42))
    assert a == b
