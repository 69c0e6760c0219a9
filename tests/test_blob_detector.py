import numpy as np
import pytest

from depthfield.detect.blob_detector import BlobDetector, draw_blobs


def square_mask():
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[30:70, 20:60] = 255
    return mask


def test_single_square_full_scale():
    blobs = BlobDetector(prescale=1.0).detect(square_mask())
    assert len(blobs) == 1
    b = blobs[0]
    assert b.x_min == pytest.approx(0.2)
    assert b.x_max == pytest.approx(0.6)
    assert b.y_min == pytest.approx(0.3)
    assert b.y_max == pytest.approx(0.7)
    assert b.vertex_count > 50


def test_prescale_keeps_normalized_box():
    det = BlobDetector(prescale=0.5)
    blobs = det.detect(square_mask())
    assert det.last_work.shape == (50, 50)
    assert len(blobs) == 1
    b = blobs[0]
    assert (b.x_min, b.x_max) == (pytest.approx(0.2), pytest.approx(0.6))
    assert (b.y_min, b.y_max) == (pytest.approx(0.3), pytest.approx(0.7))


def test_prescale_reduces_vertex_count():
    full = BlobDetector(prescale=1.0).detect(square_mask())[0]
    half = BlobDetector(prescale=0.5).detect(square_mask())[0]
    assert half.vertex_count < full.vertex_count


def test_two_separate_regions():
    mask = np.zeros((80, 120), dtype=np.uint8)
    mask[10:30, 10:30] = 255
    mask[40:70, 70:110] = 255
    blobs = BlobDetector(prescale=1.0).detect(mask)
    assert len(blobs) == 2


def test_empty_mask_has_no_blobs():
    assert BlobDetector().detect(np.zeros((40, 40), dtype=np.uint8)) == []


def test_blur_removes_single_pixel_speckle():
    mask = square_mask()
    mask[5, 90] = 255
    assert len(BlobDetector(prescale=1.0).detect(mask)) == 2
    assert len(BlobDetector(prescale=1.0, blur=True, blur_radius=5).detect(mask)) == 1


def test_draw_blobs_does_not_touch_input():
    det = BlobDetector(prescale=1.0)
    blobs = det.detect(square_mask())
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    out = draw_blobs(frame, blobs)
    assert not frame.any()
    assert out.any()
