"""Tests for math and geometry helpers."""

import math

import numpy as np
import pytest

from philens.utils.geometry import (
    as_points,
    downsample_points,
    rect_intersection_area,
    smooth_points,
    to_polar,
    turning_angles,
)
from philens.utils.math_helpers import (
    GOLDEN_ANGLE_DEG,
    PHI,
    clip01,
    pearson,
)


def test_constants():
    assert PHI == pytest.approx((1 + math.sqrt(5)) / 2)
    assert GOLDEN_ANGLE_DEG == pytest.approx(360 / PHI**2)


def test_clip01():
    assert clip01(1.5) == 1.0
    assert clip01(-1.0) == 0.0
    assert clip01(math.nan) == 0.0
    assert clip01(0.25) == 0.25


def test_pearson_constant_side():
    x = np.arange(5, dtype=float)
    assert pearson(x, np.ones(5)) == 0.0
    assert pearson(x, 2 * x + 1) == pytest.approx(1.0)


def test_as_points_copies():
    src = np.array([[1.0, 2.0], [3.0, 4.0]])
    pts = as_points(src)
    pts[0, 0] = 99.0
    assert src[0, 0] == 1.0
    assert as_points([]).shape == (0, 2)


def test_to_polar_about_center():
    r, theta = to_polar(np.array([[11.0, 10.0], [10.0, 12.0]]), (10.0, 10.0))
    np.testing.assert_allclose(r, [1.0, 2.0])
    np.testing.assert_allclose(theta, [0.0, math.pi / 2])


def test_turning_angles_wrap():
    square = np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]], dtype=float)
    np.testing.assert_allclose(turning_angles(square), [math.pi / 2] * 3)


def test_rect_intersection_area():
    assert rect_intersection_area((0, 0, 10, 10), (5, 5, 15, 15)) == 25
    assert rect_intersection_area((0, 0, 10, 10), (20, 20, 30, 30)) == 0


def test_downsample_keeps_order():
    pts = np.column_stack([np.arange(1000.0), np.zeros(1000)])
    out = downsample_points(pts, 100)
    assert len(out) == 100
    assert np.all(np.diff(out[:, 0]) > 0)
    assert len(downsample_points(pts[:50], 100)) == 50


def test_smooth_points_preserves_line_interior():
    pts = np.column_stack([np.arange(10.0), np.arange(10.0)])
    smoothed = smooth_points(pts, 3)
    assert smoothed.shape == pts.shape
    np.testing.assert_allclose(smoothed[1:-1], pts[1:-1])


def test_pearson_matches_manual_correlation():
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([2.0, 1.0, 4.0, 3.0, 5.0])
    expected = np.corrcoef(x, y)[0, 1]
    assert pearson(x, y) == pytest.approx(expected)
    assert pearson(x, y[:3]) == 0.0
