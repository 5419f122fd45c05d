"""Tests for the geometric scoring functions."""

from __future__ import annotations

import math

import numpy as np
import pytest

from philens.engine.analyzer import (
    fibonacci_sequence_score,
    golden_ratio_score,
    is_golden_ratio,
    logarithmic_spiral_score,
    nautilus_score,
    phyllotaxis_score,
    rectangle_golden_score,
    spiral_score,
)
from philens.engine.detection import Rectangle
from philens.utils.math_helpers import INV_PHI, PHI
from tests.conftest import circle_points, logarithmic_spiral, nautilus_points


# ── spiral_score ──


def test_spiral_scores_log_spiral_high():
    pts = logarithmic_spiral((200.0, 200.0), 5.0, 3, 60)
    assert spiral_score(pts) > 0.6


def test_spiral_scores_straight_line_low():
    pts = np.column_stack([np.linspace(0, 100, 30), np.linspace(0, 50, 30)])
    assert spiral_score(pts) < 0.1


def test_spiral_scores_circle_about_half():
    # Rotates steadily without growing
    assert spiral_score(circle_points(n=20)) == pytest.approx(0.5, abs=0.05)


def test_spiral_zigzag_cancels_rotation():
    xs = np.arange(30, dtype=float) * 10
    ys = np.where(np.arange(30) % 2 == 0, 0.0, 10.0)
    assert spiral_score(np.column_stack([xs, ys])) < 0.3


def test_spiral_direction_does_not_matter():
    pts = logarithmic_spiral((200.0, 200.0), 5.0, 3, 60)
    mirrored = pts * np.array([1.0, -1.0])
    assert spiral_score(mirrored) == pytest.approx(spiral_score(pts))


def test_spiral_too_few_points():
    pts = logarithmic_spiral((0.0, 0.0), 5.0, 1, 10)
    assert spiral_score(pts) == 0.0


def test_spiral_non_finite_input():
    pts = logarithmic_spiral((0.0, 0.0), 5.0, 3, 60)
    pts[5, 0] = np.nan
    assert spiral_score(pts) == 0.0


def test_spiral_does_not_mutate_input():
    pts = logarithmic_spiral((0.0, 0.0), 5.0, 3, 60)
    before = pts.copy()
    spiral_score(pts)
    np.testing.assert_array_equal(pts, before)


def test_spiral_empty():
    assert spiral_score([]) == 0.0


# ── logarithmic_spiral_score ──


def test_log_spiral_about_true_center():
    pts = logarithmic_spiral((0.0, 0.0), 10.0, 2, 80)
    fit = logarithmic_spiral_score(pts, center=(0.0, 0.0))
    assert fit.score == pytest.approx(1.0, abs=1e-6)
    assert fit.growth_rate == pytest.approx(math.log(PHI) / (2 * math.pi), rel=1e-6)
    assert fit.is_logarithmic


def test_log_spiral_too_few_points():
    pts = logarithmic_spiral((0.0, 0.0), 10.0, 1, 8)
    assert logarithmic_spiral_score(pts, (0.0, 0.0)) == (0.0, 0.0)


def test_log_spiral_all_points_at_center():
    pts = np.zeros((20, 2))
    fit = logarithmic_spiral_score(pts, (0.0, 0.0))
    assert fit.score == 0.0
    assert not fit.is_logarithmic


def test_log_spiral_non_finite_center():
    pts = logarithmic_spiral((0.0, 0.0), 10.0, 2, 80)
    assert logarithmic_spiral_score(pts, (math.inf, 0.0)).score == 0.0


# ── golden_ratio_score ──


def test_golden_ratio_exact():
    assert golden_ratio_score(1.618033988749895) == pytest.approx(1.0)


def test_golden_ratio_far_off():
    assert golden_ratio_score(1.5) == 0.0


def test_golden_ratio_symmetric_under_inversion():
    for r in (1.55, 1.6, 1.65, 1.7, 2.0):
        assert golden_ratio_score(r) == pytest.approx(golden_ratio_score(1.0 / r))


def test_golden_ratio_inverse_phi():
    assert golden_ratio_score(INV_PHI) == pytest.approx(1.0)


def test_golden_ratio_linear_falloff():
    assert golden_ratio_score(PHI + 0.05) == pytest.approx(0.5)


@pytest.mark.parametrize("ratio", [0.0, -1.0, math.nan, math.inf, "abc", None])
def test_golden_ratio_degenerate(ratio):
    assert golden_ratio_score(ratio) == 0.0


def test_rectangle_golden_either_orientation():
    assert rectangle_golden_score(Rectangle(0, 0, 161.8, 100)) > 0.95
    assert rectangle_golden_score(Rectangle(0, 0, 100, 161.8)) > 0.95


def test_rectangle_golden_zero_area():
    assert rectangle_golden_score(Rectangle(0, 0, 0, 100)) == 0.0


def test_is_golden_ratio():
    assert is_golden_ratio(1.62)
    assert is_golden_ratio(0.62)
    assert not is_golden_ratio(1.5)
    assert not is_golden_ratio(math.nan)


# ── nautilus_score ──


def test_nautilus_phi_chambers():
    fit = nautilus_score(nautilus_points(), center=(0.0, 0.0))
    assert fit.chamber_count == 5
    assert fit.growth_rate == pytest.approx(PHI)
    assert fit.score == pytest.approx(1.0)
    assert fit.is_nautilus


def test_nautilus_circle_has_one_chamber():
    fit = nautilus_score(circle_points(), center=(0.0, 0.0))
    assert fit.chamber_count == 1
    assert fit.score == 0.0
    assert not fit.is_nautilus


def test_nautilus_too_few_points():
    pts = nautilus_points(chambers=3, per_chamber=5)
    assert nautilus_score(pts, (0.0, 0.0)).score == 0.0


def test_nautilus_default_center_is_centroid():
    pts = nautilus_points(center=(300.0, 300.0))
    fit = nautilus_score(pts)
    assert fit.chamber_count >= 1
    assert 0.0 <= fit.score <= 1.0


# ── phyllotaxis_score ──


def _at_angles(degrees, radii=(10.0, 20.0)):
    return np.array(
        [
            (r * math.cos(math.radians(a)), r * math.sin(math.radians(a)))
            for a in degrees
            for r in radii
        ]
    )


def test_phyllotaxis_golden_gaps():
    fit = phyllotaxis_score(_at_angles([-150.0, -12.5, 125.0]), center=(0.0, 0.0))
    assert fit.score == pytest.approx(0.4)
    assert fit.angle_deg == pytest.approx(137.5, abs=0.01)


def test_phyllotaxis_even_spacing_scores_zero():
    pts = _at_angles([0, 45, 90, 135, 180, -45, -90, -135], radii=(10.0,))
    fit = phyllotaxis_score(pts, center=(0.0, 0.0))
    assert fit.score == 0.0
    assert fit.angle_deg == 0.0
    assert not fit.is_phyllotaxis


def test_phyllotaxis_too_few_points():
    pts = _at_angles([0, 137.5], radii=(10.0,))
    assert phyllotaxis_score(pts, (0.0, 0.0)).score == 0.0


# ── fibonacci_sequence_score ──


def test_fibonacci_sequence_perfect():
    fit = fibonacci_sequence_score([1, 1, 2, 3, 5, 8, 13])
    assert fit.score == 1.0
    assert fit.matched == (1, 1, 2, 3, 5, 8, 13)
    assert fit.is_fibonacci


def test_fibonacci_sequence_powers_of_two():
    fit = fibonacci_sequence_score([1, 2, 4, 8, 16])
    assert fit.score == 0.0
    assert fit.matched == ()


def test_fibonacci_sequence_partial():
    fit = fibonacci_sequence_score([2, 3, 5, 7])
    assert fit.score == pytest.approx(0.5)
    assert fit.matched == (2, 3, 5)
    assert not fit.is_fibonacci


def test_fibonacci_sequence_too_short():
    assert fibonacci_sequence_score([1, 1]).score == 0.0


def test_fibonacci_sequence_not_integers():
    assert fibonacci_sequence_score(["a", "b", "c"]).score == 0.0


# ── malformed geometry ──


@pytest.mark.parametrize(
    "scorer",
    [
        spiral_score,
        lambda pts: logarithmic_spiral_score(pts).score,
        lambda pts: nautilus_score(pts).score,
        lambda pts: phyllotaxis_score(pts).score,
    ],
)
def test_ragged_points_score_zero(scorer):
    assert scorer([[0.0, 0.0], [1.0]]) == 0.0
    assert scorer([[0.0, 0.0, 0.0]]) == 0.0
    assert scorer([["a", "b"], ["c", "d"]]) == 0.0


def test_short_center_scores_zero():
    pts = logarithmic_spiral((0.0, 0.0), 5.0, 3, 60)
    assert logarithmic_spiral_score(pts, center=(1.0,)).score == 0.0
    assert nautilus_score(nautilus_points(), center=()).score == 0.0
    assert phyllotaxis_score(circle_points(), center="x").score == 0.0
