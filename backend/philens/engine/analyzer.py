"""Geometric scoring functions — pure, deterministic, never mutate their inputs.

Every function returns a score in [0, 1]. Degenerate input (too few points,
non-finite coordinates, zero-size geometry) scores 0 instead of raising.
Polar quantities are always taken about an explicit center; when the caller
passes none, the centroid of the points is used.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.stats import linregress

from philens.engine.detection import Rectangle
from philens.utils.geometry import (
    all_finite,
    as_points,
    centroid,
    centroid_distances,
    drop_repeated,
    to_polar,
    turning_angles,
)
from philens.utils.math_helpers import (
    GOLDEN_ANGLE_RAD,
    INV_PHI,
    PHI,
    clip01,
    pearson,
)

# Minimum point counts below which a score is meaningless.
MIN_SPIRAL_POINTS = 11
MIN_LOG_SPIRAL_POINTS = 11
MIN_NAUTILUS_POINTS = 21
MIN_PHYLLOTAXIS_POINTS = 6
MIN_SEQUENCE_LENGTH = 3
MIN_CHAMBERS = 3

# Mean per-segment turn (rad) at which the rotation term saturates.
# pi/12 = 15 deg per segment = 24 segments per full turn.
_TURN_SATURATION = math.pi / 12
# golden_ratio_score falls to 0 at this distance from phi.
_GOLDEN_TOLERANCE = 0.1
# A chamber boundary is a radius jump > 10% over the running chamber radius.
_CHAMBER_JUMP = 0.10
# Chamber-to-chamber ratio counted as golden within this distance.
_CHAMBER_GOLDEN_TOLERANCE = 0.15
# Phyllotaxis gap tolerance around the golden angle (rad).
_GOLDEN_ANGLE_TOLERANCE = 0.1
# |corr(theta, ln r)| above this is a strong logarithmic fit.
_LOG_FIT_STRONG = 0.8
_NAUTILUS_ACCEPT = 0.7
_PHYLLOTAXIS_ACCEPT = 0.6
_SEQUENCE_ACCEPT = 0.7

_EPS = 1e-9


class LogSpiralFit(NamedTuple):
    score: float
    growth_rate: float

    @property
    def is_logarithmic(self) -> bool:
        return self.score > _LOG_FIT_STRONG


class NautilusFit(NamedTuple):
    score: float
    chamber_count: int
    growth_rate: float

    @property
    def is_nautilus(self) -> bool:
        return self.score > _NAUTILUS_ACCEPT and self.chamber_count >= MIN_CHAMBERS


class PhyllotaxisFit(NamedTuple):
    score: float
    angle_deg: float

    @property
    def is_phyllotaxis(self) -> bool:
        return self.score > _PHYLLOTAXIS_ACCEPT


class SequenceFit(NamedTuple):
    score: float
    matched: tuple[int, ...]

    @property
    def is_fibonacci(self) -> bool:
        return self.score > _SEQUENCE_ACCEPT


def _coerce(points) -> NDArray[np.float64] | None:
    """Nx2 copy of the points, or None when they do not form one."""
    try:
        return as_points(points)
    except (TypeError, ValueError):
        return None


def _resolve_center(points, center) -> tuple[float, float] | None:
    if center is None:
        return centroid(points)
    try:
        cx, cy = float(center[0]), float(center[1])
    except (IndexError, TypeError, ValueError):
        return None
    if not (math.isfinite(cx) and math.isfinite(cy)):
        return None
    return (cx, cy)


def spiral_score(points: Sequence[Sequence[float]]) -> float:
    """Spiral signature of an ordered polyline.

    Rotation term: magnitude of the mean *signed* turn between consecutive
    segments, so steady rotation in either direction scores while zig-zag
    cancels out. Radius term: trend of the
    radius-from-centroid along the path, i.e. whether successive radius
    differences are predominantly positive. The two are averaged.
    """
    pts = _coerce(points)
    if pts is None or len(pts) < MIN_SPIRAL_POINTS or not all_finite(pts):
        return 0.0
    pts = drop_repeated(pts)
    if len(pts) < MIN_SPIRAL_POINTS:
        return 0.0

    turns = turning_angles(pts)
    rotation = clip01(abs(float(np.mean(turns))) / _TURN_SATURATION)

    radii = centroid_distances(pts)
    growth = clip01(pearson(np.arange(len(radii), dtype=np.float64), radii))

    return min(1.0, (rotation + growth) / 2.0)


def logarithmic_spiral_score(
    points: Sequence[Sequence[float]],
    center: Sequence[float] | None = None,
) -> LogSpiralFit:
    """Fit ln r = ln a + b * theta about ``center``.

    Score is |corr(theta, ln r)| with theta unwrapped along the polyline;
    growth_rate is the fitted b (radians^-1).
    """
    pts = _coerce(points)
    if pts is None or len(pts) < MIN_LOG_SPIRAL_POINTS or not all_finite(pts):
        return LogSpiralFit(0.0, 0.0)
    c = _resolve_center(pts, center)
    if c is None:
        return LogSpiralFit(0.0, 0.0)

    r, theta = to_polar(pts, c)
    mask = r > _EPS
    if int(mask.sum()) < MIN_LOG_SPIRAL_POINTS:
        return LogSpiralFit(0.0, 0.0)
    theta = np.unwrap(theta[mask])
    log_r = np.log(r[mask])
    if float(np.ptp(theta)) < _EPS:
        return LogSpiralFit(0.0, 0.0)

    fit = linregress(theta, log_r)
    corr = float(fit.rvalue)
    if not math.isfinite(corr):
        return LogSpiralFit(0.0, 0.0)
    return LogSpiralFit(clip01(abs(corr)), float(fit.slope))


def golden_ratio_score(ratio: float) -> float:
    """1.0 at phi (or 1/phi), falling linearly to 0 at 0.1 away.

    The ratio is taken in its >= 1 orientation first, so r and 1/r score alike.
    """
    try:
        value = float(ratio)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value <= 0:
        return 0.0
    if value < 1.0:
        value = 1.0 / value
    diff = min(abs(value - PHI), abs(value - INV_PHI))
    return max(0.0, 1.0 - diff / _GOLDEN_TOLERANCE)


def rectangle_golden_score(rect: Rectangle) -> float:
    """golden_ratio_score of the rectangle's aspect ratio; 0 for zero-area boxes."""
    if rect.is_degenerate:
        return 0.0
    return golden_ratio_score(rect.aspect_ratio)


def is_golden_ratio(ratio: float, tolerance: float = 0.05) -> bool:
    if not math.isfinite(ratio):
        return False
    return min(abs(ratio - PHI), abs(ratio - INV_PHI)) < tolerance


def nautilus_score(
    points: Sequence[Sequence[float]],
    center: Sequence[float] | None = None,
) -> NautilusFit:
    """Chambered-spiral score.

    Points are walked in polar-angle order; a new chamber starts wherever the
    radius exceeds the running chamber radius by more than 10%. With at least
    three chambers the score averages (a) how consistent the chamber-to-chamber
    growth ratios are together with how close their mean is to phi, and (b) the
    share of ratios that are individually golden.
    """
    pts = _coerce(points)
    if pts is None or len(pts) < MIN_NAUTILUS_POINTS or not all_finite(pts):
        return NautilusFit(0.0, 0, 0.0)
    c = _resolve_center(pts, center)
    if c is None:
        return NautilusFit(0.0, 0, 0.0)

    r, theta = to_polar(pts, c)
    mask = r > _EPS
    if not mask.any():
        return NautilusFit(0.0, 0, 0.0)
    order = np.argsort(theta[mask], kind="stable")
    radii = r[mask][order]

    chambers: list[float] = []
    current = float(radii[0])
    for value in radii[1:]:
        if value - current > _CHAMBER_JUMP * current:
            chambers.append(current)
            current = float(value)
    chambers.append(current)

    count = len(chambers)
    if count < MIN_CHAMBERS:
        return NautilusFit(0.0, count, 0.0)

    arr = np.asarray(chambers)
    ratios = arr[1:] / arr[:-1]
    mean_ratio = float(np.mean(ratios))
    consistency = 1.0 / (1.0 + float(np.var(ratios)))
    proximity = max(0.0, 1.0 - abs(mean_ratio - PHI) / PHI)
    growth_term = (consistency + proximity) / 2.0
    golden_share = sum(
        1 for q in ratios if is_golden_ratio(float(q), _CHAMBER_GOLDEN_TOLERANCE)
    ) / len(ratios)

    return NautilusFit(clip01((growth_term + golden_share) / 2.0), count, mean_ratio)


def phyllotaxis_score(
    points: Sequence[Sequence[float]],
    center: Sequence[float] | None = None,
) -> PhyllotaxisFit:
    """Share of consecutive polar-angle gaps within 0.1 rad of the golden angle.

    angle_deg is the mean matching gap in degrees (0.0 when none match).
    """
    pts = _coerce(points)
    if pts is None or len(pts) < MIN_PHYLLOTAXIS_POINTS or not all_finite(pts):
        return PhyllotaxisFit(0.0, 0.0)
    c = _resolve_center(pts, center)
    if c is None:
        return PhyllotaxisFit(0.0, 0.0)

    r, theta = to_polar(pts, c)
    angles = np.sort(theta[r > _EPS])
    if len(angles) < MIN_PHYLLOTAXIS_POINTS:
        return PhyllotaxisFit(0.0, 0.0)

    gaps = np.diff(angles)
    matched = np.abs(gaps - GOLDEN_ANGLE_RAD) < _GOLDEN_ANGLE_TOLERANCE
    score = float(matched.sum()) / len(gaps)
    angle = float(np.degrees(np.mean(gaps[matched]))) if matched.any() else 0.0
    return PhyllotaxisFit(score, angle)


def fibonacci_sequence_score(integers: Sequence[int]) -> SequenceFit:
    """Share of positions i >= 2 with a[i] == a[i-1] + a[i-2].

    matched is the run of values taking part in the matches, in input order.
    """
    try:
        values = [int(v) for v in integers]
    except (TypeError, ValueError, OverflowError):
        return SequenceFit(0.0, ())
    n = len(values)
    if n < MIN_SEQUENCE_LENGTH:
        return SequenceFit(0.0, ())

    matches = 0
    matched: list[int] = []
    for i in range(2, n):
        if values[i] == values[i - 1] + values[i - 2]:
            matches += 1
            if not matched:
                matched = values[i - 2 : i + 1]
            else:
                matched.append(values[i])

    return SequenceFit(matches / (n - 2), tuple(matched))
