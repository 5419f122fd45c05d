"""Math helpers — constants, clipping, correlation. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy.stats import pearsonr

PHI = 1.6180339887498949
INV_PHI = 1.0 / PHI
# 360 / phi^2
GOLDEN_ANGLE_DEG = 137.50776405003785
GOLDEN_ANGLE_RAD = math.radians(GOLDEN_ANGLE_DEG)


def clip01(value: float) -> float:
    """Clamp to [0, 1]. Non-finite values map to 0."""
    if not math.isfinite(value):
        return 0.0
    return min(1.0, max(0.0, value))


def pearson(x: NDArray[np.float64], y: NDArray[np.float64]) -> float:
    """Pearson correlation, 0.0 when either side is constant or too short."""
    if len(x) != len(y) or len(x) < 2:
        return 0.0
    if float(np.ptp(x)) < 1e-12 or float(np.ptp(y)) < 1e-12:
        return 0.0
    corr = float(pearsonr(x, y).statistic)
    return corr if math.isfinite(corr) else 0.0
