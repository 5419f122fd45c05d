"""E.02 — Logarithmic Spiral Fit.

Linear fit of ln r against the unwrapped polar angle about the region's
center. Shells grow this way, so the fit is evidence for both the generic
Fibonacci spiral and the shell spiral.
"""

from __future__ import annotations

import math

from philens.engine.analyzer import logarithmic_spiral_score
from philens.engine.context import Evidence, RegionCandidate
from philens.engine.detection import MathProperties
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind, analyzer


@analyzer(
    id="E.02",
    geometry=GeometryKind.POLYLINE,
    patterns={PatternClass.SPIRAL_FIBONACCI, PatternClass.SHELL_SPIRAL},
    description="Correlation of polar angle with log radius",
)
def logarithmic_spiral(candidate: RegionCandidate) -> Evidence:
    fit = logarithmic_spiral_score(candidate.points, candidate.polar_center)
    # Only a strong fit counts as shell evidence.
    shell = fit.score if fit.is_logarithmic else 0.0
    scores = {PatternClass.SPIRAL_FIBONACCI: fit.score, PatternClass.SHELL_SPIRAL: shell}
    # Pitch: angle between the curve and the circle through the same point.
    pitch = math.degrees(math.atan(abs(fit.growth_rate)))
    return Evidence(
        "E.02",
        scores,
        MathProperties(growth_rate=round(fit.growth_rate, 4), spiral_angle=round(pitch, 2)),
    )
