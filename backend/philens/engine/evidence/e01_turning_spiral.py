"""E.01 — Turning Spiral.

Steady rotation of the contour's tangent plus growing distance from the
centroid. Cheapest spiral test; a closed circle scores about 0.5 because it
rotates without growing.
"""

from __future__ import annotations

from philens.engine.analyzer import spiral_score
from philens.engine.context import Evidence, RegionCandidate
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind, analyzer


@analyzer(
    id="E.01",
    geometry=GeometryKind.POLYLINE,
    patterns={PatternClass.SPIRAL_FIBONACCI},
    description="Turning-angle and radius-growth spiral score",
)
def turning_spiral(candidate: RegionCandidate) -> Evidence:
    score = spiral_score(candidate.points)
    return Evidence("E.01", {PatternClass.SPIRAL_FIBONACCI: score})
