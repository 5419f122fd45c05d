"""E.04 — Nautilus Chambers.

Radius jumps in polar order mark chambers; consistent, phi-sized growth
between them is the nautilus signature. Fewer than three chambers never
counts, whatever the score.
"""

from __future__ import annotations

from philens.engine.analyzer import nautilus_score
from philens.engine.context import Evidence, RegionCandidate
from philens.engine.detection import MathProperties
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind, analyzer
from philens.utils.math_helpers import PHI


@analyzer(
    id="E.04",
    geometry=GeometryKind.POLYLINE,
    patterns={PatternClass.NAUTILUS_SPIRAL},
    description="Chamber growth consistency and golden proportion",
)
def nautilus(candidate: RegionCandidate) -> Evidence:
    fit = nautilus_score(candidate.points, candidate.polar_center)
    score = fit.score if fit.is_nautilus else 0.0
    return Evidence(
        "E.04",
        {PatternClass.NAUTILUS_SPIRAL: score},
        MathProperties(
            phi_value=PHI,
            chamber_count=fit.chamber_count,
            growth_rate=round(fit.growth_rate, 4),
        ),
    )
