"""E.05 — Phyllotaxis.

Golden-angle gaps between elements arranged around a center. Which botanical
class the arrangement counts for depends on the extractor that grouped the
elements: round heads (circle finder) are sunflowers, object groups (scales)
are pinecones, anything else is a leaf arrangement.
"""

from __future__ import annotations

from philens.engine.analyzer import phyllotaxis_score
from philens.engine.context import Evidence, RegionCandidate
from philens.engine.detection import MathProperties
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind, analyzer

_SOURCE_CLASS = {
    "circle": PatternClass.SUNFLOWER_SPIRAL,
    "object_group": PatternClass.PINECONE_SPIRAL,
}


@analyzer(
    id="E.05",
    geometry=GeometryKind.POINT_CLOUD,
    patterns={
        PatternClass.SUNFLOWER_SPIRAL,
        PatternClass.PINECONE_SPIRAL,
        PatternClass.LEAF_ARRANGEMENT,
    },
    description="Golden-angle spacing of arranged elements",
)
def phyllotaxis(candidate: RegionCandidate) -> Evidence:
    fit = phyllotaxis_score(candidate.points, candidate.polar_center)
    target = _SOURCE_CLASS.get(candidate.source, PatternClass.LEAF_ARRANGEMENT)
    return Evidence(
        "E.05",
        {target: fit.score},
        MathProperties(spiral_angle=round(fit.angle_deg, 2)),
    )
