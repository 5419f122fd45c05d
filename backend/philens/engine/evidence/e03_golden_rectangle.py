"""E.03 — Golden Rectangle.

Aspect ratio of the detected rectangle against phi, either orientation.
"""

from __future__ import annotations

from philens.engine.analyzer import rectangle_golden_score
from philens.engine.context import Evidence, RegionCandidate
from philens.engine.detection import MathProperties
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind, analyzer
from philens.utils.math_helpers import PHI


@analyzer(
    id="E.03",
    geometry=GeometryKind.RECTANGLE,
    patterns={PatternClass.GOLDEN_RATIO},
    description="Rectangle aspect ratio versus the golden ratio",
)
def golden_rectangle(candidate: RegionCandidate) -> Evidence:
    box = candidate.bounding_box
    score = rectangle_golden_score(box)
    return Evidence(
        "E.03",
        {PatternClass.GOLDEN_RATIO: score},
        MathProperties(phi_value=PHI, ratio=round(box.aspect_ratio, 4)),
    )
