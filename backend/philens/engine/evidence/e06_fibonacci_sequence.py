"""E.06 — Fibonacci Sequence.

Additive recurrence check over integers read off a region (element counts,
petal counts, digits).
"""

from __future__ import annotations

from philens.engine.analyzer import fibonacci_sequence_score
from philens.engine.context import Evidence, RegionCandidate
from philens.engine.detection import MathProperties
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind, analyzer


@analyzer(
    id="E.06",
    geometry=GeometryKind.SEQUENCE,
    patterns={PatternClass.FIBONACCI_SEQUENCE},
    description="Share of terms equal to the sum of the previous two",
)
def fibonacci_sequence(candidate: RegionCandidate) -> Evidence:
    fit = fibonacci_sequence_score(candidate.values)
    return Evidence(
        "E.06",
        {PatternClass.FIBONACCI_SEQUENCE: fit.score},
        MathProperties(
            fibonacci_numbers=fit.matched or None,
            sequence=tuple(float(v) for v in candidate.values) or None,
        ),
    )
