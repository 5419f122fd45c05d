"""Non-maximum suppression over one frame's detections.

Greedy scan over a confidence-descending list: a detection is dropped when
its box overlaps any already-kept box by more than ``overlap_fraction`` of the
smaller of the two areas. Earlier entries win ties.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from philens.engine.detection import Detection, Rectangle
from philens.utils.geometry import rect_intersection_area


def overlap_area(a: Rectangle, b: Rectangle) -> float:
    if a.is_degenerate or b.is_degenerate:
        return 0.0
    return rect_intersection_area(a.bounds, b.bounds)


def overlaps(a: Rectangle, b: Rectangle, overlap_fraction: float) -> bool:
    return overlap_area(a, b) > overlap_fraction * min(a.area, b.area)


def sort_by_confidence(detections: Iterable[Detection]) -> list[Detection]:
    """Confidence-descending; stable, so input order breaks ties."""
    return sorted(detections, key=lambda d: d.confidence, reverse=True)


def suppress(detections: Sequence[Detection], overlap_fraction: float = 0.3) -> list[Detection]:
    accepted: list[Detection] = []
    for candidate in detections:
        box = candidate.bounding_box
        if any(overlaps(box, kept.bounding_box, overlap_fraction) for kept in accepted):
            continue
        accepted.append(candidate)
    return accepted


class SuppressionEngine:
    def __init__(self, overlap_fraction: float = 0.3) -> None:
        self.overlap_fraction = overlap_fraction

    def suppress(self, detections: Sequence[Detection]) -> list[Detection]:
        return suppress(detections, self.overlap_fraction)
