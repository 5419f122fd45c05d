"""FrameContext — the per-cycle state flowing through classification.

Per-candidate analyzer output → FrameContext.evidence[candidate.id]
Per-cycle results → FrameContext.detections / .errors / .timings
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from philens.engine.detection import Detection, MathProperties, Point2D, Rectangle
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind
from philens.utils.geometry import as_points, bbox, centroid


@dataclass
class RegionCandidate:
    """One region handed over by the external shape extractor."""

    id: str
    kind: GeometryKind
    # Extractor that produced it: contour, rectangle, circle, object_group, sequence, ml
    source: str = "contour"
    # Nx2 points in frame pixels; ordered for polylines, unordered for point clouds
    points: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # Explicit box; derived from the points when absent
    box: Rectangle | None = None
    # Explicit polar center; the centroid of the points when absent
    center: Point2D | None = None
    # Integer sequence read off the region (kind == SEQUENCE)
    values: tuple[int, ...] = ()
    # Raw per-class confidences from an external ML classifier
    ml_scores: dict[PatternClass, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.kind = GeometryKind(self.kind)
        self.points = as_points(self.points)
        self.ml_scores = {PatternClass(k): v for k, v in self.ml_scores.items()}

    @property
    def bounding_box(self) -> Rectangle:
        if self.box is not None:
            return self.box
        return Rectangle.from_bounds(*bbox(self.points))

    @property
    def polar_center(self) -> tuple[float, float]:
        if self.center is not None:
            return self.center.as_tuple()
        if len(self.points) > 0:
            return centroid(self.points)
        return self.bounding_box.center.as_tuple()


@dataclass(frozen=True)
class Evidence:
    """Scores one analyzer assigns to a candidate, per pattern class."""

    analyzer_id: str
    scores: dict[PatternClass, float]
    properties: MathProperties = field(default_factory=MathProperties)

    def score_for(self, pattern: PatternClass) -> float:
        return self.scores.get(pattern, 0.0)


@dataclass
class FrameContext:
    """Shared state for one classification cycle."""

    candidates: list[RegionCandidate] = field(default_factory=list)
    observed_at: float = 0.0
    # (width, height) of the analysed frame in pixels, when known
    frame_size: tuple[float, float] | None = None
    frame_number: int = 0

    evidence: dict[str, list[Evidence]] = field(default_factory=dict)
    detections: list[Detection] = field(default_factory=list)

    # "<candidate id>:<analyzer id>" → error message
    errors: dict[str, str] = field(default_factory=dict)
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def num_candidates(self) -> int:
        return len(self.candidates)

    @property
    def frame_area(self) -> float | None:
        if self.frame_size is None:
            return None
        w, h = self.frame_size
        if w <= 0 or h <= 0:
            return None
        return float(w) * float(h)
