"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from philens.engine.context import RegionCandidate
from philens.engine.detection import Point2D, Rectangle
from philens.engine.patterns import PatternClass
from philens.engine.registry import GeometryKind


class BoxModel(BaseModel):
    x: float
    y: float
    width: float
    height: float

    def to_rectangle(self) -> Rectangle:
        return Rectangle(self.x, self.y, self.width, self.height)


class CandidateModel(BaseModel):
    id: str = Field(..., description="Candidate ID, unique within the frame")
    kind: GeometryKind = Field(..., description="polyline, rectangle, point_cloud or sequence")
    source: str = Field(default="contour", description="Extractor that produced the region")
    points: list[tuple[float, float]] = Field(
        default_factory=list,
        description="Frame-pixel points; ordered for polylines",
    )
    box: BoxModel | None = Field(default=None, description="Explicit bounding box")
    center: tuple[float, float] | None = Field(default=None, description="Explicit polar center")
    values: list[int] = Field(default_factory=list, description="Integer sequence (kind=sequence)")
    ml_scores: dict[PatternClass, float] = Field(
        default_factory=dict,
        description="Per-class confidences from an external classifier",
    )

    def to_candidate(self) -> RegionCandidate:
        return RegionCandidate(
            id=self.id,
            kind=self.kind,
            source=self.source,
            points=self.points,
            box=self.box.to_rectangle() if self.box is not None else None,
            center=Point2D(*self.center) if self.center is not None else None,
            values=tuple(self.values),
            ml_scores=dict(self.ml_scores),
        )


class FrameRequest(BaseModel):
    candidates: list[CandidateModel] = Field(default_factory=list)
    observed_at: float | None = Field(
        default=None,
        description="Monotonic seconds; server clock when omitted",
    )
    frame_width: float | None = Field(default=None, description="Frame width in pixels")
    frame_height: float | None = Field(default=None, description="Frame height in pixels")

    @property
    def frame_size(self) -> tuple[float, float] | None:
        if self.frame_width is None or self.frame_height is None:
            return None
        return (self.frame_width, self.frame_height)


class PatternUpdateRequest(BaseModel):
    enabled: bool | None = None
    threshold: float | None = None
