"""Immutable value types shared by every engine stage.

Coordinates are pixel space of the analysed frame, origin top-left.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from philens.engine.patterns import PatternClass
from philens.utils.math_helpers import clip01


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned box: origin (top-left) plus width/height."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bounds(cls, xmin: float, ymin: float, xmax: float, ymax: float) -> Rectangle:
        return cls(xmin, ymin, xmax - xmin, ymax - ymin)

    @classmethod
    def from_center(cls, cx: float, cy: float, width: float, height: float) -> Rectangle:
        return cls(cx - width / 2, cy - height / 2, width, height)

    @property
    def area(self) -> float:
        if self.is_degenerate:
            return 0.0
        return self.width * self.height

    @property
    def center(self) -> Point2D:
        return Point2D(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax)"""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def is_degenerate(self) -> bool:
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            return True
        return self.width <= 0 or self.height <= 0

    @property
    def aspect_ratio(self) -> float:
        """Long side over short side; 0.0 when degenerate."""
        if self.is_degenerate:
            return 0.0
        return max(self.width, self.height) / min(self.width, self.height)


@dataclass(frozen=True)
class MathProperties:
    """Optional numeric payload describing what made a detection match."""

    phi_value: float | None = None
    ratio: float | None = None
    fibonacci_numbers: tuple[int, ...] | None = None
    spiral_angle: float | None = None
    growth_rate: float | None = None
    chamber_count: int | None = None
    sequence: tuple[float, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class Detection:
    """One typed, scored pattern occurrence. Confidence is clipped to [0, 1]."""

    pattern: PatternClass
    confidence: float
    bounding_box: Rectangle
    center: Point2D
    observed_at: float
    math_properties: MathProperties = field(default_factory=MathProperties)
    source: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clip01(float(self.confidence)))

    @classmethod
    def in_box(
        cls,
        pattern: PatternClass,
        confidence: float,
        box: Rectangle,
        observed_at: float,
        math_properties: MathProperties | None = None,
        source: str = "",
    ) -> Detection:
        """Build a detection centered on its bounding box."""
        return cls(
            pattern=pattern,
            confidence=confidence,
            bounding_box=box,
            center=box.center,
            observed_at=observed_at,
            math_properties=math_properties or MathProperties(),
            source=source,
        )
