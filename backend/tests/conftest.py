"""Shared test fixtures and synthetic geometry."""

from __future__ import annotations

import math

import numpy as np
import pytest

from philens.engine.config import EngineConfig
from philens.engine.context import RegionCandidate
from philens.engine.detection import Detection, MathProperties, Point2D, Rectangle
from philens.engine.patterns import PatternClass
from philens.engine.pipeline import DetectionEngine
from philens.engine.registry import GeometryKind
from philens.utils.math_helpers import GOLDEN_ANGLE_RAD, PHI


# A golden rectangle and a square, both well inside a 1000x1000 frame
GOLDEN_BOX = Rectangle(100.0, 100.0, 323.6, 200.0)
SQUARE_BOX = Rectangle(600.0, 600.0, 200.0, 200.0)


def nautilus_points(center=(0.0, 0.0), base_radius=10.0, chambers=5, per_chamber=6):
    """Points on arcs whose radius grows by phi from one angular sector to the next."""
    points = []
    for k in range(chambers):
        radius = base_radius * PHI**k
        for j in range(per_chamber):
            theta = -3.0 + k * 1.2 + j * 0.15
            points.append(
                (center[0] + radius * math.cos(theta), center[1] + radius * math.sin(theta))
            )
    return np.array(points)


def logarithmic_spiral(center, radius, turns, n_points=100, growth=PHI):
    """r = radius * growth^(theta / 2pi), sampled evenly in theta."""
    theta = np.arange(n_points) * 2 * np.pi * turns / n_points
    r = radius * growth ** (theta / (2 * np.pi))
    return np.column_stack([center[0] + r * np.cos(theta), center[1] + r * np.sin(theta)])


def vogel_florets(center=(0.0, 0.0), scale=5.0, n_points=30):
    """Vogel's sunflower model: k-th floret at k * golden angle, r = scale * sqrt(k)."""
    k = np.arange(n_points)
    theta = k * GOLDEN_ANGLE_RAD
    r = scale * np.sqrt(k)
    return np.column_stack([center[0] + r * np.cos(theta), center[1] + r * np.sin(theta)])


def circle_points(center=(0.0, 0.0), radius=50.0, n=40):
    theta = np.arange(n) * 2 * np.pi / n
    return np.column_stack([center[0] + radius * np.cos(theta), center[1] + radius * np.sin(theta)])


def golden_candidate(cid="r1", box=GOLDEN_BOX) -> RegionCandidate:
    return RegionCandidate(id=cid, kind=GeometryKind.RECTANGLE, source="rectangle", box=box)


def make_detection(
    pattern=PatternClass.SPIRAL_FIBONACCI,
    confidence=0.8,
    cx=100.0,
    cy=100.0,
    t=0.0,
    size=50.0,
    properties=None,
    source="test",
) -> Detection:
    return Detection(
        pattern=pattern,
        confidence=confidence,
        bounding_box=Rectangle.from_center(cx, cy, size, size),
        center=Point2D(cx, cy),
        observed_at=t,
        math_properties=properties or MathProperties(),
        source=source,
    )


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def engine(config) -> DetectionEngine:
    eng = DetectionEngine(config)
    yield eng
    eng.close()
