"""Analyzer registry — every evidence source is a standalone function registered via decorator.

Usage:
    @analyzer(
        id="E.03",
        geometry=GeometryKind.RECTANGLE,
        patterns={PatternClass.GOLDEN_RATIO},
    )
    def golden_rectangle(candidate: RegionCandidate) -> Evidence:
        score = rectangle_golden_score(candidate.bounding_box)
        return Evidence("E.03", {PatternClass.GOLDEN_RATIO: score})

Adding a new analyzer = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from philens.engine.patterns import PatternClass

if TYPE_CHECKING:
    from philens.engine.context import Evidence, RegionCandidate

logger = logging.getLogger(__name__)


class GeometryKind(str, enum.Enum):
    POLYLINE = "polyline"  # ordered contour points
    RECTANGLE = "rectangle"  # bounding box only
    POINT_CLOUD = "point_cloud"  # unordered element centers
    SEQUENCE = "sequence"  # integers read off the region


@dataclass
class AnalyzerSpec:
    id: str
    geometry: GeometryKind
    fn: Callable[["RegionCandidate"], "Evidence"]
    patterns: frozenset[PatternClass] = field(default_factory=frozenset)
    description: str = ""

    def votes_for_any(self, patterns) -> bool:
        return not self.patterns.isdisjoint(patterns)


class AnalyzerRegistry:
    """Registry of evidence analyzers, keyed by ID."""

    def __init__(self) -> None:
        self._analyzers: dict[str, AnalyzerSpec] = {}

    def register(self, spec: AnalyzerSpec) -> None:
        if spec.id in self._analyzers:
            raise ValueError(f"Duplicate analyzer ID: {spec.id}")
        self._analyzers[spec.id] = spec
        logger.debug("Registered analyzer %s (%s)", spec.id, spec.geometry.value)

    def get(self, analyzer_id: str) -> AnalyzerSpec:
        return self._analyzers[analyzer_id]

    def for_geometry(self, geometry: GeometryKind) -> list[AnalyzerSpec]:
        specs = [s for s in self._analyzers.values() if s.geometry == geometry]
        return sorted(specs, key=lambda s: s.id)

    def for_pattern(self, pattern: PatternClass) -> list[AnalyzerSpec]:
        specs = [s for s in self._analyzers.values() if pattern in s.patterns]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[AnalyzerSpec]:
        return sorted(self._analyzers.values(), key=lambda s: s.id)

    @property
    def count(self) -> int:
        return len(self._analyzers)


# Module-level singleton
_registry = AnalyzerRegistry()


def get_registry() -> AnalyzerRegistry:
    return _registry


def load_analyzers() -> AnalyzerRegistry:
    """Import every evidence module so its @analyzer decorator fires."""
    import importlib
    import pkgutil

    package = importlib.import_module("philens.engine.evidence")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package.__name__}.{module_name}")
    return _registry


def analyzer(
    *,
    id: str,
    geometry: GeometryKind,
    patterns: set[PatternClass],
    description: str = "",
):
    """Decorator to register an analyzer function."""

    def decorator(fn: Callable[["RegionCandidate"], "Evidence"]):
        spec = AnalyzerSpec(
            id=id,
            geometry=geometry,
            fn=fn,
            patterns=frozenset(patterns),
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
