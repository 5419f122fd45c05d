"""PatternClassifier — merges multi-analyzer evidence into one detection per class.

For every candidate and every enabled pattern class, the highest score among
the registered analyzers (and the optional external ML confidence map) wins.
A detection is emitted only when that maximum reaches the class threshold.
An analyzer that raises counts as score 0 and never stops the others.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

from philens.engine.config import EngineConfig
from philens.engine.context import Evidence, FrameContext, RegionCandidate
from philens.engine.detection import Detection, MathProperties, Rectangle
from philens.engine.patterns import PatternClass
from philens.engine.registry import AnalyzerRegistry, GeometryKind, load_analyzers
from philens.utils.geometry import downsample_points, smooth_points
from philens.utils.math_helpers import clip01

logger = logging.getLogger(__name__)

ML_ANALYZER_ID = "ml"

_SPIRAL_CLASSES = frozenset(
    {PatternClass.SPIRAL_FIBONACCI, PatternClass.SHELL_SPIRAL, PatternClass.NAUTILUS_SPIRAL}
)

_T = TypeVar("_T")
_R = TypeVar("_R")


class PatternClassifier:
    """Turns region candidates into typed, confidence-scored detections."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        registry: AnalyzerRegistry | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.registry = registry or load_analyzers()
        self._executor: ThreadPoolExecutor | None = None

    def classify(
        self,
        candidates: Iterable[RegionCandidate],
        observed_at: float | None = None,
        frame_size: tuple[float, float] | None = None,
    ) -> list[Detection]:
        """Classify one frame's candidates; see ``run`` for the full context."""
        ctx = FrameContext(
            candidates=list(candidates),
            observed_at=time.monotonic() if observed_at is None else observed_at,
            frame_size=frame_size,
        )
        return self.run(ctx).detections

    def run(self, ctx: FrameContext) -> FrameContext:
        start = time.perf_counter()
        enabled = frozenset(self.config.enabled_patterns())

        prepared = [self._precondition(c) for c in ctx.candidates]
        gathered = self._map(lambda c: self._gather(c, enabled), prepared)

        for candidate, (evidence, errors) in zip(prepared, gathered):
            ctx.evidence[candidate.id] = evidence
            ctx.errors.update(errors)
            ctx.detections.extend(self._decide(candidate, evidence, enabled, ctx))

        elapsed = (time.perf_counter() - start) * 1000
        ctx.timings["classify_ms"] = round(elapsed, 2)
        logger.debug(
            "Classified %d candidates → %d detections (%d analyzer errors) in %.1fms",
            ctx.num_candidates,
            len(ctx.detections),
            len(ctx.errors),
            elapsed,
        )
        return ctx

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    # ── stages ──

    def _precondition(self, candidate: RegionCandidate) -> RegionCandidate:
        """Downsample and optionally smooth dense contours before scoring."""
        if candidate.kind != GeometryKind.POLYLINE:
            return candidate
        points = downsample_points(candidate.points, self.config.max_contour_points)
        if self.config.smoothing_window >= 2:
            points = smooth_points(points, self.config.smoothing_window)
        if points is candidate.points:
            return candidate
        return dataclasses.replace(candidate, points=points, box=candidate.bounding_box)

    def _gather(
        self,
        candidate: RegionCandidate,
        enabled: frozenset[PatternClass],
    ) -> tuple[list[Evidence], dict[str, str]]:
        evidence: list[Evidence] = []
        errors: dict[str, str] = {}
        for spec in self.registry.for_geometry(candidate.kind):
            if not spec.votes_for_any(enabled):
                continue
            try:
                evidence.append(spec.fn(candidate))
            except Exception as e:
                errors[f"{candidate.id}:{spec.id}"] = str(e)
                logger.warning("  %s on %s FAILED: %s", spec.id, candidate.id, e)
        return evidence, errors

    def _decide(
        self,
        candidate: RegionCandidate,
        evidence: list[Evidence],
        enabled: frozenset[PatternClass],
        ctx: FrameContext,
    ) -> list[Detection]:
        box = candidate.bounding_box
        if not all(math.isfinite(v) for v in box.bounds):
            logger.debug("Candidate %s has a non-finite box, skipped", candidate.id)
            return []

        detections = []
        for pattern in PatternClass:
            if pattern not in enabled:
                continue
            score, best = self._best_score(pattern, candidate, evidence)
            if score <= 0.0 or score < self.config.threshold_for(pattern):
                continue
            if not self._within_area(pattern, box, ctx.frame_area):
                logger.debug("%s on %s outside the frame-area gate", pattern.value, candidate.id)
                continue
            analyzer_id = best.analyzer_id if best is not None else ML_ANALYZER_ID
            detections.append(
                Detection(
                    pattern=pattern,
                    confidence=score,
                    bounding_box=box,
                    center=box.center,
                    observed_at=ctx.observed_at,
                    math_properties=best.properties if best is not None else MathProperties(),
                    source=f"{candidate.source}:{analyzer_id}",
                )
            )
        return detections

    @staticmethod
    def _best_score(
        pattern: PatternClass,
        candidate: RegionCandidate,
        evidence: list[Evidence],
    ) -> tuple[float, Evidence | None]:
        best_score, best = 0.0, None
        for ev in evidence:
            score = clip01(float(ev.score_for(pattern)))
            if score > best_score:
                best_score, best = score, ev
        raw = candidate.ml_scores.get(pattern)
        if raw is not None:
            try:
                ml = clip01(float(raw))
            except (TypeError, ValueError):
                ml = 0.0
            if ml > best_score:
                best_score, best = ml, None
        return best_score, best

    def _within_area(self, pattern: PatternClass, box: Rectangle, frame_area: float | None) -> bool:
        if frame_area is None:
            return True
        if pattern == PatternClass.GOLDEN_RATIO:
            lo, hi = self.config.golden_ratio_area_range
        elif pattern in _SPIRAL_CLASSES:
            lo, hi = self.config.spiral_area_range
        else:
            return True
        fraction = box.area / frame_area
        return lo < fraction < hi

    def _map(self, fn: Callable[[_T], _R], items: list[_T]) -> list[_R]:
        workers = self.config.analyzer_workers
        if workers <= 1 or len(items) <= 1:
            return [fn(item) for item in items]
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="philens-analyzer"
            )
        return list(self._executor.map(fn, items))
