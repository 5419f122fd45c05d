"""DetectionEngine — runs one detection cycle per admitted frame.

    candidates → classify → confidence floor → sort → suppress → cap
               → fold → evict → (every stability_update_interval) stable set
               → change gate

Frames are admitted at most once per ``processing_interval``; a frame that
arrives while a cycle is still running is dropped, never queued.
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Iterable

from philens.engine.change_gate import ChangeEvent, ChangeGate, ChangeListener
from philens.engine.classifier import PatternClassifier
from philens.engine.config import EngineConfig
from philens.engine.context import FrameContext, RegionCandidate
from philens.engine.detection import Detection
from philens.engine.patterns import PatternClass
from philens.engine.registry import AnalyzerRegistry
from philens.engine.stability import StabilityTracker, StableSet
from philens.engine.suppression import sort_by_confidence, suppress

logger = logging.getLogger(__name__)

_RECENT_EVENTS = 32


class Admission(str, enum.Enum):
    ADMITTED = "admitted"
    DROPPED_BUSY = "dropped_busy"
    DROPPED_RATE = "dropped_rate"


class FrameGate:
    """At most one cycle in flight and at most one admission per interval."""

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self._busy = threading.Lock()
        self._last_admitted: float | None = None

    def acquire(self, now: float) -> Admission:
        if not self._busy.acquire(blocking=False):
            return Admission.DROPPED_BUSY
        if self._last_admitted is not None and now - self._last_admitted < self.interval:
            self._busy.release()
            return Admission.DROPPED_RATE
        self._last_admitted = now
        return Admission.ADMITTED

    def release(self) -> None:
        self._busy.release()

    def reset(self) -> None:
        self._last_admitted = None


@dataclass
class EngineStats:
    frames_received: int = 0
    frames_admitted: int = 0
    frames_dropped_busy: int = 0
    frames_dropped_rate: int = 0
    cycles_completed: int = 0
    cycles_discarded: int = 0
    detections_last_cycle: int = 0
    stable_updates: int = 0
    change_events: int = 0
    analyzer_errors: int = 0
    last_cycle_ms: float = 0.0
    total_cycle_ms: float = 0.0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def bump(self, **counts: int) -> None:
        """Add to one or more counters atomically."""
        with self._lock:
            for name, value in counts.items():
                setattr(self, name, getattr(self, name) + value)

    def record_cycle(self, detections: int, errors: int, elapsed_ms: float) -> None:
        with self._lock:
            self.cycles_completed += 1
            self.detections_last_cycle = detections
            self.analyzer_errors += errors
            self.last_cycle_ms = round(elapsed_ms, 2)
            self.total_cycle_ms += elapsed_ms

    @property
    def average_cycle_ms(self) -> float:
        if self.cycles_completed == 0:
            return 0.0
        return self.total_cycle_ms / self.cycles_completed

    def as_dict(self) -> dict[str, Any]:
        with self._lock:
            data = {f.name: getattr(self, f.name) for f in fields(self) if f.init}
            data["average_cycle_ms"] = round(self.average_cycle_ms, 2)
        return data


@dataclass
class CycleResult:
    """What one admitted frame produced."""

    frame_number: int
    detections: list[Detection]
    stable_set: StableSet
    change: ChangeEvent | None = None
    errors: dict[str, str] = field(default_factory=dict)
    timings: dict[str, float] = field(default_factory=dict)


class DetectionEngine:
    """Owns the classifier, the stability tracker and the change gate."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        registry: AnalyzerRegistry | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.classifier = PatternClassifier(self.config, registry)
        self.tracker = StabilityTracker(self.config)
        self.gate = ChangeGate(
            self.config.change_confidence_tolerance,
            self.config.change_position_tolerance,
        )
        self.stats = EngineStats()
        self.recent_events: deque[ChangeEvent] = deque(maxlen=_RECENT_EVENTS)
        self._frames = FrameGate(self.config.processing_interval)
        self._generation = 0
        self._last_stable_update: float | None = None

    # ── per-frame entry points ──

    def classify(
        self,
        candidates: Iterable[RegionCandidate],
        now: float | None = None,
        frame_size: tuple[float, float] | None = None,
    ) -> list[Detection]:
        return self.classifier.classify(candidates, now, frame_size)

    def process_frame(
        self,
        candidates: Iterable[RegionCandidate],
        now: float | None = None,
        frame_size: tuple[float, float] | None = None,
    ) -> CycleResult | None:
        """Run a full cycle on one frame; None when the frame is dropped."""
        now = time.monotonic() if now is None else now
        admission = self._frames.acquire(now)
        if admission == Admission.DROPPED_BUSY:
            self.stats.bump(frames_received=1, frames_dropped_busy=1)
            logger.debug("Frame dropped: cycle in flight")
            return None
        if admission == Admission.DROPPED_RATE:
            self.stats.bump(frames_received=1, frames_dropped_rate=1)
            return None

        try:
            self.stats.bump(frames_received=1, frames_admitted=1)
            return self._run_cycle(list(candidates), now, frame_size)
        finally:
            self._frames.release()

    def ingest(self, detections: Iterable[Detection], now: float | None = None) -> None:
        """Fold already-classified detections into the history."""
        now = time.monotonic() if now is None else now
        with self.tracker.lock:
            self.tracker.fold(detections, now)

    def tick(self, now: float | None = None) -> StableSet:
        """Evict stale history and recompute the stable set when it is due."""
        now = time.monotonic() if now is None else now
        with self.tracker.lock:
            self._tick(now)
            return self.tracker.current_stable_set()

    # ── reads ──

    def current_stable_set(self) -> StableSet:
        return self.tracker.current_stable_set()

    def on_significant_change(self, callback: ChangeListener) -> Callable[[], None]:
        return self.gate.on_significant_change(callback)

    # ── control ──

    def reset(self) -> None:
        """Forget all history; cycles already in flight are discarded."""
        with self.tracker.lock:
            self._generation += 1
            self.tracker.reset()
            self._last_stable_update = None
            self._frames.reset()
            self.recent_events.clear()
        logger.info("Engine reset (generation %d)", self._generation)

    def update_pattern(
        self,
        pattern: PatternClass | str,
        enabled: bool | None = None,
        threshold: float | None = None,
    ) -> None:
        """Change one class's switch or threshold; invalid values raise ConfigurationError."""
        pattern = PatternClass(pattern)
        with self.tracker.lock:
            if threshold is not None:
                self.config.set_threshold(pattern, threshold)
            if enabled is not None:
                self.config.set_enabled(pattern, enabled)
        logger.info(
            "Pattern %s: enabled=%s threshold=%.2f",
            pattern.value,
            self.config.is_enabled(pattern),
            self.config.threshold_for(pattern),
        )

    def close(self) -> None:
        self.classifier.close()

    # ── cycle ──

    def _run_cycle(
        self,
        candidates: list[RegionCandidate],
        now: float,
        frame_size: tuple[float, float] | None,
    ) -> CycleResult | None:
        start = time.perf_counter()
        generation = self._generation
        ctx = FrameContext(
            candidates=candidates,
            observed_at=now,
            frame_size=frame_size,
            frame_number=self.stats.frames_admitted,
        )
        self.classifier.run(ctx)

        with self.tracker.lock:
            if generation != self._generation:
                self.stats.bump(cycles_discarded=1)
                logger.info("Discarding frame %d started before reset", ctx.frame_number)
                return None

            t0 = time.perf_counter()
            kept = self._filter(ctx.detections)
            ctx.timings["filter_ms"] = round((time.perf_counter() - t0) * 1000, 2)

            self.tracker.fold(kept, now)
            change = self._tick(now)
            stable = self.tracker.current_stable_set()

        elapsed = (time.perf_counter() - start) * 1000
        ctx.timings["cycle_ms"] = round(elapsed, 2)
        self.stats.record_cycle(len(kept), len(ctx.errors), elapsed)

        logger.debug(
            "Frame %d: %d candidates → %d detections → %d stable in %.1fms",
            ctx.frame_number,
            ctx.num_candidates,
            len(kept),
            len(stable),
            elapsed,
        )
        return CycleResult(
            frame_number=ctx.frame_number,
            detections=kept,
            stable_set=stable,
            change=change,
            errors=dict(ctx.errors),
            timings=dict(ctx.timings),
        )

    def _filter(self, detections: list[Detection]) -> list[Detection]:
        cfg = self.config
        confident = [d for d in detections if d.confidence >= cfg.min_confidence]
        kept = suppress(sort_by_confidence(confident), cfg.suppression_overlap)
        return kept[: cfg.max_detections_per_frame]

    def _tick(self, now: float) -> ChangeEvent | None:
        self.tracker.evict(now)
        last = self._last_stable_update
        if last is not None and now - last < self.config.stability_update_interval:
            return None

        previous = self.tracker.current_stable_set()
        current = self.tracker.compute_stable_set(now)
        self._last_stable_update = now
        self.stats.bump(stable_updates=1)

        event = self.gate.evaluate(previous, current, now)
        if event is not None:
            self.stats.bump(change_events=1)
            self.recent_events.append(event)
        return event


def create_engine(
    config: EngineConfig | None = None,
    registry: AnalyzerRegistry | None = None,
) -> DetectionEngine:
    """Factory function for creating an engine instance."""
    return DetectionEngine(config=config, registry=registry)
