"""StabilityTracker — temporal debouncing of per-frame detections.

Each physical pattern is tracked under a HistoryKey (class + quantized
center). Its last few detections are kept in a ring buffer; once enough of
them agree with a high enough mean confidence, their average is published in
the stable set. Keys unseen for longer than the eviction window are dropped.

    absent → buffering (< min_history) → stable (mean ≥ threshold) → evicted

The tracker is the single owner of the history map. Every mutation happens
under ``lock``; the published stable set is an immutable tuple replaced by
reference, so readers never need the lock.
"""

from __future__ import annotations

import enum
import logging
import math
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable

from philens.engine.config import EngineConfig
from philens.engine.detection import Detection, Point2D, Rectangle
from philens.engine.patterns import PatternClass
from philens.engine.suppression import sort_by_confidence, suppress

logger = logging.getLogger(__name__)

StableSet = tuple[Detection, ...]


class TrackState(str, enum.Enum):
    ABSENT = "absent"
    BUFFERING = "buffering"
    STABLE = "stable"


@dataclass(frozen=True)
class HistoryKey:
    pattern: PatternClass
    qx: int
    qy: int

    @classmethod
    def for_detection(cls, detection: Detection, quantum: float = 1.0) -> HistoryKey:
        return cls(
            detection.pattern,
            int(round(detection.center.x / quantum)),
            int(round(detection.center.y / quantum)),
        )


@dataclass
class HistoryEntry:
    key: HistoryKey
    detections: deque[Detection]
    last_seen: float = 0.0

    @property
    def mean_confidence(self) -> float:
        return sum(d.confidence for d in self.detections) / len(self.detections)


@dataclass
class StabilityTracker:
    config: EngineConfig = field(default_factory=EngineConfig)

    def __post_init__(self) -> None:
        self.lock = threading.RLock()
        self._history: dict[HistoryKey, HistoryEntry] = {}
        self._stable: StableSet = ()

    def __len__(self) -> int:
        return len(self._history)

    # ── writes ──

    def fold(self, detections: Iterable[Detection], now: float | None = None) -> None:
        """Append each detection to its key's ring buffer, creating entries as needed."""
        with self.lock:
            for detection in detections:
                if not (math.isfinite(detection.center.x) and math.isfinite(detection.center.y)):
                    logger.debug("Dropping %s with non-finite center", detection.pattern.value)
                    continue
                key = HistoryKey.for_detection(detection, self.config.history_key_quantum)
                entry = self._history.get(key)
                if entry is None:
                    entry = HistoryEntry(key, deque(maxlen=self.config.history_size))
                    self._history[key] = entry
                entry.detections.append(detection)
                entry.last_seen = detection.observed_at if now is None else now

    def evict(self, now: float | None = None) -> list[HistoryKey]:
        """Drop every entry not seen within the eviction window."""
        now = time.monotonic() if now is None else now
        with self.lock:
            stale = [
                key
                for key, entry in self._history.items()
                if now - entry.last_seen > self.config.eviction_window
            ]
            for key in stale:
                del self._history[key]
        if stale:
            logger.debug("Evicted %d stale history entries", len(stale))
        return stale

    def compute_stable_set(self, now: float | None = None) -> StableSet:
        """Average every qualifying entry, suppress overlaps, keep the top few.

        Reads the history without modifying it, so calling it twice in a row
        yields the same set. When ``now`` is given, entries already past the
        eviction window are left out even if ``evict`` has not run yet.
        """
        cfg = self.config
        with self.lock:
            working: list[Detection] = []
            for entry in self._history.values():
                if len(entry.detections) < cfg.min_history:
                    continue
                if now is not None and now - entry.last_seen > cfg.eviction_window:
                    continue
                averaged = _average(entry.detections)
                if averaged.confidence >= cfg.stability_threshold:
                    working.append(averaged)

            ranked = suppress(sort_by_confidence(working), cfg.suppression_overlap)
            stable: StableSet = tuple(ranked[: cfg.max_stable_patterns])
            self._stable = stable
        return stable

    def reset(self) -> None:
        with self.lock:
            self._history.clear()
            self._stable = ()

    # ── reads ──

    def current_stable_set(self) -> StableSet:
        return self._stable

    def state_of(self, key: HistoryKey) -> TrackState:
        with self.lock:
            entry = self._history.get(key)
            if entry is None:
                return TrackState.ABSENT
            if (
                len(entry.detections) >= self.config.min_history
                and entry.mean_confidence >= self.config.stability_threshold
            ):
                return TrackState.STABLE
            return TrackState.BUFFERING

    def snapshot(self) -> dict[HistoryKey, tuple[Detection, ...]]:
        """Copy of the buffered detections per key."""
        with self.lock:
            return {key: tuple(entry.detections) for key, entry in self._history.items()}


def _average(detections: deque[Detection]) -> Detection:
    n = len(detections)
    confidence = sum(d.confidence for d in detections) / n
    cx = sum(d.center.x for d in detections) / n
    cy = sum(d.center.y for d in detections) / n
    width = sum(d.bounding_box.width for d in detections) / n
    height = sum(d.bounding_box.height for d in detections) / n
    latest = detections[-1]
    return Detection(
        pattern=latest.pattern,
        confidence=confidence,
        bounding_box=Rectangle.from_center(cx, cy, width, height),
        center=Point2D(cx, cy),
        observed_at=latest.observed_at,
        math_properties=latest.math_properties,
        source=latest.source,
    )
