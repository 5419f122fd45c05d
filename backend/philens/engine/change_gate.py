"""ChangeGate — decides when a new stable set is worth telling anyone about.

Averaged output still jitters a little from one recomputation to the next;
entries within the confidence/position tolerances of a previous entry of the
same class count as unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from philens.engine.detection import Detection

logger = logging.getLogger(__name__)

ChangeListener = Callable[[tuple[Detection, ...], tuple[Detection, ...]], None]


def matches(
    previous: Detection,
    current: Detection,
    confidence_tolerance: float = 0.1,
    position_tolerance: float = 50.0,
) -> bool:
    return (
        previous.pattern == current.pattern
        and abs(previous.confidence - current.confidence) < confidence_tolerance
        and abs(previous.center.x - current.center.x) < position_tolerance
        and abs(previous.center.y - current.center.y) < position_tolerance
    )


def unmatched(
    previous: Sequence[Detection],
    current: Sequence[Detection],
    confidence_tolerance: float = 0.1,
    position_tolerance: float = 50.0,
) -> list[Detection]:
    """Current entries with no matching previous entry."""
    return [
        cur
        for cur in current
        if not any(matches(prev, cur, confidence_tolerance, position_tolerance) for prev in previous)
    ]


def should_notify(
    previous: Sequence[Detection],
    current: Sequence[Detection],
    confidence_tolerance: float = 0.1,
    position_tolerance: float = 50.0,
) -> bool:
    if len(previous) != len(current):
        return True
    return bool(unmatched(previous, current, confidence_tolerance, position_tolerance))


@dataclass(frozen=True)
class ChangeEvent:
    previous: tuple[Detection, ...]
    current: tuple[Detection, ...]
    appeared: tuple[Detection, ...]
    at: float

    @property
    def best_new(self) -> Detection | None:
        """Highest-confidence entry that has no previous match."""
        if not self.appeared:
            return None
        return max(self.appeared, key=lambda d: d.confidence)


class ChangeGate:
    def __init__(self, confidence_tolerance: float = 0.1, position_tolerance: float = 50.0) -> None:
        self.confidence_tolerance = confidence_tolerance
        self.position_tolerance = position_tolerance
        self._listeners: list[ChangeListener] = []

    def on_significant_change(self, callback: ChangeListener) -> Callable[[], None]:
        """Subscribe; returns a function that unsubscribes."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def should_notify(self, previous: Sequence[Detection], current: Sequence[Detection]) -> bool:
        return should_notify(previous, current, self.confidence_tolerance, self.position_tolerance)

    def evaluate(
        self,
        previous: tuple[Detection, ...],
        current: tuple[Detection, ...],
        at: float,
    ) -> ChangeEvent | None:
        """Compare two stable sets; on a significant change, notify every listener."""
        if not self.should_notify(previous, current):
            return None
        event = ChangeEvent(
            previous=previous,
            current=current,
            appeared=tuple(
                unmatched(previous, current, self.confidence_tolerance, self.position_tolerance)
            ),
            at=at,
        )
        logger.info(
            "Stable set changed: %d → %d patterns (%d new)",
            len(previous),
            len(current),
            len(event.appeared),
        )
        for listener in list(self._listeners):
            try:
                listener(previous, current)
            except Exception:
                logger.exception("Change listener %r failed", listener)
        return event
