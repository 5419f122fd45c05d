"""Engine configuration — per-class switches and every tunable threshold."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from philens.engine.patterns import PatternClass

if TYPE_CHECKING:
    from philens.config import Settings


class ConfigurationError(ValueError):
    """Invalid engine configuration. Raised at load/update time, never mid-cycle."""


DEFAULT_ENABLED: dict[PatternClass, bool] = {
    PatternClass.SPIRAL_FIBONACCI: True,
    PatternClass.GOLDEN_RATIO: True,
    PatternClass.FIBONACCI_SEQUENCE: False,
    PatternClass.PHI_GRID: False,
    PatternClass.SUNFLOWER_SPIRAL: True,
    PatternClass.PINECONE_SPIRAL: True,
    PatternClass.SHELL_SPIRAL: True,
    PatternClass.NAUTILUS_SPIRAL: True,
    PatternClass.LEAF_ARRANGEMENT: True,
}

# Minimum evidence score for a detection of each class.
DEFAULT_THRESHOLDS: dict[PatternClass, float] = {
    PatternClass.SPIRAL_FIBONACCI: 0.6,
    PatternClass.GOLDEN_RATIO: 0.6,
    PatternClass.FIBONACCI_SEQUENCE: 0.7,
    PatternClass.PHI_GRID: 0.5,
    PatternClass.SUNFLOWER_SPIRAL: 0.7,
    PatternClass.PINECONE_SPIRAL: 0.6,
    PatternClass.SHELL_SPIRAL: 0.65,
    PatternClass.NAUTILUS_SPIRAL: 0.7,
    PatternClass.LEAF_ARRANGEMENT: 0.6,
}


@dataclass
class EngineConfig:
    """Controls classification, suppression and temporal stability."""

    enabled: dict[PatternClass, bool] = field(default_factory=lambda: dict(DEFAULT_ENABLED))
    thresholds: dict[PatternClass, float] = field(
        default_factory=lambda: dict(DEFAULT_THRESHOLDS)
    )

    # Per-frame filtering
    min_confidence: float = 0.4  # global floor applied after classification
    max_detections_per_frame: int = 5

    # Non-maximum suppression: reject if overlap > fraction * smaller area
    suppression_overlap: float = 0.3

    # Temporal stability
    history_size: int = 5
    min_history: int = 3
    stability_threshold: float = 0.6
    max_stable_patterns: int = 3
    eviction_window: float = 2.0  # seconds
    stability_update_interval: float = 0.3  # seconds
    history_key_quantum: float = 1.0  # pixels

    # Frame admission
    processing_interval: float = 0.1  # seconds

    # Change gate: previous/current entries within these match
    change_confidence_tolerance: float = 0.1
    change_position_tolerance: float = 50.0  # pixels

    # Contour preconditioning
    max_contour_points: int = 400
    smoothing_window: int = 1  # <2 disables smoothing

    # Fraction of frame area a candidate may cover (only when frame size is known)
    golden_ratio_area_range: tuple[float, float] = (0.02, 0.40)
    spiral_area_range: tuple[float, float] = (0.02, 0.60)

    # Parallel analyzer evaluation across candidates; 1 = inline
    analyzer_workers: int = 1

    def __post_init__(self) -> None:
        self.enabled = _complete(self.enabled, DEFAULT_ENABLED, "enabled")
        self.thresholds = _complete(self.thresholds, DEFAULT_THRESHOLDS, "thresholds")
        self.validate()

    def validate(self) -> None:
        for pattern, value in self.thresholds.items():
            _check_fraction(f"thresholds[{pattern.value}]", value)
        for name in (
            "min_confidence",
            "suppression_overlap",
            "stability_threshold",
            "change_confidence_tolerance",
        ):
            _check_fraction(name, getattr(self, name))
        for name in (
            "eviction_window",
            "stability_update_interval",
            "history_key_quantum",
            "change_position_tolerance",
        ):
            if not getattr(self, name) > 0:
                raise ConfigurationError(f"{name} must be > 0, got {getattr(self, name)!r}")
        if self.processing_interval < 0:
            raise ConfigurationError("processing_interval must be >= 0")
        for name in (
            "history_size",
            "min_history",
            "max_stable_patterns",
            "max_detections_per_frame",
            "max_contour_points",
            "analyzer_workers",
        ):
            if int(getattr(self, name)) < 1:
                raise ConfigurationError(f"{name} must be >= 1, got {getattr(self, name)!r}")
        if self.min_history > self.history_size:
            raise ConfigurationError(
                f"min_history ({self.min_history}) exceeds history_size ({self.history_size})"
            )
        for name in ("golden_ratio_area_range", "spiral_area_range"):
            lo, hi = getattr(self, name)
            _check_fraction(f"{name}[0]", lo)
            _check_fraction(f"{name}[1]", hi)
            if lo >= hi:
                raise ConfigurationError(f"{name} must be increasing, got {(lo, hi)!r}")

    # ── per-class switches ──

    def is_enabled(self, pattern: PatternClass) -> bool:
        return self.enabled[pattern]

    def threshold_for(self, pattern: PatternClass) -> float:
        return self.thresholds[pattern]

    def set_enabled(self, pattern: PatternClass, value: bool) -> None:
        self.enabled[PatternClass(pattern)] = bool(value)

    def set_threshold(self, pattern: PatternClass, value: float) -> None:
        _check_fraction(f"thresholds[{PatternClass(pattern).value}]", value)
        self.thresholds[PatternClass(pattern)] = float(value)

    def enabled_patterns(self) -> list[PatternClass]:
        return [p for p in PatternClass if self.enabled[p]]

    @classmethod
    def from_settings(cls, settings: Settings) -> EngineConfig:
        return cls(
            processing_interval=settings.processing_interval,
            stability_update_interval=settings.stability_update_interval,
            eviction_window=settings.eviction_window,
            suppression_overlap=settings.suppression_overlap,
            history_size=settings.history_size,
            analyzer_workers=settings.analyzer_workers,
        )


def _check_fraction(name: str, value: float) -> None:
    try:
        ok = 0.0 <= float(value) <= 1.0
    except (TypeError, ValueError):
        ok = False
    if not ok:
        raise ConfigurationError(f"{name} must be within [0, 1], got {value!r}")


def _complete(given, defaults, name):
    """Merge a partial per-class map over the defaults, accepting string keys."""
    merged = dict(defaults)
    for key, value in given.items():
        try:
            merged[PatternClass(key)] = value
        except ValueError as e:
            raise ConfigurationError(f"{name}: unknown pattern class {key!r}") from e
    return merged
