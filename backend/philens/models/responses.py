"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from philens.engine.catalogue import info_for
from philens.engine.change_gate import ChangeEvent
from philens.engine.config import EngineConfig
from philens.engine.detection import Detection
from philens.engine.patterns import PatternClass
from philens.engine.pipeline import CycleResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    analyzers_registered: int = 0


class DetectionModel(BaseModel):
    pattern: PatternClass
    display_name: str
    confidence: float
    box: dict[str, float]
    center: tuple[float, float]
    observed_at: float
    math_properties: dict[str, Any] = Field(default_factory=dict)
    source: str = ""

    @classmethod
    def from_detection(cls, detection: Detection) -> DetectionModel:
        box = detection.bounding_box
        return cls(
            pattern=detection.pattern,
            display_name=detection.pattern.display_name,
            confidence=round(detection.confidence, 4),
            box={"x": box.x, "y": box.y, "width": box.width, "height": box.height},
            center=detection.center.as_tuple(),
            observed_at=detection.observed_at,
            math_properties=detection.math_properties.to_dict(),
            source=detection.source,
        )


def detection_models(detections) -> list[DetectionModel]:
    return [DetectionModel.from_detection(d) for d in detections]


class FrameResponse(BaseModel):
    admitted: bool
    frame_number: int | None = None
    detections: list[DetectionModel] = Field(default_factory=list)
    stable: list[DetectionModel] = Field(default_factory=list)
    changed: bool = False
    errors: dict[str, str] = Field(default_factory=dict)
    timings: dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: CycleResult | None, stable) -> FrameResponse:
        if result is None:
            return cls(admitted=False, stable=detection_models(stable))
        return cls(
            admitted=True,
            frame_number=result.frame_number,
            detections=detection_models(result.detections),
            stable=detection_models(result.stable_set),
            changed=result.change is not None,
            errors=result.errors,
            timings=result.timings,
        )


class StableResponse(BaseModel):
    stable: list[DetectionModel] = Field(default_factory=list)


class ChangeEventModel(BaseModel):
    at: float
    previous: list[DetectionModel]
    current: list[DetectionModel]
    best_new: DetectionModel | None = None

    @classmethod
    def from_event(cls, event: ChangeEvent) -> ChangeEventModel:
        best = event.best_new
        return cls(
            at=event.at,
            previous=detection_models(event.previous),
            current=detection_models(event.current),
            best_new=DetectionModel.from_detection(best) if best is not None else None,
        )


class PatternModel(BaseModel):
    pattern: PatternClass
    display_name: str
    default_weight: float
    enabled: bool
    threshold: float
    title: str
    description: str
    mathematical_explanation: str
    examples: list[str] = Field(default_factory=list)
    fun_facts: list[str] = Field(default_factory=list)

    @classmethod
    def describe(cls, pattern: PatternClass, config: EngineConfig) -> PatternModel:
        info = info_for(pattern)
        return cls(
            pattern=pattern,
            display_name=pattern.display_name,
            default_weight=pattern.default_weight,
            enabled=config.is_enabled(pattern),
            threshold=config.threshold_for(pattern),
            title=info.title,
            description=info.description,
            mathematical_explanation=info.mathematical_explanation,
            examples=list(info.examples),
            fun_facts=list(info.fun_facts),
        )


class StatsResponse(BaseModel):
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
    average_cycle_ms: float = 0.0
    history_entries: int = 0
