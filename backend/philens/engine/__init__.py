"""PhiLens pattern recognition and stability engine."""

from philens.engine.change_gate import ChangeEvent, ChangeGate, should_notify
from philens.engine.classifier import PatternClassifier
from philens.engine.config import ConfigurationError, EngineConfig
from philens.engine.context import Evidence, FrameContext, RegionCandidate
from philens.engine.detection import Detection, MathProperties, Point2D, Rectangle
from philens.engine.patterns import PatternClass
from philens.engine.pipeline import DetectionEngine, create_engine
from philens.engine.registry import GeometryKind, analyzer, get_registry, load_analyzers
from philens.engine.stability import HistoryKey, StabilityTracker
from philens.engine.suppression import SuppressionEngine, suppress

__all__ = [
    "analyzer",
    "GeometryKind",
    "get_registry",
    "load_analyzers",
    "PatternClass",
    "Point2D",
    "Rectangle",
    "MathProperties",
    "Detection",
    "RegionCandidate",
    "Evidence",
    "FrameContext",
    "EngineConfig",
    "ConfigurationError",
    "PatternClassifier",
    "SuppressionEngine",
    "suppress",
    "HistoryKey",
    "StabilityTracker",
    "ChangeEvent",
    "ChangeGate",
    "should_notify",
    "DetectionEngine",
    "create_engine",
]
