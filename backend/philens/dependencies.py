"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from philens.config import settings
from philens.engine.config import EngineConfig
from philens.engine.pipeline import DetectionEngine, create_engine


@lru_cache(maxsize=1)
def get_engine() -> DetectionEngine:
    """One engine per process; it owns the only copy of the history."""
    return create_engine(EngineConfig.from_settings(settings))
