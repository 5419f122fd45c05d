"""Stable set, engine stats and reset."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from philens.dependencies import get_engine
from philens.engine.pipeline import DetectionEngine
from philens.models.responses import StableResponse, StatsResponse, detection_models

router = APIRouter()


@router.get("/stable", response_model=StableResponse)
async def current_stable(engine: DetectionEngine = Depends(get_engine)) -> StableResponse:
    return StableResponse(stable=detection_models(engine.current_stable_set()))


@router.post("/tick", response_model=StableResponse)
def tick(engine: DetectionEngine = Depends(get_engine)) -> StableResponse:
    """Evict stale history and refresh the stable set without a new frame."""
    return StableResponse(stable=detection_models(engine.tick()))


@router.get("/stats", response_model=StatsResponse)
async def stats(engine: DetectionEngine = Depends(get_engine)) -> StatsResponse:
    return StatsResponse(**engine.stats.as_dict(), history_entries=len(engine.tracker))


@router.post("/reset", response_model=StableResponse)
def reset(engine: DetectionEngine = Depends(get_engine)) -> StableResponse:
    engine.reset()
    return StableResponse(stable=[])
