"""PUT /api/config/patterns/{pattern} — per-class switch and threshold."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from philens.dependencies import get_engine
from philens.engine.config import ConfigurationError
from philens.engine.patterns import PatternClass
from philens.engine.pipeline import DetectionEngine
from philens.models.requests import PatternUpdateRequest
from philens.models.responses import PatternModel

router = APIRouter()


@router.put("/config/patterns/{pattern}", response_model=PatternModel)
def update_pattern(
    pattern: PatternClass,
    req: PatternUpdateRequest,
    engine: DetectionEngine = Depends(get_engine),
) -> PatternModel:
    try:
        engine.update_pattern(pattern, enabled=req.enabled, threshold=req.threshold)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return PatternModel.describe(pattern, engine.config)
