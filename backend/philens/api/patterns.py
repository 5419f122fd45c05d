"""GET /api/patterns — the pattern taxonomy with its current switches and catalogue text."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from philens.dependencies import get_engine
from philens.engine.patterns import PatternClass
from philens.engine.pipeline import DetectionEngine
from philens.models.responses import PatternModel

router = APIRouter()


@router.get("/patterns", response_model=list[PatternModel])
async def list_patterns(engine: DetectionEngine = Depends(get_engine)) -> list[PatternModel]:
    return [PatternModel.describe(p, engine.config) for p in PatternClass]


@router.get("/patterns/{pattern}", response_model=PatternModel)
async def get_pattern(
    pattern: PatternClass,
    engine: DetectionEngine = Depends(get_engine),
) -> PatternModel:
    return PatternModel.describe(pattern, engine.config)
