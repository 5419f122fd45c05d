"""POST /api/frames — feed one frame's region candidates through the engine."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from philens.dependencies import get_engine
from philens.engine.pipeline import DetectionEngine
from philens.models.requests import FrameRequest
from philens.models.responses import FrameResponse

router = APIRouter()


# Sync handler, runs in the threadpool.
@router.post("/frames", response_model=FrameResponse)
def submit_frame(req: FrameRequest, engine: DetectionEngine = Depends(get_engine)) -> FrameResponse:
    candidates = [c.to_candidate() for c in req.candidates]
    result = engine.process_frame(candidates, req.observed_at, req.frame_size)
    return FrameResponse.from_result(result, engine.current_stable_set())
