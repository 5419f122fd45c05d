"""GET /api/changes — Server-Sent Events stream of stable-set changes."""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from philens.dependencies import get_engine
from philens.engine.change_gate import ChangeEvent, unmatched
from philens.engine.pipeline import DetectionEngine
from philens.models.responses import ChangeEventModel, StableResponse, detection_models

router = APIRouter()

# Pending events per subscriber; the oldest is dropped when a client falls behind
_SUBSCRIBER_BACKLOG = 16


def _offer(queue: asyncio.Queue, event: ChangeEvent) -> None:
    """Enqueue without blocking, discarding the oldest pending event when full."""
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(event)


async def _stream_changes(
    engine: DetectionEngine,
    max_events: int | None,
) -> AsyncGenerator[str, None]:
    """Emit the current stable set, then one event per significant change."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue(maxsize=_SUBSCRIBER_BACKLOG)
    gate = engine.gate

    def _on_change(previous, current) -> None:
        """Runs on the engine's thread; hands the event to the loop."""
        event = ChangeEvent(
            previous=previous,
            current=current,
            appeared=tuple(
                unmatched(previous, current, gate.confidence_tolerance, gate.position_tolerance)
            ),
            at=time.monotonic(),
        )
        loop.call_soon_threadsafe(_offer, queue, event)

    unsubscribe = engine.on_significant_change(_on_change)
    try:
        snapshot = StableResponse(stable=detection_models(engine.current_stable_set()))
        yield f"event: stable\ndata: {json.dumps(snapshot.model_dump(mode='json'))}\n\n"
        sent = 1
        while max_events is None or sent < max_events:
            event = await queue.get()
            data = ChangeEventModel.from_event(event).model_dump(mode="json")
            yield f"event: change\ndata: {json.dumps(data)}\n\n"
            sent += 1
    finally:
        unsubscribe()


@router.get("/changes")
async def changes(
    max_events: int | None = None,
    engine: DetectionEngine = Depends(get_engine),
) -> StreamingResponse:
    return StreamingResponse(
        _stream_changes(engine, max_events),
        media_type="text/event-stream",
    )


@router.get("/changes/recent", response_model=list[ChangeEventModel])
async def recent_changes(engine: DetectionEngine = Depends(get_engine)) -> list[ChangeEventModel]:
    """Most recent change events, oldest first."""
    return [ChangeEventModel.from_event(e) for e in list(engine.recent_events)]
