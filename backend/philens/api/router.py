"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from philens.api import changes, config, frames, health, patterns, stable

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(patterns.router)
api_router.include_router(frames.router)
api_router.include_router(stable.router)
api_router.include_router(config.router)
api_router.include_router(changes.router)
