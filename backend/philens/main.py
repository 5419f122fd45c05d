"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from philens.config import settings
from philens.dependencies import get_engine
from philens.engine.registry import load_analyzers

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.philens_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="PhiLens",
        description="Live golden-ratio and Fibonacci pattern detection with temporal stability",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all evidence modules to trigger registration
    load_analyzers()

    # Invalid engine settings raise ConfigurationError here, not on the first request
    get_engine()

    from philens.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
