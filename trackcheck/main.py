"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trackcheck import __version__
from trackcheck.config import settings
from trackcheck.engine.registry import load_checks

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.trackcheck_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="TrackCheck",
        description="Race-track raster validation: connectivity, width, areas, paths and balance",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all check modules to trigger registration
    load_checks()

    from trackcheck.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
