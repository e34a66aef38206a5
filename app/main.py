"""FastAPI application entry point."""

import logging

from fastapi import FastAPI

from app import __version__
from app.api import health, timing
from app.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Signal Timing Optimizer",
    description="Intersection queueing delay and green time optimization",
    version=__version__,
    debug=settings.debug,
)

app.include_router(health.router, tags=["health"])
app.include_router(timing.router, prefix="/timing", tags=["timing"])
