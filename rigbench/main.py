"""RigBench API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map RigBenchError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rigbench.api.error_handlers import register_error_handlers
from rigbench.api.routes import (
    actuator_calibrations, detection_settings, display_calibrations, health,
    reference_values, specimen_tests,
)
from rigbench.config import get_settings
from rigbench.infrastructure.database import close_db, init_db
from rigbench.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("RigBench API started")
    yield
    logger.info("RigBench API shutting down")
    await close_db()


app = FastAPI(title="RigBench API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(actuator_calibrations.router)
app.include_router(display_calibrations.router)
app.include_router(detection_settings.router)
app.include_router(specimen_tests.router)
app.include_router(reference_values.router)

register_error_handlers(app)
