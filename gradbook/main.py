"""Gradbook API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GradbookError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage initialized (and optionally seeded) on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: GradbookError (domain), RequestValidationError
      (Pydantic), Exception (catch-all): never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gradbook.api.dependencies import close_repository, init_repository
from gradbook.api.error_handlers import register_error_handlers
from gradbook.api.routes import graduates, health, reports
from gradbook.config import get_settings
from gradbook.infrastructure.observability import setup_logging
from gradbook.services.seed import seed_demo_records

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    repository = init_repository(settings)
    if settings.seed_demo_data:
        seed_demo_records(repository)
    logger.info("Gradbook API started")
    yield
    close_repository()
    logger.info("Gradbook API shutting down")


app = FastAPI(
    title="Gradbook API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(graduates.router)
app.include_router(reports.router)

register_error_handlers(app)
