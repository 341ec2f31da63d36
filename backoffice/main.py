"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backoffice.api.v1 import health, numbering_rules
from backoffice.config import settings
from backoffice.db import dispose_engine
from backoffice.logging import setup_logging
from backoffice.services.exceptions import NotFoundError, ServiceError, ValidationError

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info(
        "Starting Back Office API",
        debug=settings.debug,
        timezone=settings.timezone,
        database="sqlite" if settings.is_sqlite else "postgresql",
    )

    yield

    logger.info("Shutting down Back Office API")
    await dispose_engine()
    logger.info("Database connections disposed")


app = FastAPI(
    title="Back Office API",
    description="Numbering rules and document number generation for the retail back office",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(numbering_rules.router, prefix="/api/v1", tags=["numbering-rules"])


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Fallback for service errors a route did not translate into an HTTPException."""
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    logger.warning("Unhandled service error", path=request.url.path, error=str(exc), status_code=status_code)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})
