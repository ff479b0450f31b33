# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from timeclock import __version__
from timeclock.config import settings
from timeclock.exceptions import TimeclockError, ValidationError
from timeclock.schemas.common import ErrorResponse, HealthResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting Timeclock {__version__}")
    yield
    logger.info("Shutting down Timeclock")


app = FastAPI(
    title="Timeclock",
    description="Attendance calendar and active-timer backend",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TimeclockError)
async def timeclock_error_handler(request: Request, exc: TimeclockError) -> JSONResponse:
    """Map domain errors to their HTTP status and code."""
    if exc.http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.http_status,
        content=ErrorResponse(detail=exc.message, code=exc.code).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests with the same shape as domain validation errors."""
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=ValidationError.http_status,
        content=ErrorResponse(detail=detail, code=ValidationError.code).model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# Import and include API router after it's created
from timeclock.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")
