"""FastAPI main application."""

import logging
from contextlib import asynccontextmanager
from decimal import Decimal

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from retirement_planner.api.v1 import retirement
from retirement_planner.config import settings
from retirement_planner.core.logging_config import get_logger, setup_logging
from retirement_planner.utils.profile_validation import ProjectionInputError

_logger = logging.getLogger(__name__)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info(
        "app_started",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )
    yield
    logger.info("app_stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Retirement projection and tax-aware withdrawal planning API",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GZip compression for API responses > 1KB
app.add_middleware(GZipMiddleware, minimum_size=1000)


def _make_json_serializable(obj):
    """Recursively convert non-JSON-serializable types to serializable ones."""
    if isinstance(obj, dict):
        return {k: _make_json_serializable(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_make_json_serializable(i) for i in obj]
    if isinstance(obj, tuple):
        return [_make_json_serializable(i) for i in obj]
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, type):
        return str(obj)
    if isinstance(obj, Exception):
        return str(obj)
    return obj


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    _logger.debug("Validation error on %s: %s", request.url, exc.errors())
    errors = _make_json_serializable(exc.errors())
    return JSONResponse(
        status_code=422,
        content={"detail": errors},
    )


@app.exception_handler(ProjectionInputError)
async def projection_input_exception_handler(request: Request, exc: ProjectionInputError):
    logger.info("projection_input_rejected", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(retirement.router, prefix="/api/v1/retirement", tags=["Retirement"])

