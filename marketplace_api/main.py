import logging
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from marketplace_api.db.connection import dispose_engine
from marketplace_api.db.connection import get_database_type as _connection_get_database_type
from marketplace_api.db.connection import get_database_url as _connection_get_database_url
from marketplace_api.db.connection import get_engine as _connection_get_engine

from .api import auth, products
from .errors import MarketplaceError
from .schemas.error import ErrorType, ValidationErrorDetail
from .settings import AppSettings, get_settings
from .utils.error_responses import (
    build_domain_error_response,
    build_error_response,
    build_validation_error_response,
)
from .utils.request_context import get_request_id, set_request_id

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment(active_settings: AppSettings | None = None) -> None:
    """Log a warning for every recommended setting that is missing."""

    warnings = (active_settings or get_settings()).optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning("  • %s", warning)
        logger.warning("=" * 60)


def _sanitize_database_url(url: str) -> str:
    """Sanitize database URL to hide password in logs."""
    if "://" not in url:
        return url

    scheme, rest = url.split("://", 1)
    if "@" not in rest:
        return url

    auth_part, host_db = rest.split("@", 1)
    if ":" in auth_part:
        user, _ = auth_part.split(":", 1)
        return f"{scheme}://{user}:***@{host_db}"
    return f"{scheme}://{auth_part}@{host_db}"


def get_database_type() -> str:
    """Module-level proxy so tests can patch ``marketplace_api.main.get_database_type``."""

    return _connection_get_database_type()


def get_database_url() -> str:
    return _connection_get_database_url()


def get_engine() -> AsyncEngine:
    return _connection_get_engine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    validate_environment()

    logger.info("=" * 60)
    logger.info("Marketplace API - Database Preflight Check")
    logger.info("=" * 60)
    logger.info("Database Type: %s", get_database_type().upper())
    logger.info("Database URL: %s", _sanitize_database_url(get_database_url()))
    logger.info("=" * 60)

    from marketplace_api.warmup import warmup_database

    await warmup_database(
        resolve_db_type=get_database_type,
        resolve_engine=get_engine,
    )

    yield

    logger.info("Shutting down Marketplace API")
    await dispose_engine()


app = FastAPI(
    title="Marketplace API",
    version="0.1.0",
    description="Authentication, product catalog and per-user favorites.",
    lifespan=lifespan,
    redirect_slashes=False,
)

allow_origins = settings.cors_allow_origins or ["*"]
logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(MarketplaceError)
async def marketplace_exception_handler(request: Request, exc: MarketplaceError):
    """Map domain errors onto their HTTP status and user-facing message."""
    logger.info(
        "Request %s to %s rejected: %s (%s)",
        get_request_id(),
        request.url.path,
        exc.error_type.value,
        exc.message,
    )

    error_response = build_domain_error_response(exc, path=str(request.url.path))
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request fields as ``invalid_input``."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Invalid request",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(OperationalError)
@app.exception_handler(DBAPIError)
async def database_connection_exception_handler(request: Request, exc: Exception):
    """Handle database connection errors."""
    logger.error(
        "Database error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.DATABASE_ERROR,
        message="Database unavailable",
        detail="Please try again later.",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures and answer with a generic message."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(products.router, prefix="/products", tags=["products"])


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    run()
