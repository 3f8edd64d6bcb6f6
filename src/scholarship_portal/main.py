"""
Scholarship Portal API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Database resource (engine + connection pool) and optional Redis
- Document store for uploads
- CORS middleware
- Error response shape
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scholarship_portal.api import api_router
from scholarship_portal.core.config import settings
from scholarship_portal.core.database import close_db, init_db
from scholarship_portal.core.logging_config import setup_logging
from scholarship_portal.core.redis import close_redis, init_redis
from scholarship_portal.core.storage import DocumentStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the database resource, Redis and the document store on startup
    and releases them on shutdown.
    """
    setup_logging(settings.log_level)
    logger.info(f"Starting Scholarship Portal API in {settings.python_env} mode...")

    app.state.database = None
    try:
        app.state.database = await init_db(settings)
        logger.info("[OK] Database connected")
    except Exception as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    # Redis only backs rate limiting; counters fall back to memory without it
    try:
        await init_redis()
        logger.info("[OK] Redis connected")
    except Exception as e:
        logger.warning(f"[FAIL] Redis connection failed, rate limiting in memory: {e}")

    app.state.document_store = DocumentStore(settings.upload_dir)
    app.state.document_store.ensure_root()
    logger.info(f"[OK] Upload directory ready: {settings.upload_dir}")

    yield  # Application runs here

    logger.info("Shutting down Scholarship Portal API...")
    await close_redis()
    await close_db(app.state.database)
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="Scholarship Portal API",
    description="Scholarship application portal: schemes, applications and admin review",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# Error Responses
# ============================================
# Every error leaves the API as {"error": <message>, "code": <CODE>}.


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "code": code})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        response = error_response(
            exc.status_code,
            detail.get("message", "Error"),
            detail.get("error", "ERROR"),
        )
    else:
        response = error_response(exc.status_code, str(detail), "ERROR")

    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted(
        {str(err["loc"][-1]) for err in exc.errors() if err.get("loc")},
    )
    message = "Invalid or missing fields"
    if fields:
        message = f"{message}: {', '.join(fields)}"
    logger.warning(f"Validation failed on {request.url.path}: {fields}")
    return error_response(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Server error",
        "INTERNAL_ERROR",
    )


# ============================================
# Health Endpoints
# ============================================


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness check: the database accepts connections."""
    database = getattr(request.app.state, "database", None)
    try:
        if database is None:
            raise RuntimeError("database not initialized")
        await database.ping()
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )
    return JSONResponse(content={"status": "ready"})


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "scholarship_portal.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
