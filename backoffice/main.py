"""
Back office application factory.

Run with:
    uvicorn backoffice.main:create_app --factory
"""
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.api.v1 import api_router
from backoffice.config import CORS_ORIGINS, LOG_FILE, LOG_LEVEL
from backoffice.database import Store
from backoffice.exceptions import BackofficeError
from backoffice.services.notifications import NotificationService
from backoffice.utils import setup_logging, get_logger

SERVICE_NAME = "affiliate-backoffice"
VERSION = "1.0.0"

logger = get_logger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error_response(request: Request, status_code: int, message, **extra) -> JSONResponse:
    """Every failure leaves the API in the same envelope."""
    content = {"success": False, "message": message, "request_id": _request_id(request)}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def create_app(store: Optional[Store] = None, notifier: Optional[NotificationService] = None) -> FastAPI:
    """Build the application.

    Args:
        store: relational store; a new one is built from ``DATABASE_URL`` when omitted
        notifier: notification service; defaults to one using ``NOTIFICATION_SETTINGS``

    The app owns the store it creates and disposes it on shutdown. A store
    passed in by the caller is left open.
    """
    setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE, enable_console=True)

    owns_store = store is None
    store = store or Store()
    notifier = notifier or NotificationService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.create_all()
        logger.info("Back office started", database_url=store.url)
        try:
            yield
        finally:
            if owns_store:
                store.dispose()
            logger.info("Back office stopped")

    app = FastAPI(
        title="Affiliate Management Back Office",
        version=VERSION,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/api/v1/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.notifier = notifier

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Tag the request with an id and log its outcome and duration."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(elapsed_ms)
        response.headers["X-Content-Type-Options"] = "nosniff"

        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=elapsed_ms,
            request_id=request_id,
        )
        return response

    @app.exception_handler(BackofficeError)
    async def backoffice_error_handler(request: Request, exc: BackofficeError):
        logger.warning(
            "Domain error",
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            detail=exc.message,
            path=request.url.path,
            request_id=_request_id(request),
        )
        return _error_response(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning("Request validation failed", errors=errors, path=request.url.path, request_id=_request_id(request))
        return _error_response(request, 422, "Request validation failed", details=errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning("HTTP error", status_code=exc.status_code, detail=exc.detail, path=request.url.path)
        return _error_response(request, exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            request_id=_request_id(request),
            exc_info=True,
        )
        return _error_response(request, 500, "Internal server error")

    @app.get("/health", tags=["health"])
    async def health_check():
        return {"status": "healthy", "service": SERVICE_NAME, "version": VERSION, "timestamp": time.time()}

    @app.get("/health/detailed", tags=["health"])
    async def detailed_health_check(request: Request):
        """Adds a database round trip; reports ``degraded`` when it fails."""
        try:
            request.app.state.store.ping()
            database = "healthy"
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            database = f"unhealthy: {e}"
        return {
            "status": "healthy" if database == "healthy" else "degraded",
            "service": SERVICE_NAME,
            "version": VERSION,
            "timestamp": time.time(),
            "checks": {"database": database},
        }

    @app.get("/", tags=["root"])
    async def root():
        return {"service": SERVICE_NAME, "version": VERSION, "documentation": "/docs", "api_base": "/api/v1"}

    app.include_router(api_router, prefix="/api/v1")
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backoffice.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
