"""Tenant Notes API - FastAPI Application Entry Point.

Run with:
    uvicorn notes_api.main:create_app --factory
"""

import logging
import time
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_api import __version__
from notes_api.config import Settings, load_settings
from notes_api.context import request_id_var, tenant_id_var, user_id_var
from notes_api.db.engine import build_engine, build_sessionmaker, is_sqlite_url
from notes_api.db.models import Base
from notes_api.errors import AppError, ValidationError
from notes_api.routers import auth, health, notes, tenants
from notes_api.schemas import ErrorResponse
from notes_api.utils import configure_json_logging, configure_plain_logging

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    error: str,
    code: str,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, code=code, request_id=request_id_var.get() or None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers=headers,
    )


def _request_id_headers() -> Optional[dict[str, str]]:
    request_id = request_id_var.get()
    return {"X-Request-ID": request_id} if request_id else None


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    Settings are loaded once here (fail-fast on a missing JWT_SECRET) and
    kept on ``app.state`` together with the engine and sessionmaker.

    Args:
        settings: Pre-built settings (tests); loaded from the environment if None
    """
    settings = settings or load_settings()

    if settings.json_logs:
        configure_json_logging(log_level=settings.log_level)
    else:
        configure_plain_logging(log_level=settings.log_level)

    app = FastAPI(
        title="Tenant Notes API",
        description="Multi-tenant notes with tenant isolation, role checks and subscription quotas.",
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
    )

    engine = build_engine(settings.database_url)
    if is_sqlite_url(settings.database_url):
        # PostgreSQL schema is managed by Alembic
        Base.metadata.create_all(engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)

    # Never "*" with credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # ========================================================================
    # HTTP Request Completion Logging Middleware
    # ========================================================================

    @app.middleware("http")
    async def http_completion_logging_middleware(request: Request, call_next):
        """Log every HTTP request completion.

        - Every HTTP request emits "http.request.completed"
        - Fields: method, path, status_code, duration_ms, plus the caller's
          tenant/user once authenticated
        - Logs even on exceptions (status_code=500)
        - Clears identity contextvars at start and end
        """
        tenant_id_var.set("")
        user_id_var.set("")

        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "http.request.completed",
                extra={
                    "event": "http.request.completed",
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                    "caller_tenant_id": getattr(request.state, "tenant_id", None),
                    "caller_user_id": getattr(request.state, "user_id", None),
                },
            )
            tenant_id_var.set("")
            user_id_var.set("")

    # ========================================================================
    # Request ID Middleware (MUST BE OUTERMOST)
    # ========================================================================

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Accept or generate X-Request-ID and echo it on the response.

        Registered last so it wraps every other middleware and the request
        id is set before they run.
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # ========================================================================
    # Exception Handlers
    # ========================================================================

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Render a classified error from its own code and status."""
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return _error_response(exc.status_code, exc.message, exc.code, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _error_response(
            exc.status_code,
            detail,
            f"HTTP_{exc.status_code}",
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed request bodies are 400 VALIDATION_ERROR, not 422."""
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", []))
        msg = first_error.get("msg", "Validation error")
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid field '{field}': {msg}",
            ValidationError.code,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Unclassified failure: log with traceback, never leak details.

        Runs outside the request-id middleware, so the header is set here.
        """
        logger.error(
            "Unhandled exception",
            extra={"event": "http.unhandled_exception", "error_type": type(exc).__name__},
            exc_info=True,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            "INTERNAL_ERROR",
            headers=_request_id_headers(),
        )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(notes.router)
    app.include_router(tenants.router)

    logger.info(
        "Application created",
        extra={
            "event": "app.created",
            "app_env": settings.app_env,
            "enforce_session_revocation": settings.enforce_session_revocation,
        },
    )
    return app
