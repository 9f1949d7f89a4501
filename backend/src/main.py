"""Gazette Backend - Main FastAPI Application

Attachment access control for the official gazette editorial workflow.

This module creates and configures the main FastAPI application, including:
- API routers (auth, attachments, observability)
- Middleware (request ID correlation, CORS)
- Exception handlers mapping the error taxonomy to JSON bodies
- Startup checks for the authentication configuration
"""

import os
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from errors import AppError

# Observability
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router

# Authentication
from auth.bypass import check_bypass_configuration
from auth.router import router as auth_router

# Domain Routers
from attachments.router import router as attachments_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Startup: refuse AUTH_BYPASS in production, warn about missing secrets
    - Shutdown: log only
    """
    current = get_settings()
    logger.info("Gazette API starting up...")
    logger.info(f"Environment: {current.ENVIRONMENT}")

    check_bypass_configuration(current)
    if not current.JWT_SECRET:
        logger.error("JWT_SECRET is not set: every authenticated request will fail with 500")
    if not current.PASSWORD_PEPPER:
        logger.error("PASSWORD_PEPPER is not set: login is unavailable")

    yield

    logger.info("Gazette API shutting down...")


app = FastAPI(
    title="Gazette API",
    description="Official gazette editorial backend: matter attachments",
    version="0.1.0",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url=None if settings.is_production else "/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-File-Name", "X-File-Size", "X-File-Type", "Content-Disposition"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error_body(message: str, details: Any = None) -> dict:
    body = {"error": message}
    if details is not None and not get_settings().is_production:
        body["details"] = details
    return body


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an expected failure as ``{"error": message}``.

    401 responses carry a Bearer challenge.
    """
    if exc.status_code >= 500:
        logger.error(
            f"{exc.kind} on {request.method} {request.url.path}: {exc.message}",
            extra={"status_code": exc.status_code},
        )
    else:
        logger.info(
            f"{exc.kind} on {request.method} {request.url.path}",
            extra={"status_code": exc.status_code},
        )

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=headers,
    )


def _validation_details(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level details."""
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("Requisição inválida", _validation_details(exc)),
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle database errors.

    Logs the full error but returns a generic message to prevent
    information leakage.
    """
    logger.error(
        f"Database error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Erro interno do servidor", str(exc)),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle uncaught exceptions with a generic 500 body."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Erro interno do servidor", str(exc)),
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

# Observability (health, metrics)
app.include_router(observability_router)

app.include_router(auth_router)
app.include_router(attachments_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, Any]:
    """Root endpoint - API information."""
    return {
        "name": "Gazette API",
        "version": "0.1.0",
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=not settings.is_production,
        log_level=settings.LOG_LEVEL.lower(),
    )
