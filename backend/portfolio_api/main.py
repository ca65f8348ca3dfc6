# backend/portfolio_api/main.py
"""
FastAPI application entry point.

Wires together logging, middleware, the error envelope and the routers.
Run with:

    uvicorn portfolio_api.main:app --reload
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api import __version__
from portfolio_api.config import settings
from portfolio_api.middleware import CorrelationIdMiddleware
from portfolio_api.routers import health_router, performance_router
from portfolio_api.schemas.errors import (
    ErrorDetail,
    FieldError,
    ValidationErrorDetail,
    internal_server_error,
)
from portfolio_api.services.exceptions import NotFoundError, ServiceError
from portfolio_api.utils import setup_logging

logger = logging.getLogger(__name__)

# Before the app exists, so startup messages are formatted too
setup_logging()

app = FastAPI(
    title=settings.app_name,
    description="Portfolio valuation over time: gains, daily value and allocation",
    version=__version__,
)

# Last added runs first: correlation IDs are bound before CORS handling
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# ERROR ENVELOPE
# =============================================================================
# Every error leaves as ErrorDetail / ValidationErrorDetail. Service
# exceptions carry no status code; it is chosen here.
# =============================================================================

def _error_response(status_code: int, error: str, message: str, details=None, headers=None) -> JSONResponse:
    body = ErrorDetail(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _http_error_name(status_code: int) -> str:
    """404 -> 'NotFoundError', 503 -> 'ServiceUnavailableError'."""
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return "HTTPError"
    name = "".join(word.capitalize() for word in phrase.replace("-", " ").split())
    return name if name.endswith("Error") else f"{name}Error"


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        logger.warning(f"{type(exc).__name__}: {exc}")
        status_code = 404
    else:
        logger.error(f"Service error: {exc}")
        status_code = 400

    return _error_response(status_code, type(exc).__name__, str(exc), exc.details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and explicit HTTPExceptions."""
    return _error_response(
        exc.status_code,
        _http_error_name(exc.status_code),
        str(exc.detail) if exc.detail else "An error occurred",
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Bad or missing query parameters (e.g. startDate='yesterday')."""
    field_errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            type=error["type"],
        )
        for error in exc.errors()
    ]
    body = ValidationErrorDetail(details=field_errors)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Backstop for failures outside CorrelationIdMiddleware; route failures
    are turned into the same 500 there, with the correlation ID attached.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=internal_server_error().model_dump())


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(performance_router)  # /api/portfolios/{id}/performance
app.include_router(health_router)       # /health, /health/live, /health/ready


@app.get("/", tags=["Health"])
def root():
    """Where to find the interactive docs."""
    return {
        "message": f"Welcome to {settings.app_name}!",
        "docs": "/docs",
        "redoc": "/redoc",
    }
