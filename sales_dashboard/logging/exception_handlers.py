# sales_dashboard/logging/exception_handlers.py

import json
import logging
import traceback
from datetime import datetime

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import ResponseValidationError, RequestValidationError

from sales_dashboard.core.exceptions import QueryValidationError, StoreUnavailableError
from sales_dashboard.logging.middleware import persist_request_log

logger = logging.getLogger(__name__)


def safe_json_dumps(obj):
    def default(o):
        return str(o)
    return json.dumps(obj, indent=2, default=default)


def _convert_error(error):
    """Convert validation error structures to JSON-safe values."""
    if isinstance(error, dict):
        return {k: _convert_error(v) for k, v in error.items()}
    elif isinstance(error, (list, tuple)):
        return [_convert_error(item) for item in error]
    elif isinstance(error, (int, float, bool)) or error is None:
        return error
    return str(error)


async def store_unavailable_exception_handler(request: Request, exc: StoreUnavailableError):
    """The record store failed; surface a generic message plus the diagnostic detail."""
    request.state.error_type = type(exc).__name__
    return JSONResponse(
        status_code=500,
        content={"error": exc.message, "details": exc.detail},
    )


async def query_validation_exception_handler(request: Request, exc: QueryValidationError):
    """Reject malformed paging or date inputs."""
    request.state.error_type = type(exc).__name__
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "field": exc.field},
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    request.state.error_type = type(exc).__name__
    return JSONResponse(
        status_code=422,
        content={"detail": _convert_error(exc.errors())},
    )


async def response_validation_exception_handler(request: Request, exc: ResponseValidationError):
    request.state.error_type = type(exc).__name__
    logger.error("Response validation failed for %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error: Response validation failed."},
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions raised by routers"""
    if exc.status_code >= 400:
        request.state.error_type = type(exc).__name__
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions and log them to database"""
    error_traceback = traceback.format_exc()
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)

    # Unhandled errors bypass the logging middleware, so persist them here
    persist_request_log(
        request,
        500,
        response_body=safe_json_dumps(
            {"error": str(exc), "type": type(exc).__name__, "traceback": error_traceback, "at": datetime.now()}
        ),
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )
