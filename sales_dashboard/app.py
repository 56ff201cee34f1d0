"""FastAPI application entry point for the sales dashboard."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import ResponseValidationError, RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sales_dashboard.core import config
from sales_dashboard.core.database import init_db
from sales_dashboard.core.exceptions import QueryValidationError, StoreUnavailableError
from sales_dashboard.core.router import register_routes
from sales_dashboard.logging.middleware import LoggingMiddleware
from sales_dashboard.logging.exception_handlers import (
    store_unavailable_exception_handler,
    query_validation_exception_handler,
    response_validation_exception_handler,
    request_validation_exception_handler,
    general_exception_handler,
    http_exception_handler,
)


def create_app() -> FastAPI:

    app = FastAPI(
        title="Sales Dashboard API",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    init_db()

    # Add request logger middleware
    if config.REQUEST_LOGGING_ENABLED:
        app.add_middleware(LoggingMiddleware)

    # Domain errors from the query builder and record store
    app.add_exception_handler(QueryValidationError, query_validation_exception_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_exception_handler)

    # Framework errors -- response validation errors aren't captured by middleware
    app.add_exception_handler(ResponseValidationError, response_validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_routes(app)

    return app
