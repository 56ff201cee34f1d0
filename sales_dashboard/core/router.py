"""
Module for registering routes in the FastAPI application.
"""

from fastapi import FastAPI

from sales_dashboard.sales.router import router as sales_router
from sales_dashboard.logging.router import router as log_router


def register_routes(app: FastAPI) -> None:
    """
    Registers all the routes for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    app.include_router(sales_router, prefix="/api")
    app.include_router(log_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    def health_check() -> dict:
        return {"status": "ok", "message": "Sales Management API is running"}
