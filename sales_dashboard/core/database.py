# sales_dashboard/core/database.py
"""Database configuration for the application database and the sales record store."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from sales_dashboard.core.config import DATABASE_URL, SALES_DATABASE_URL

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


# ===== APPLICATION DATABASE =====
# Stores request logs written by the logging middleware
engine = create_engine(DATABASE_URL, connect_args=_connect_args(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# ===== SALES RECORD STORE =====
# Externally populated; this service only reads from it
sales_engine = create_engine(SALES_DATABASE_URL, connect_args=_connect_args(SALES_DATABASE_URL))
SalesSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sales_engine)
SalesBase = declarative_base()


# ===== SESSION GENERATORS =====


def get_db():
    """Get application database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_sales_db():
    """Get sales record store session."""
    db = SalesSessionLocal()
    try:
        yield db
    finally:
        db.close()


# ===== TABLE CREATION =====


def init_db():
    """Create the application tables. The sales store schema is owned by its ingestion process."""
    from sales_dashboard.logging.models import RequestLog  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Application database initialized")


def create_sales_tables(bind=None):
    """Create the sales record store schema (development and tests only)."""
    from sales_dashboard.sales.models import SalesRecord, SalesRecordTag  # noqa: F401

    SalesBase.metadata.create_all(bind=bind or sales_engine)


def drop_sales_tables(bind=None):
    """Drop the sales record store schema (use with caution!)."""
    from sales_dashboard.sales.models import SalesRecord, SalesRecordTag  # noqa: F401

    SalesBase.metadata.drop_all(bind=bind or sales_engine)
