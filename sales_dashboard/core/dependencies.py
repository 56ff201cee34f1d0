# sales_dashboard/core/dependencies.py
"""FastAPI dependencies shared across routers."""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session
from sales_dashboard.core.database import get_db, get_sales_db

# Core database dependencies
SessionDep = Annotated[Session, Depends(get_db)]
SalesSessionDep = Annotated[Session, Depends(get_sales_db)]


def get_query_builder():
    """Get a query builder configured from the environment."""
    from sales_dashboard.core import config
    from sales_dashboard.query import SalesQueryBuilder, CombineMode

    return SalesQueryBuilder(
        default_page_size=config.DEFAULT_PAGE_SIZE,
        max_page_size=config.MAX_PAGE_SIZE,
        search_age_mode=CombineMode(config.SEARCH_AGE_COMBINE_MODE),
    )
