# sales_dashboard/logging/router.py
"""Read-only viewer over the persisted request log."""

from fastapi import APIRouter, Depends, Query, Response, HTTPException
from typing import List, Optional

from sales_dashboard.core.dependencies import SessionDep
from sales_dashboard.logging.dao import LogDAO
from sales_dashboard.logging.schemas import LogFilters, RequestLogRead
from sales_dashboard.logging.service import LogService

router = APIRouter(prefix="/logs", tags=["Logs"])


def get_log_service(session: SessionDep) -> LogService:
    """Get LogService instance."""
    return LogService(LogDAO(session))


def get_log_filters(
    hours: int = Query(24, ge=1, le=168, description="Look back this many hours"),
    status_min: Optional[int] = Query(None, ge=100, le=599, description="Lowest status code to include"),
    status_max: Optional[int] = Query(None, ge=100, le=599, description="Highest status code to include"),
    search: Optional[str] = Query(
        None, description="Matches path, method, query string, client IP, error type or status"
    ),
) -> LogFilters:
    if status_min is not None and status_max is not None and status_min > status_max:
        raise HTTPException(status_code=400, detail="status_min cannot be greater than status_max")
    return LogFilters(hours=hours, status_min=status_min, status_max=status_max, search=search)


@router.get("", response_model=List[RequestLogRead])
def list_logs(
    response: Response,
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=1000),
    filters: LogFilters = Depends(get_log_filters),
    service: LogService = Depends(get_log_service),
) -> List[RequestLogRead]:
    """List request logs, newest first. The total match count is in X-Total-Count."""
    logs, total_count = service.get_logs(filters, offset=offset, limit=limit)

    response.headers.update(
        {"X-Total-Count": str(total_count), "X-Page-Size": str(limit), "X-Page-Offset": str(offset)}
    )
    return logs


@router.get("/errors", response_model=List[RequestLogRead])
def list_error_logs(
    hours: int = Query(24, ge=1, le=168),
    limit: int = Query(100, ge=1, le=500),
    service: LogService = Depends(get_log_service),
) -> List[RequestLogRead]:
    """Most recent 4xx/5xx responses."""
    return service.get_error_logs(hours=hours, limit=limit)
