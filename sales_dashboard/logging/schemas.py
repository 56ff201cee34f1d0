"""Schemas for the request log viewer."""
from dataclasses import dataclass
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class LogFilters:
    """Filters shared by the log listing and its total count."""
    hours: int = 24
    status_min: Optional[int] = None
    status_max: Optional[int] = None
    search: Optional[str] = None


class RequestLogRead(BaseModel):
    """One persisted request as returned by /api/logs."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
    method: str
    path: str
    query_string: Optional[str] = None
    status_code: int
    client_ip: Optional[str] = None
    request_headers: Optional[str] = None
    response_body: Optional[str] = None
    error_type: Optional[str] = None
    processing_time: Optional[float] = None  # ms
    user_agent: Optional[str] = None
    username: Optional[str] = None
    hostname: Optional[str] = None
    application_id: Optional[str] = None
