# sales_dashboard/logging/dao.py
"""Request log persistence and lookup on the application database."""

from datetime import datetime, timedelta
from typing import List

from sqlalchemy import String, cast, desc, func, or_, select
from sqlalchemy.orm import Session

from sales_dashboard.core.base_dao import BaseDAO
from sales_dashboard.logging.models import RequestLog
from sales_dashboard.logging.schemas import LogFilters

# Columns matched by the free-text log search
_SEARCHABLE = ("path", "method", "query_string", "client_ip", "error_type")


class LogDAO(BaseDAO[RequestLog]):
    """DAO for request log rows."""

    def __init__(self, db_session: Session):
        super().__init__(RequestLog, db_session)

    def record(self, **fields) -> RequestLog:
        """Persist one request log row."""
        log = RequestLog(**fields)
        self.db.add(log)
        self.db.commit()
        return log

    def _where(self, query, filters: LogFilters):
        since = datetime.now() - timedelta(hours=filters.hours)
        query = query.where(RequestLog.timestamp >= since)

        if filters.status_min is not None:
            query = query.where(RequestLog.status_code >= filters.status_min)
        if filters.status_max is not None:
            query = query.where(RequestLog.status_code <= filters.status_max)

        if filters.search:
            pattern = f"%{filters.search}%"
            matches = [getattr(RequestLog, column).ilike(pattern) for column in _SEARCHABLE]
            matches.append(cast(RequestLog.status_code, String).ilike(pattern))
            query = query.where(or_(*matches))
        return query

    def find(self, filters: LogFilters, offset: int = 0, limit: int = 50) -> List[RequestLog]:
        """Matching logs, newest first."""
        query = self._where(select(RequestLog), filters)
        query = query.order_by(desc(RequestLog.timestamp), desc(RequestLog.id)).offset(offset).limit(limit)
        return self._all(query)

    def count_matching(self, filters: LogFilters) -> int:
        return self._scalar(self._where(select(func.count()).select_from(RequestLog), filters))
