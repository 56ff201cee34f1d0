# sales_dashboard/logging/service.py
"""Read side of the request log."""

from typing import List, Tuple

from sales_dashboard.core.base_service import BaseService
from sales_dashboard.logging.dao import LogDAO
from sales_dashboard.logging.models import RequestLog
from sales_dashboard.logging.schemas import LogFilters, RequestLogRead

ERROR_STATUS_RANGE = (400, 599)


class LogService(BaseService[RequestLog, RequestLogRead]):
    """Retrieves request logs for troubleshooting the dashboard API."""

    response_model = RequestLogRead

    def __init__(self, log_dao: LogDAO):
        self.log_dao = log_dao

    def get_logs(self, filters: LogFilters, offset: int = 0, limit: int = 50) -> Tuple[List[RequestLogRead], int]:
        """One window of matching logs plus the total number of matches."""
        logs = self._to_responses(self.log_dao.find(filters, offset=offset, limit=limit))
        return logs, self.log_dao.count_matching(filters)

    def get_error_logs(self, hours: int = 24, limit: int = 100) -> List[RequestLogRead]:
        """Most recent 4xx and 5xx logs."""
        low, high = ERROR_STATUS_RANGE
        filters = LogFilters(hours=hours, status_min=low, status_max=high)
        return self._to_responses(self.log_dao.find(filters, limit=limit))
