# sales_dashboard/core/exceptions.py
"""Domain exceptions raised by the query builder and the record store."""

from typing import Optional


class QueryValidationError(Exception):
    """A dashboard request could not be turned into a query."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class StoreUnavailableError(Exception):
    """The sales record store could not be reached or returned unusable data."""

    def __init__(self, message: str = "Sales record store unavailable", detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
