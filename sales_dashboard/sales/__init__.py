# sales_dashboard/sales/__init__.py

from .models import SalesRecord, SalesRecordTag
from .dao import SalesRecordDAO

__all__ = [
    # Models
    "SalesRecord",
    "SalesRecordTag",
    # DAOs
    "SalesRecordDAO",
]
