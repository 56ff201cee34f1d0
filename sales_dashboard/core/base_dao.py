# sales_dashboard/core/base_dao.py
"""Generic read-only base DAO."""

from typing import Generic, TypeVar, List, Optional, Type
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseDAO(Generic[ModelType], ABC):
    """Holds the model and session; subclasses build the queries."""

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def _all(self, query: Select) -> List[ModelType]:
        """Execute a select and return every ORM row."""
        return list(self.db.execute(query).scalars().all())

    def _first(self, query: Select) -> Optional[ModelType]:
        return self.db.execute(query).scalars().first()

    def _scalar(self, query: Select):
        """Execute a select returning exactly one scalar, such as a count."""
        return self.db.execute(query).scalar_one()
