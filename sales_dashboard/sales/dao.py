# sales_dashboard/sales/dao.py
"""Record store access for sales records: executes QuerySpec predicates with SQLAlchemy."""

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import select, func, and_, or_, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from sales_dashboard.core.base_dao import BaseDAO
from sales_dashboard.core.exceptions import StoreUnavailableError
from sales_dashboard.query.schemas import (
    AnyOf,
    ContainsText,
    DateTimeRange,
    InSet,
    NumericRange,
    Ordering,
    Predicate,
    TagsIntersect,
)
from sales_dashboard.sales.models import SalesRecord, SalesRecordTag

logger = logging.getLogger(__name__)

# Columns predicates may reference
FILTERABLE_FIELDS = frozenset(
    {
        "customer_name",
        "phone_number",
        "gender",
        "age",
        "customer_region",
        "product_category",
        "payment_method",
        "quantity",
        "date",
    }
)
ORDERABLE_FIELDS = frozenset({"customer_name", "date", "quantity"})
DISTINCT_FIELDS = frozenset({"customer_region", "gender", "product_category", "payment_method"})


class SalesRecordDAO(BaseDAO[SalesRecord]):
    """DAO for the read-only sales record store."""

    def __init__(self, db_session: Session):
        super().__init__(SalesRecord, db_session)

    @contextmanager
    def _store_errors(self, operation: str):
        """Translate SQLAlchemy failures into StoreUnavailableError."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error("Sales record store failed to %s: %s", operation, e)
            raise StoreUnavailableError(f"Failed to {operation}", detail=str(e)) from e

    # ===== PREDICATE TRANSLATION =====

    def _column(self, field: str, allowed: frozenset = FILTERABLE_FIELDS):
        if field not in allowed:
            raise ValueError(f"Unsupported sales record field: {field}")
        return getattr(SalesRecord, field)

    def to_clause(self, predicate: Predicate):
        """Translate one predicate into a SQLAlchemy boolean clause."""
        if isinstance(predicate, InSet):
            return self._column(predicate.field).in_(sorted(predicate.values))

        if isinstance(predicate, ContainsText):
            return self._column(predicate.field).icontains(predicate.text, autoescape=True)

        if isinstance(predicate, NumericRange):
            column = self._column(predicate.field)
            conditions = []
            if predicate.low is not None:
                conditions.append(column >= predicate.low)
            if predicate.high is not None:
                conditions.append(column <= predicate.high)
            return and_(*conditions) if conditions else true()

        if isinstance(predicate, TagsIntersect):
            return SalesRecord.tag_rows.any(SalesRecordTag.tag.in_(sorted(predicate.values)))

        if isinstance(predicate, DateTimeRange):
            return self._column(predicate.field).between(predicate.start, predicate.end)

        if isinstance(predicate, AnyOf):
            return or_(*[self.to_clause(inner) for inner in predicate.predicates])

        raise TypeError(f"Unsupported predicate type: {type(predicate).__name__}")

    def _apply_predicates(self, query, predicates: Iterable[Predicate]):
        clauses = [self.to_clause(predicate) for predicate in predicates]
        if clauses:
            query = query.where(and_(*clauses))
        return query

    # ===== RECORD QUERIES =====

    def count_records(self, predicates: Iterable[Predicate]) -> int:
        """Count records matching every predicate."""
        query = self._apply_predicates(select(func.count()).select_from(SalesRecord), predicates)
        with self._store_errors("count sales records"):
            return self._scalar(query)

    def fetch_records(
        self, predicates: Iterable[Predicate], ordering: Ordering, offset: int, limit: int
    ) -> List[SalesRecord]:
        """Fetch one ordered window of matching records with their tags loaded."""
        column = self._column(ordering.field, ORDERABLE_FIELDS)
        order = column.desc() if ordering.descending else column.asc()

        query = select(SalesRecord).options(selectinload(SalesRecord.tag_rows))
        query = self._apply_predicates(query, predicates)
        # id keeps paging stable across rows sharing the sort value
        query = query.order_by(order, SalesRecord.id.asc()).offset(offset).limit(limit)

        with self._store_errors("fetch sales records"):
            return self._all(query)

    def get_by_transaction_id(self, transaction_id: str) -> Optional[SalesRecord]:
        """Get a single record by its transaction identifier."""
        query = (
            select(SalesRecord)
            .options(selectinload(SalesRecord.tag_rows))
            .where(SalesRecord.transaction_id == transaction_id)
        )
        with self._store_errors("fetch sales record"):
            return self._first(query)

    # ===== FILTER OPTIONS =====

    def distinct_values(self, field: str) -> List[str]:
        """Distinct non-empty values of a categorical column."""
        column = self._column(field, DISTINCT_FIELDS)
        query = select(column).where(column.isnot(None), column != "").distinct().order_by(column)
        with self._store_errors(f"load distinct {field} values"):
            return [row[0] for row in self.db.execute(query).all()]

    def distinct_tags(self) -> List[str]:
        """Union of all records' tag sets."""
        query = (
            select(SalesRecordTag.tag)
            .where(SalesRecordTag.tag != "")
            .distinct()
            .order_by(SalesRecordTag.tag)
        )
        with self._store_errors("load distinct tags"):
            return [row[0] for row in self.db.execute(query).all()]

    # ===== AGGREGATES =====

    def aggregate_totals(self, predicates: Iterable[Predicate]) -> Tuple[int, Decimal, int]:
        """Return (total units, total final amount, record count) over matching records."""
        query = select(
            func.coalesce(func.sum(SalesRecord.quantity), 0),
            func.coalesce(func.sum(SalesRecord.final_amount), 0),
            func.count(SalesRecord.id),
        ).select_from(SalesRecord)
        query = self._apply_predicates(query, predicates)

        with self._store_errors("aggregate sales summary"):
            total_units, total_revenue, total_sales = self.db.execute(query).one()
        return int(total_units), Decimal(str(total_revenue)), int(total_sales)
