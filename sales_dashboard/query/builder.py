"""
SalesQueryBuilder turns a dashboard request into a QuerySpec.

This is the single source of truth for how search, filters, sorting and
pagination combine. It touches no storage, so the same output drives both
the count and the page fetch of a request.
"""

import logging
import re
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sales_dashboard.core.exceptions import QueryValidationError
from .schemas import (
    AnyOf,
    CombineMode,
    ContainsText,
    DateTimeRange,
    FilterCriteria,
    InSet,
    NumericRange,
    Ordering,
    Predicate,
    QuerySpec,
    SortDirection,
    SortField,
    TagsIntersect,
)

# Inclusive age windows per bucket label; None is unbounded
AGE_BUCKETS: Dict[str, Tuple[int, Optional[int]]] = {
    "18-25": (18, 25),
    "26-35": (26, 35),
    "36-45": (36, 45),
    "46-55": (46, 55),
    "55+": (56, None),
}
AGE_RANGE_LABELS: List[str] = list(AGE_BUCKETS)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

# Largest OFFSET or LIMIT a signed 64-bit SQL integer holds
MAX_ROW_INDEX = 2**63 - 1

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Categorical dimensions: FilterCriteria attribute -> SalesRecord attribute
_CATEGORICAL_FIELDS = (
    ("customer_region", "customer_region"),
    ("gender", "gender"),
    ("product_category", "product_category"),
    ("payment_method", "payment_method"),
)


def age_bucket_range(label: str) -> Optional[NumericRange]:
    """Map an age bucket label to its interval, or None for unknown labels."""
    bounds = AGE_BUCKETS.get(label)
    if bounds is None:
        return None
    return NumericRange("age", low=bounds[0], high=bounds[1])


def parse_day(value: str, field: str) -> datetime:
    """Parse a YYYY-MM-DD string to midnight of that day."""
    if not _DATE_PATTERN.match(value):
        raise QueryValidationError(field, f"{field} must use the YYYY-MM-DD format, got {value!r}")
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise QueryValidationError(field, f"{field} is not a valid calendar date: {value!r}") from None


class SalesQueryBuilder:
    """
    Builds QuerySpec objects for the sales record listing.

    ``search_age_mode`` controls how free-text search and age buckets meet.
    The legacy dashboard put both into one disjunction, so a search term and
    an age bucket return the union of their matches. ``CombineMode.AND``
    treats them as independent filters instead.
    """

    def __init__(
        self,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: Optional[int] = None,
        search_age_mode: CombineMode = CombineMode.OR,
    ):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.search_age_mode = search_age_mode

    def build(
        self,
        criteria: Optional[FilterCriteria] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> QuerySpec:
        """Build the complete query for one page of records."""
        page, page_size = self.build_pagination(page, page_size)
        return QuerySpec(
            predicates=self.build_predicates(criteria, search),
            ordering=self.build_ordering(sort_by, sort_order),
            page=page,
            page_size=page_size,
        )

    # ===== PREDICATES =====

    def build_predicates(
        self, criteria: Optional[FilterCriteria] = None, search: Optional[str] = None
    ) -> Tuple[Predicate, ...]:
        """Build the conjunction of predicates shared by the count and fetch queries."""
        criteria = criteria or FilterCriteria()
        predicates: List[Predicate] = []

        search_terms = self._search_alternatives(search)
        age_ranges = self._age_alternatives(criteria.age_range)

        if self.search_age_mode == CombineMode.OR:
            alternatives = search_terms + age_ranges
            if alternatives:
                predicates.append(AnyOf(tuple(alternatives)))
        else:
            if search_terms:
                predicates.append(AnyOf(tuple(search_terms)))
            if age_ranges:
                predicates.append(AnyOf(tuple(age_ranges)))

        predicates.extend(self._categorical_predicates(criteria))

        if criteria.tags:
            predicates.append(TagsIntersect(criteria.tags))

        date_range = self.build_date_range(criteria.date_range_start, criteria.date_range_end)
        if date_range is not None:
            predicates.append(date_range)

        return tuple(predicates)

    def build_summary_predicates(self, criteria: Optional[FilterCriteria] = None) -> Tuple[Predicate, ...]:
        """Predicates for the summary: region and category only."""
        criteria = (criteria or FilterCriteria()).summary_scope()
        return tuple(self._categorical_predicates(criteria))

    def build_date_range(self, start: Optional[str], end: Optional[str]) -> Optional[DateTimeRange]:
        """Inclusive [start 00:00:00, end 23:59:59] range; None unless both ends are given."""
        start_day = parse_day(start, "dateRangeStart") if start else None
        end_day = parse_day(end, "dateRangeEnd") if end else None
        if start_day is None or end_day is None:
            return None
        return DateTimeRange("date", start_day, end_day.replace(hour=23, minute=59, second=59))

    def _search_alternatives(self, search: Optional[str]) -> List[Predicate]:
        if not search:
            return []
        return [ContainsText("customer_name", search), ContainsText("phone_number", search)]

    def _age_alternatives(self, labels) -> List[Predicate]:
        ranges = (age_bucket_range(label) for label in sorted(labels))
        return [age_range for age_range in ranges if age_range is not None]

    def _categorical_predicates(self, criteria: FilterCriteria) -> List[Predicate]:
        predicates: List[Predicate] = []
        for criteria_attr, record_field in _CATEGORICAL_FIELDS:
            values = getattr(criteria, criteria_attr)
            if values:
                predicates.append(InSet(record_field, values))
        return predicates

    # ===== ORDERING =====

    def build_ordering(self, sort_by: Optional[str] = None, sort_order: Optional[str] = None) -> Ordering:
        """Resolve the sort key; unknown keys fall back to customer name."""
        requested = SortDirection.DESC if sort_order == SortDirection.DESC.value else SortDirection.ASC

        if sort_by == SortField.DATE_NEWEST.value:
            return Ordering("date", SortDirection.DESC)
        if sort_by == SortField.DATE_OLDEST.value:
            return Ordering("date", SortDirection.ASC)
        if sort_by == SortField.DATE.value:
            return Ordering("date", requested)
        if sort_by == SortField.QUANTITY.value:
            return Ordering("quantity", requested)
        return Ordering("customer_name", requested)

    # ===== PAGINATION =====

    def build_pagination(self, page: Optional[int] = None, page_size: Optional[int] = None) -> Tuple[int, int]:
        """Validate page numbers, apply defaults and clamp the page size."""
        page = DEFAULT_PAGE if page is None else page
        page_size = self.default_page_size if page_size is None else page_size

        if page < 1:
            raise QueryValidationError("page", f"page must be 1 or greater, got {page}")
        if page_size < 1:
            raise QueryValidationError("pageSize", f"pageSize must be 1 or greater, got {page_size}")

        if self.max_page_size is not None and page_size > self.max_page_size:
            logger.warning("Clamping pageSize %s to %s", page_size, self.max_page_size)
            page_size = self.max_page_size

        if page_size > MAX_ROW_INDEX:
            raise QueryValidationError("pageSize", f"pageSize must be at most {MAX_ROW_INDEX}, got {page_size}")
        if (page - 1) * page_size > MAX_ROW_INDEX:
            raise QueryValidationError(
                "page", f"page {page} is beyond the last addressable row at pageSize {page_size}"
            )
        return page, page_size
