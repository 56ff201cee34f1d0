"""
Query building schemas and types for the sales dashboard.

These types describe a dashboard request after normalization: a conjunction
of predicates over sales record fields, an ordering, and an offset/limit
window. They carry no storage dependency so the builder stays pure and the
record store decides how each predicate is executed.
"""

from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SortField(str, Enum):
    """Sort keys accepted from the dashboard."""

    CUSTOMER_NAME = "customerName"
    DATE = "date"
    DATE_NEWEST = "dateNewest"
    DATE_OLDEST = "dateOldest"
    QUANTITY = "quantity"


class SortDirection(str, Enum):
    """Ordering direction."""

    ASC = "asc"
    DESC = "desc"


class CombineMode(str, Enum):
    """How the free-text search and age-bucket alternatives are combined."""

    OR = "or"  # Legacy: one disjunction holding both search and age conditions
    AND = "and"  # Search and age buckets are separate conjuncts


# ===== PREDICATES =====
# Field names refer to SalesRecord attributes.


@dataclass(frozen=True)
class InSet:
    """Field value is one of the given values."""

    field: str
    values: FrozenSet[str]


@dataclass(frozen=True)
class ContainsText:
    """Case-insensitive substring match on a text field."""

    field: str
    text: str


@dataclass(frozen=True)
class NumericRange:
    """Inclusive numeric interval; a missing bound is unbounded."""

    field: str
    low: Optional[int] = None
    high: Optional[int] = None


@dataclass(frozen=True)
class TagsIntersect:
    """The record's tag set shares at least one tag with the given values."""

    values: FrozenSet[str]


@dataclass(frozen=True)
class DateTimeRange:
    """Inclusive datetime interval, both ends naive UTC."""

    field: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of predicates."""

    predicates: Tuple["Predicate", ...]


Predicate = Union[InSet, ContainsText, NumericRange, TagsIntersect, DateTimeRange, AnyOf]


@dataclass(frozen=True)
class Ordering:
    """Ordering key (a SalesRecord attribute) and direction."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC


@dataclass(frozen=True)
class QuerySpec:
    """A normalized, validated sales query."""

    predicates: Tuple[Predicate, ...]
    ordering: Ordering
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def matches_everything(self) -> bool:
        return not self.predicates


# ===== FILTER CRITERIA =====

# Query-string names of the list dimensions, in the order they are emitted
_LIST_PARAMS: Dict[str, str] = {
    "customerRegion": "customer_region",
    "gender": "gender",
    "ageRange": "age_range",
    "productCategory": "product_category",
    "tags": "tags",
    "paymentMethod": "payment_method",
}
_DATE_PARAMS: Dict[str, str] = {
    "dateRangeStart": "date_range_start",
    "dateRangeEnd": "date_range_end",
}


def _clean(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    if not values:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(value for value in values if value)


@dataclass(frozen=True)
class FilterCriteria:
    """
    Acceptable values per filterable dimension plus an optional date interval.

    An empty set means the dimension is unrestricted. Dates are kept as the
    raw ``YYYY-MM-DD`` strings the caller sent; the builder validates them.
    """

    customer_region: FrozenSet[str] = field(default_factory=frozenset)
    gender: FrozenSet[str] = field(default_factory=frozenset)
    age_range: FrozenSet[str] = field(default_factory=frozenset)
    product_category: FrozenSet[str] = field(default_factory=frozenset)
    tags: FrozenSet[str] = field(default_factory=frozenset)
    payment_method: FrozenSet[str] = field(default_factory=frozenset)
    date_range_start: Optional[str] = None
    date_range_end: Optional[str] = None

    @classmethod
    def create(
        cls,
        customer_region: Optional[Iterable[str]] = None,
        gender: Optional[Iterable[str]] = None,
        age_range: Optional[Iterable[str]] = None,
        product_category: Optional[Iterable[str]] = None,
        tags: Optional[Iterable[str]] = None,
        payment_method: Optional[Iterable[str]] = None,
        date_range_start: Optional[str] = None,
        date_range_end: Optional[str] = None,
    ) -> "FilterCriteria":
        """Build criteria from loose iterables, dropping blank values."""
        return cls(
            customer_region=_clean(customer_region),
            gender=_clean(gender),
            age_range=_clean(age_range),
            product_category=_clean(product_category),
            tags=_clean(tags),
            payment_method=_clean(payment_method),
            date_range_start=date_range_start or None,
            date_range_end=date_range_end or None,
        )

    def summary_scope(self) -> "FilterCriteria":
        """Criteria reduced to the dimensions the summary honours."""
        return FilterCriteria(customer_region=self.customer_region, product_category=self.product_category)

    def to_query_params(self) -> List[Tuple[str, str]]:
        """Encode as repeatable query-string pairs, omitting empty dimensions."""
        params: List[Tuple[str, str]] = []
        for param, attr in _LIST_PARAMS.items():
            params.extend((param, value) for value in sorted(getattr(self, attr)))
        for param, attr in _DATE_PARAMS.items():
            value = getattr(self, attr)
            if value:
                params.append((param, value))
        return params

    @classmethod
    def from_query_params(cls, params: Union[Mapping, Iterable[Tuple[str, str]]]) -> "FilterCriteria":
        """
        Decode criteria from query parameters.

        Accepts a multi-dict exposing ``getlist`` (Starlette ``QueryParams``,
        werkzeug ``MultiDict``), a plain mapping of names to strings or lists,
        or a sequence of ``(name, value)`` pairs as produced by ``parse_qsl``.
        """
        if not isinstance(params, Mapping) and not hasattr(params, "getlist"):
            grouped: Dict[str, List[str]] = {}
            for name, value in params:
                grouped.setdefault(name, []).append(value)
            params = grouped

        def values_for(name: str) -> List[str]:
            if hasattr(params, "getlist"):
                return list(params.getlist(name))
            value = params.get(name)
            if value is None:
                return []
            return [value] if isinstance(value, str) else list(value)

        kwargs = {attr: values_for(param) for param, attr in _LIST_PARAMS.items()}
        for param, attr in _DATE_PARAMS.items():
            values = values_for(param)
            kwargs[attr] = values[-1] if values else None
        return cls.create(**kwargs)
