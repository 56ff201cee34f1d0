"""
Query module for the sales dashboard.

Translates search, filter, sort and page inputs into a QuerySpec that the
record store executes. Nothing in here talks to a database.

Main Components:
- SalesQueryBuilder: builds QuerySpec objects
- FilterCriteria: per-dimension filter values with a query-string codec
- Predicate types, Ordering and QuerySpec
"""

from .builder import SalesQueryBuilder, AGE_BUCKETS, AGE_RANGE_LABELS, age_bucket_range
from .schemas import (
    # Request inputs
    FilterCriteria,
    SortField,
    SortDirection,
    CombineMode,
    # Predicates
    InSet,
    ContainsText,
    NumericRange,
    TagsIntersect,
    DateTimeRange,
    AnyOf,
    Predicate,
    # Output
    Ordering,
    QuerySpec,
)

__all__ = [
    "SalesQueryBuilder",
    "AGE_BUCKETS",
    "AGE_RANGE_LABELS",
    "age_bucket_range",
    "FilterCriteria",
    "SortField",
    "SortDirection",
    "CombineMode",
    "InSet",
    "ContainsText",
    "NumericRange",
    "TagsIntersect",
    "DateTimeRange",
    "AnyOf",
    "Predicate",
    "Ordering",
    "QuerySpec",
]
