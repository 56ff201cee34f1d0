"""Pydantic schemas for the sales module API."""

import math
from typing import List, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema emitting camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ===== RECORD SCHEMAS =====


class SalesRecordRead(CamelModel):
    """A sales record as returned by the listing endpoints."""

    id: int
    transaction_id: str
    date: datetime
    customer_id: str
    customer_name: str
    phone_number: str
    gender: Optional[str] = None
    age: int
    customer_region: Optional[str] = None
    product_category: Optional[str] = None
    tags: List[str] = []
    quantity: int
    price_per_unit: float
    discount_percentage: float
    total_amount: float
    final_amount: float
    payment_method: Optional[str] = None

    @field_validator("date")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """Stored dates are naive UTC; emit them with an explicit offset."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# ===== PAGINATION =====


class PaginationMeta(CamelModel):
    """Pagination metadata derived from the total match count."""

    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_total(cls, page: int, page_size: int, total_count: int) -> "PaginationMeta":
        total_pages = math.ceil(total_count / page_size) if total_count else 0
        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class SalesRecordPage(CamelModel):
    """One page of sales records with its pagination metadata."""

    data: List[SalesRecordRead]
    pagination: PaginationMeta


# ===== FILTER OPTIONS & SUMMARY =====


class FilterOptions(CamelModel):
    """Distinct values available for each filterable dimension."""

    customer_region: List[str] = []
    gender: List[str] = []
    product_category: List[str] = []
    payment_method: List[str] = []
    tags: List[str] = []
    age_ranges: List[str] = []


class SalesSummary(CamelModel):
    """Aggregate totals over the records matching the summary filters."""

    total_units: int
    total_revenue: float
    total_sales: int
    avg_order_value: float
