# sales_dashboard/sales/service.py
"""Service layer for the sales module: record listing, filter options and summary totals."""

import logging
from decimal import Decimal
from typing import Optional
from urllib.parse import urlencode

from sales_dashboard.core.base_service import BaseService
from sales_dashboard.query import SalesQueryBuilder, FilterCriteria, AGE_RANGE_LABELS
from sales_dashboard.sales.dao import SalesRecordDAO
from sales_dashboard.sales.models import SalesRecord
from sales_dashboard.sales.schemas import (
    SalesRecordRead,
    SalesRecordPage,
    PaginationMeta,
    FilterOptions,
    SalesSummary,
)

logger = logging.getLogger(__name__)


class SalesRecordService(BaseService[SalesRecord, SalesRecordRead]):
    """Filtered, searchable, sorted and paginated access to sales records."""

    response_model = SalesRecordRead

    def __init__(self, sales_dao: SalesRecordDAO, query_builder: Optional[SalesQueryBuilder] = None):
        self.sales_dao = sales_dao
        self.query_builder = query_builder or SalesQueryBuilder()

    def get_sales_records(
        self,
        criteria: Optional[FilterCriteria] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> SalesRecordPage:
        """
        Get one page of records and the pagination metadata for the full match set.

        The count and the page fetch share the same predicates. They run as two
        sequential reads, so a concurrent write to the store can make them
        disagree for a single request.
        """
        criteria = criteria or FilterCriteria()
        spec = self.query_builder.build(
            criteria, search=search, sort_by=sort_by, sort_order=sort_order, page=page, page_size=page_size
        )
        logger.debug(
            "Fetching sales records search=%r filters=%s ordering=%s page=%d pageSize=%d",
            search,
            urlencode(criteria.to_query_params()),
            spec.ordering,
            spec.page,
            spec.page_size,
        )

        total_count = self.sales_dao.count_records(spec.predicates)
        records = self.sales_dao.fetch_records(spec.predicates, spec.ordering, spec.offset, spec.limit)

        return SalesRecordPage(
            data=self._to_responses(records),
            pagination=PaginationMeta.from_total(spec.page, spec.page_size, total_count),
        )

    def get_by_transaction_id(self, transaction_id: str) -> Optional[SalesRecordRead]:
        """Get a single record by transaction identifier."""
        record = self.sales_dao.get_by_transaction_id(transaction_id)
        if record:
            return self._to_response(record)
        return None


class FilterOptionService:
    """Distinct values available for each filterable dimension."""

    def __init__(self, sales_dao: SalesRecordDAO):
        self.sales_dao = sales_dao

    def get_filter_options(self) -> FilterOptions:
        """Get the values the dashboard offers for each filter control."""
        return FilterOptions(
            customer_region=self.sales_dao.distinct_values("customer_region"),
            gender=self.sales_dao.distinct_values("gender"),
            product_category=self.sales_dao.distinct_values("product_category"),
            payment_method=self.sales_dao.distinct_values("payment_method"),
            tags=self.sales_dao.distinct_tags(),
            age_ranges=list(AGE_RANGE_LABELS),
        )


class SalesSummaryService:
    """Aggregate totals over records filtered by region and category."""

    def __init__(self, sales_dao: SalesRecordDAO, query_builder: Optional[SalesQueryBuilder] = None):
        self.sales_dao = sales_dao
        self.query_builder = query_builder or SalesQueryBuilder()

    def get_summary(self, criteria: Optional[FilterCriteria] = None) -> SalesSummary:
        """Only region and category apply; search, other filters and paging are ignored."""
        predicates = self.query_builder.build_summary_predicates(criteria)
        total_units, total_revenue, total_sales = self.sales_dao.aggregate_totals(predicates)

        avg_order_value = total_revenue / total_sales if total_sales else Decimal(0)

        return SalesSummary(
            total_units=total_units,
            total_revenue=total_revenue,
            total_sales=total_sales,
            avg_order_value=avg_order_value,
        )
