"""
Unit tests for the sales services.
Tests pagination metadata, summary arithmetic and filter options with a mocked DAO.
"""

import pytest
from unittest.mock import Mock
from datetime import datetime, timezone
from decimal import Decimal

from sales_dashboard.core.exceptions import StoreUnavailableError
from sales_dashboard.query import (
    SalesQueryBuilder,
    FilterCriteria,
    InSet,
    Ordering,
    SortDirection,
)
from sales_dashboard.sales.models import SalesRecord, SalesRecordTag
from sales_dashboard.sales.schemas import PaginationMeta
from sales_dashboard.sales.service import SalesRecordService, FilterOptionService, SalesSummaryService


def _record(id: int, name: str, tags=()) -> SalesRecord:
    record = SalesRecord(
        id=id,
        transaction_id=f"TXN{id:03d}",
        date=datetime(2024, 1, 1, 9, 30, 0),
        customer_id=f"C{id:03d}",
        customer_name=name,
        phone_number="555-0000",
        gender="Female",
        age=33,
        customer_region="North",
        product_category="Clothing",
        quantity=2,
        price_per_unit=Decimal("12.50"),
        discount_percentage=Decimal("0"),
        total_amount=Decimal("25.00"),
        final_amount=Decimal("25.00"),
        payment_method="UPI",
    )
    record.tag_rows = [SalesRecordTag(tag=tag) for tag in tags]
    return record


class TestPaginationMeta:
    """Test pagination metadata arithmetic"""

    def test_middle_page(self):
        meta = PaginationMeta.from_total(page=2, page_size=10, total_count=25)
        assert meta.total_pages == 3
        assert meta.has_next_page is True
        assert meta.has_prev_page is True

    def test_last_partial_page(self):
        meta = PaginationMeta.from_total(page=3, page_size=10, total_count=25)
        assert meta.total_pages == 3
        assert meta.has_next_page is False
        assert meta.has_prev_page is True

    def test_exact_multiple(self):
        meta = PaginationMeta.from_total(page=1, page_size=5, total_count=10)
        assert meta.total_pages == 2
        assert meta.has_next_page is True
        assert meta.has_prev_page is False

    def test_no_matches(self):
        meta = PaginationMeta.from_total(page=1, page_size=10, total_count=0)
        assert meta.total_pages == 0
        assert meta.has_next_page is False
        assert meta.has_prev_page is False

    def test_page_past_the_end(self):
        meta = PaginationMeta.from_total(page=9, page_size=10, total_count=25)
        assert meta.total_pages == 3
        assert meta.has_next_page is False
        assert meta.has_prev_page is True

    def test_serializes_camel_case(self):
        meta = PaginationMeta.from_total(page=1, page_size=10, total_count=1)
        assert set(meta.model_dump(by_alias=True)) == {
            "page",
            "pageSize",
            "totalCount",
            "totalPages",
            "hasNextPage",
            "hasPrevPage",
        }


class TestSalesRecordService:
    """Test the record listing service"""

    @pytest.fixture
    def mock_sales_dao(self):
        """Mock sales DAO"""
        dao = Mock()
        dao.count_records = Mock(return_value=0)
        dao.fetch_records = Mock(return_value=[])
        dao.get_by_transaction_id = Mock(return_value=None)
        return dao

    @pytest.fixture
    def sales_service(self, mock_sales_dao):
        return SalesRecordService(mock_sales_dao, SalesQueryBuilder(max_page_size=100))

    def test_count_and_fetch_share_predicates(self, sales_service, mock_sales_dao):
        criteria = FilterCriteria.create(customer_region=["North"])
        sales_service.get_sales_records(criteria, page=2, page_size=10)

        count_predicates = mock_sales_dao.count_records.call_args[0][0]
        fetch_args = mock_sales_dao.fetch_records.call_args[0]
        assert count_predicates == fetch_args[0]
        assert count_predicates == (InSet("customer_region", frozenset({"North"})),)
        assert fetch_args[1] == Ordering("customer_name", SortDirection.ASC)
        assert fetch_args[2:] == (10, 10)

    def test_page_is_converted_to_camel_case_records(self, sales_service, mock_sales_dao):
        mock_sales_dao.count_records.return_value = 1
        mock_sales_dao.fetch_records.return_value = [_record(1, "Alice", tags=["smart", "casual"])]

        result = sales_service.get_sales_records()
        payload = result.model_dump(by_alias=True)

        record = payload["data"][0]
        assert record["transactionId"] == "TXN001"
        assert record["customerName"] == "Alice"
        assert record["tags"] == ["casual", "smart"]
        assert record["finalAmount"] == 25.0
        assert record["date"] == datetime(2024, 1, 1, 9, 30, 0, tzinfo=timezone.utc)
        assert payload["pagination"]["totalCount"] == 1
        assert payload["pagination"]["totalPages"] == 1

    def test_oversized_page_is_clamped(self, sales_service, mock_sales_dao):
        result = sales_service.get_sales_records(page_size=1000)
        assert result.pagination.page_size == 100
        assert mock_sales_dao.fetch_records.call_args[0][3] == 100

    def test_store_failure_propagates(self, sales_service, mock_sales_dao):
        mock_sales_dao.count_records.side_effect = StoreUnavailableError("Failed to count sales records", "boom")
        with pytest.raises(StoreUnavailableError):
            sales_service.get_sales_records()
        mock_sales_dao.fetch_records.assert_not_called()

    def test_get_by_transaction_id_not_found(self, sales_service):
        assert sales_service.get_by_transaction_id("missing") is None

    def test_get_by_transaction_id(self, sales_service, mock_sales_dao):
        mock_sales_dao.get_by_transaction_id.return_value = _record(7, "Grace")
        result = sales_service.get_by_transaction_id("TXN007")
        assert result.customer_name == "Grace"
        mock_sales_dao.get_by_transaction_id.assert_called_once_with("TXN007")


class TestSalesSummaryService:
    """Test summary arithmetic"""

    @pytest.fixture
    def mock_sales_dao(self):
        return Mock()

    def test_average_order_value(self, mock_sales_dao):
        mock_sales_dao.aggregate_totals = Mock(return_value=(16, Decimal("630.00"), 6))
        summary = SalesSummaryService(mock_sales_dao).get_summary()

        assert summary.total_units == 16
        assert summary.total_revenue == 630.0
        assert summary.total_sales == 6
        assert summary.avg_order_value == 105.0

    def test_empty_match_set_averages_to_zero(self, mock_sales_dao):
        mock_sales_dao.aggregate_totals = Mock(return_value=(0, Decimal("0"), 0))
        summary = SalesSummaryService(mock_sales_dao).get_summary(FilterCriteria.create(customer_region=["Nowhere"]))

        assert summary.total_sales == 0
        assert summary.avg_order_value == 0

    def test_only_region_and_category_reach_the_store(self, mock_sales_dao):
        mock_sales_dao.aggregate_totals = Mock(return_value=(0, Decimal("0"), 0))
        criteria = FilterCriteria.create(customer_region=["North"], gender=["Male"], tags=["organic"])
        SalesSummaryService(mock_sales_dao).get_summary(criteria)

        mock_sales_dao.aggregate_totals.assert_called_once_with((InSet("customer_region", frozenset({"North"})),))


class TestFilterOptionService:
    """Test filter option assembly"""

    def test_options_include_fixed_age_ranges(self):
        dao = Mock()
        dao.distinct_values = Mock(side_effect=lambda field: [f"{field}-a", f"{field}-b"])
        dao.distinct_tags = Mock(return_value=["fashion", "smart"])

        options = FilterOptionService(dao).get_filter_options()

        assert options.customer_region == ["customer_region-a", "customer_region-b"]
        assert options.payment_method == ["payment_method-a", "payment_method-b"]
        assert options.tags == ["fashion", "smart"]
        assert options.age_ranges == ["18-25", "26-35", "36-45", "46-55", "55+"]
