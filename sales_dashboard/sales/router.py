# sales_dashboard/sales/router.py
"""API router for the sales module."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from sales_dashboard.core.dependencies import SalesSessionDep, get_query_builder
from sales_dashboard.query import SalesQueryBuilder, FilterCriteria
from sales_dashboard.sales.dao import SalesRecordDAO
from sales_dashboard.sales.schemas import SalesRecordPage, SalesRecordRead, FilterOptions, SalesSummary
from sales_dashboard.sales.service import SalesRecordService, FilterOptionService, SalesSummaryService

router = APIRouter(prefix="/sales", tags=["Sales"])


# ===== DEPENDENCY INJECTION =====

def get_sales_dao(sales_session: SalesSessionDep) -> SalesRecordDAO:
    """Get SalesRecordDAO instance."""
    return SalesRecordDAO(sales_session)


def get_sales_record_service(
    dao: SalesRecordDAO = Depends(get_sales_dao),
    query_builder: SalesQueryBuilder = Depends(get_query_builder),
) -> SalesRecordService:
    """Get SalesRecordService instance."""
    return SalesRecordService(dao, query_builder)


def get_filter_option_service(dao: SalesRecordDAO = Depends(get_sales_dao)) -> FilterOptionService:
    """Get FilterOptionService instance."""
    return FilterOptionService(dao)


def get_sales_summary_service(
    dao: SalesRecordDAO = Depends(get_sales_dao),
    query_builder: SalesQueryBuilder = Depends(get_query_builder),
) -> SalesSummaryService:
    """Get SalesSummaryService instance."""
    return SalesSummaryService(dao, query_builder)


def get_filter_criteria(
    customer_region: List[str] = Query([], alias="customerRegion", description="Regions to include"),
    gender: List[str] = Query([], description="Genders to include"),
    age_range: List[str] = Query([], alias="ageRange", description="Age buckets: 18-25, 26-35, 36-45, 46-55, 55+"),
    product_category: List[str] = Query([], alias="productCategory", description="Product categories to include"),
    tags: List[str] = Query([], description="Records sharing at least one of these tags"),
    payment_method: List[str] = Query([], alias="paymentMethod", description="Payment methods to include"),
    date_range_start: Optional[str] = Query(None, alias="dateRangeStart", description="Start date, YYYY-MM-DD"),
    date_range_end: Optional[str] = Query(None, alias="dateRangeEnd", description="End date, YYYY-MM-DD"),
) -> FilterCriteria:
    """Collect the repeatable filter parameters into FilterCriteria."""
    return FilterCriteria.create(
        customer_region=customer_region,
        gender=gender,
        age_range=age_range,
        product_category=product_category,
        tags=tags,
        payment_method=payment_method,
        date_range_start=date_range_start,
        date_range_end=date_range_end,
    )


# ===== SALES RECORD ENDPOINTS =====

@router.get("", response_model=SalesRecordPage)
def get_sales_records(
    search: Optional[str] = Query(None, description="Matches customer name or phone number"),
    sort_by: Optional[str] = Query(
        None, alias="sortBy", description="customerName, date, dateNewest, dateOldest or quantity"
    ),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    page: Optional[int] = Query(None, description="Page number, starting at 1"),
    page_size: Optional[int] = Query(None, alias="pageSize", description="Records per page"),
    criteria: FilterCriteria = Depends(get_filter_criteria),
    service: SalesRecordService = Depends(get_sales_record_service),
) -> SalesRecordPage:
    """Get sales records with filters, search, sorting and pagination."""
    return service.get_sales_records(
        criteria,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )


@router.get("/records/{transaction_id}", response_model=SalesRecordRead)
def get_sales_record(
    transaction_id: str,
    service: SalesRecordService = Depends(get_sales_record_service),
) -> SalesRecordRead:
    """Get a single sales record by transaction ID."""
    record = service.get_by_transaction_id(transaction_id)
    if not record:
        raise HTTPException(status_code=404, detail="Sales record not found")
    return record


# ===== FILTER OPTIONS & SUMMARY =====

@router.get("/filters/options", response_model=FilterOptions)
def get_filter_options(
    service: FilterOptionService = Depends(get_filter_option_service),
) -> FilterOptions:
    """Get available values for each filter control."""
    return service.get_filter_options()


@router.get("/summary", response_model=SalesSummary)
def get_summary(
    customer_region: List[str] = Query([], alias="customerRegion", description="Regions to include"),
    product_category: List[str] = Query([], alias="productCategory", description="Product categories to include"),
    service: SalesSummaryService = Depends(get_sales_summary_service),
) -> SalesSummary:
    """Get summary totals filtered by region and category."""
    criteria = FilterCriteria.create(customer_region=customer_region, product_category=product_category)
    return service.get_summary(criteria)
