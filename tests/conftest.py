"""
Test configuration and shared fixtures for the sales dashboard test suite.
Provides database setup, a known sales dataset, and the API test client.
"""

import os
import tempfile

# Point both databases at throwaway locations before the app modules read the environment
_TEST_DIR = tempfile.mkdtemp(prefix="sales_dashboard_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'app.db')}"
os.environ["SALES_DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'sales.db')}"
os.environ["MAX_PAGE_SIZE"] = "100"
os.environ["SEARCH_AGE_COMBINE_MODE"] = "or"

import pytest
from typing import Callable, List
from datetime import datetime
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from sales_dashboard.app import create_app
from sales_dashboard.core.database import get_sales_db, create_sales_tables, drop_sales_tables
from sales_dashboard.sales.models import SalesRecord, SalesRecordTag


# ===== DATABASE SETUP =====

@pytest.fixture(scope="session")
def sales_engine():
    """Create in-memory SQLite engine for the sales record store"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_sales_tables(bind=engine)
    return engine


@pytest.fixture(scope="function")
def sales_db_session(sales_engine):
    """Create a database session for the sales record store"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sales_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        # Clean up all data after each test
        drop_sales_tables(bind=sales_engine)
        create_sales_tables(bind=sales_engine)


@pytest.fixture
def client(sales_db_session):
    """Create FastAPI test client with the sales store overridden"""
    app = create_app()

    def override_get_sales_db():
        try:
            yield sales_db_session
        finally:
            pass

    app.dependency_overrides[get_sales_db] = override_get_sales_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ===== SAMPLE DATA FIXTURES =====

@pytest.fixture
def make_record() -> Callable[..., SalesRecord]:
    """Factory for sales records with sensible defaults"""
    counter = {"n": 0}

    def _make(tags=(), **overrides) -> SalesRecord:
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            transaction_id=f"TXN-F{n:04d}",
            date=datetime(2024, 1, 1, 12, 0, 0),
            customer_id=f"CUST{n:04d}",
            customer_name=f"Customer {n:04d}",
            phone_number=f"555-1{n:03d}",
            gender="Female",
            age=30,
            customer_region="North",
            product_category="Clothing",
            quantity=1,
            price_per_unit=Decimal("10.00"),
            discount_percentage=Decimal("0"),
            total_amount=Decimal("10.00"),
            final_amount=Decimal("10.00"),
            payment_method="UPI",
        )
        fields.update(overrides)
        record = SalesRecord(**fields)
        record.tag_rows = [SalesRecordTag(tag=tag) for tag in tags]
        return record

    return _make


@pytest.fixture
def sample_records(sales_db_session) -> List[SalesRecord]:
    """Six records spread across every filterable dimension"""
    rows = [
        ("TXN001", "Alice Johnson", "555-0101", "Female", 24, "North", "Clothing", ["casual", "fashion"],
         2, "50.00", "10", "100.00", "90.00", "UPI", datetime(2024, 1, 1, 10, 0, 0)),
        ("TXN002", "Bob Smith", "555-0102", "Male", 30, "South", "Electronics", ["gadgets"],
         1, "300.00", "0", "300.00", "300.00", "Credit Card", datetime(2024, 1, 1, 23, 0, 0)),
        ("TXN003", "Carol White", "555-0103", "Female", 56, "North", "Electronics", ["gadgets", "smart"],
         3, "20.00", "0", "60.00", "60.00", "Cash", datetime(2024, 1, 2, 0, 0, 1)),
        ("TXN004", "David Brown", "555-0104", "Male", 70, "East", "Beauty", [],
         5, "10.00", "20", "50.00", "40.00", "UPI", datetime(2024, 2, 15, 12, 0, 0)),
        ("TXN005", "Eve Davis", "555-0105", "Female", 40, "West", "Clothing", ["fashion"],
         4, "25.00", "0", "100.00", "100.00", "Debit Card", datetime(2024, 3, 10, 8, 30, 0)),
        ("TXN006", "Frank Miller", "555-0106", "Male", 47, "North", "Home", ["organic"],
         1, "80.00", "50", "80.00", "40.00", "Credit Card", datetime(2024, 3, 20, 18, 45, 0)),
    ]
    records = []
    for (txn, name, phone, gender, age, region, category, tags,
         quantity, price, discount, total, final, payment, date) in rows:
        record = SalesRecord(
            transaction_id=txn,
            date=date,
            customer_id=f"C-{txn}",
            customer_name=name,
            phone_number=phone,
            gender=gender,
            age=age,
            customer_region=region,
            product_category=category,
            quantity=quantity,
            price_per_unit=Decimal(price),
            discount_percentage=Decimal(discount),
            total_amount=Decimal(total),
            final_amount=Decimal(final),
            payment_method=payment,
        )
        record.tag_rows = [SalesRecordTag(tag=tag) for tag in tags]
        records.append(record)

    sales_db_session.add_all(records)
    sales_db_session.commit()
    return records


@pytest.fixture
def twenty_five_records(sales_db_session, make_record) -> List[SalesRecord]:
    """Twenty-five otherwise identical records for paging scenarios"""
    records = [make_record() for _ in range(25)]
    sales_db_session.add_all(records)
    sales_db_session.commit()
    return records
