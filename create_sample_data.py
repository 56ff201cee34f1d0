#!/usr/bin/env python3
"""Script to create sample sales records in the sales record store for local development."""

import argparse
import random
import sys
import os
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

# Add the current directory to the path so we can import our modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sales_dashboard.core.database import SalesSessionLocal, create_sales_tables
from sales_dashboard.sales.models import SalesRecord, SalesRecordTag

REGIONS = ["North", "South", "East", "West", "Central"]
GENDERS = ["Male", "Female"]
CATEGORIES = ["Clothing", "Electronics", "Beauty", "Home", "Sports"]
PAYMENT_METHODS = ["Credit Card", "Debit Card", "UPI", "Cash", "Net Banking", "Wallet"]
TAGS = ["organic", "fashion", "casual", "gadgets", "wireless", "unisex", "skincare", "portable", "smart", "formal"]
FIRST_NAMES = ["Aarav", "Diya", "Ishaan", "Ananya", "Kabir", "Meera", "Rohan", "Saanvi", "Vivaan", "Zara"]
LAST_NAMES = ["Sharma", "Verma", "Iyer", "Reddy", "Khan", "Patel", "Gupta", "Nair", "Singh", "Das"]

CENTS = Decimal("0.01")


def build_record(index: int, rng: random.Random, start: datetime) -> SalesRecord:
    """Build one synthetic sales record with consistent amounts."""
    quantity = rng.randint(1, 10)
    price_per_unit = Decimal(rng.randint(100, 50000)) / 100
    discount = Decimal(rng.choice([0, 5, 10, 15, 20, 25]))
    total_amount = (price_per_unit * quantity).quantize(CENTS, rounding=ROUND_HALF_UP)
    final_amount = (total_amount * (100 - discount) / 100).quantize(CENTS, rounding=ROUND_HALF_UP)

    record = SalesRecord(
        transaction_id=f"TXN{index:06d}",
        date=start + timedelta(minutes=rng.randint(0, 60 * 24 * 365)),
        customer_id=f"CUST{rng.randint(1, 500):04d}",
        customer_name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        phone_number=f"+91 9{rng.randint(100000000, 999999999)}",
        gender=rng.choice(GENDERS),
        age=rng.randint(18, 70),
        customer_region=rng.choice(REGIONS),
        product_category=rng.choice(CATEGORIES),
        quantity=quantity,
        price_per_unit=price_per_unit,
        discount_percentage=discount,
        total_amount=total_amount,
        final_amount=final_amount,
        payment_method=rng.choice(PAYMENT_METHODS),
    )
    record.tag_rows = [SalesRecordTag(tag=tag) for tag in rng.sample(TAGS, rng.randint(0, 3))]
    return record


def create_sample_sales_data(count: int = 500, seed: int = 42, reset: bool = False) -> None:
    """Create the sales schema if needed and insert synthetic records."""
    create_sales_tables()
    db = SalesSessionLocal()

    try:
        if reset:
            print("Clearing existing sales records...")
            db.query(SalesRecordTag).delete()
            db.query(SalesRecord).delete()
            db.commit()

        existing = db.query(SalesRecord).count()
        if existing > 0:
            print(f"Sales records already exist ({existing} found). Skipping creation.")
            return

        rng = random.Random(seed)
        start = datetime(2024, 1, 1)
        records = [build_record(index, rng, start) for index in range(1, count + 1)]

        db.add_all(records)
        db.commit()
        print(f"Created {len(records)} sales records")

    except Exception as e:
        db.rollback()
        print(f"Error creating sample data: {str(e)}")
        raise

    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--count", type=int, default=500, help="Number of records to create")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--reset", action="store_true", help="Delete existing records first")
    args = parser.parse_args()

    create_sample_sales_data(count=args.count, seed=args.seed, reset=args.reset)
