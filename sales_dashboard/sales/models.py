"""Database models for the sales module (sales record store)."""

from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from sales_dashboard.core.database import SalesBase as Base


class SalesRecord(Base):
    """One sales transaction. Populated by an external ingestion process."""

    __tablename__ = "sales_record"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(String(64), nullable=False, unique=True, index=True)
    date = Column(DateTime, nullable=False, index=True)  # naive UTC
    customer_id = Column(String(64), nullable=False)
    customer_name = Column(String(255), nullable=False, index=True)
    phone_number = Column(String(32), nullable=False)
    gender = Column(String(32), nullable=True)
    age = Column(Integer, nullable=False)
    customer_region = Column(String(64), nullable=True, index=True)
    product_category = Column(String(64), nullable=True, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    price_per_unit = Column(Numeric(12, 2), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    total_amount = Column(Numeric(14, 2), nullable=False)
    final_amount = Column(Numeric(14, 2), nullable=False)
    payment_method = Column(String(64), nullable=True)

    tag_rows = relationship(
        "SalesRecordTag",
        back_populates="record",
        cascade="all, delete-orphan",
        order_by="SalesRecordTag.tag",
    )

    @property
    def tags(self):
        """Tag values of this record, sorted."""
        return sorted({row.tag for row in self.tag_rows})

    def __repr__(self):
        return f"<SalesRecord(transaction_id={self.transaction_id!r}, customer_name={self.customer_name!r})>"


class SalesRecordTag(Base):
    """Tag attached to a sales record; a record's tags form a set."""

    __tablename__ = "sales_record_tag"
    __table_args__ = (
        UniqueConstraint("record_id", "tag", name="uq_sales_record_tag"),
        Index("ix_sales_record_tag_tag", "tag"),
    )

    id = Column(Integer, primary_key=True)
    record_id = Column(Integer, ForeignKey("sales_record.id", ondelete="CASCADE"), nullable=False)
    tag = Column(String(64), nullable=False)

    record = relationship("SalesRecord", back_populates="tag_rows")
