"""Database models for the logging module."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Float, Text
from sales_dashboard.core.database import Base


class RequestLog(Base):
    """SQLAlchemy model for API request and response logs."""

    __tablename__ = "request_log"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime, default=datetime.now, index=True)
    method = Column(String(10), nullable=False)
    path = Column(String(512), nullable=False)
    query_string = Column(Text, nullable=True)
    status_code = Column(Integer, nullable=False, index=True)
    client_ip = Column(String(64), nullable=True)
    request_headers = Column(Text, nullable=True)
    response_body = Column(Text, nullable=True)
    error_type = Column(String(128), nullable=True)
    processing_time = Column(Float, nullable=True)  # milliseconds
    user_agent = Column(String(512), nullable=True)
    username = Column(String(128), nullable=True)
    hostname = Column(String(255), nullable=True)
    application_id = Column(String(128), nullable=True)
