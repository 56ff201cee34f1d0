# sales_dashboard/core/config.py
"""Environment-driven settings for the sales dashboard."""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_choice(name: str, default: str, choices) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


# ===== DATABASES =====
# Application database: request logs
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./sales_dashboard.db")

# Record store: sales transactions, read-only from this service
SALES_DATABASE_URL = os.getenv("SALES_DATABASE_URL", "sqlite:///./sales_records.db")

# ===== QUERY DEFAULTS =====
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

# "or" keeps the legacy union of search and age-bucket matches, "and" intersects them
SEARCH_AGE_COMBINE_MODE = _env_choice("SEARCH_AGE_COMBINE_MODE", "or", ("or", "and"))

# ===== APPLICATION =====
APPLICATION_ID = os.getenv("APPLICATION_ID", "sales-dashboard")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
REQUEST_LOGGING_ENABLED = _env_bool("REQUEST_LOGGING_ENABLED", "true")
