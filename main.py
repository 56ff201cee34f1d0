#!/usr/bin/env python3
import logging
import os

import uvicorn

from sales_dashboard.app import create_app
from sales_dashboard.core.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Create the FastAPI app
app = create_app()


if __name__ == "__main__":
    is_dev_mode = os.getenv("SALES_DASHBOARD_DEV_MODE", "false").lower() == "true"
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))

    logging.getLogger(__name__).info("Starting sales dashboard on %s:%s (reload=%s)", host, port, is_dev_mode)
    uvicorn.run("main:app", host=host, port=port, reload=is_dev_mode)
