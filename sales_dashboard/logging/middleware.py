import json
import os
import time
import getpass
import logging
import platform
import socket
from datetime import datetime
from typing import Callable

from fastapi import Request, Response
from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from sqlalchemy.exc import SQLAlchemyError

from sales_dashboard.core.config import APPLICATION_ID
from sales_dashboard.core.database import SessionLocal
from sales_dashboard.logging.dao import LogDAO

logger = logging.getLogger(__name__)

# Paths that never produce request logs
EXCLUDED_PATHS = ("/api/logs", "/api/docs", "/api/redoc", "/api/openapi.json")


def _current_username() -> str:
    try:
        return os.environ.get("USER") or os.environ.get("USERNAME") or getpass.getuser() or "unknown_user"
    except Exception:
        return "unknown_user"


def _current_hostname() -> str:
    try:
        return socket.gethostname() or platform.node() or "unknown_host"
    except Exception:
        return "unknown_host"


USERNAME = _current_username()
HOSTNAME = _current_hostname()


def persist_request_log(request: Request, status_code: int, **fields) -> None:
    """Write one request log row to the application database."""
    try:
        with SessionLocal() as session:
            LogDAO(session).record(
                timestamp=datetime.now(),
                method=request.method,
                path=str(request.url.path),
                query_string=str(request.url.query) or None,
                status_code=status_code,
                client_ip=request.client.host if request.client else None,
                request_headers=json.dumps(dict(request.headers)),
                user_agent=request.headers.get("user-agent"),
                username=USERNAME,
                hostname=HOSTNAME,
                application_id=APPLICATION_ID,
                **fields,
            )
    except SQLAlchemyError as log_error:
        logger.warning("Could not persist request log for %s %s: %s", request.method, request.url.path, log_error)


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)
        logger.info(
            "Logging middleware initialized with username: %s on host: %s, App ID: %s",
            USERNAME,
            HOSTNAME,
            APPLICATION_ID,
        )

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path.startswith(EXCLUDED_PATHS):
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000

        status_code = response.status_code
        response_body = b""

        if isinstance(response, Response) and hasattr(response, "body"):
            response_body = response.body
        elif hasattr(response, "body_iterator"):
            # Streaming response: collect chunks as they are sent
            original_iterator = response.body_iterator
            chunks = []

            async def buffer_iterator():
                nonlocal response_body
                async for chunk in original_iterator:
                    chunks.append(chunk)
                    yield chunk
                response_body = b"".join(chunks)

            response.body_iterator = buffer_iterator()

        # Error bodies are stored in full; successful listings only by size
        def log_to_db():
            if status_code >= 400:
                body_to_log = response_body.decode("utf-8", errors="ignore")
            else:
                body_to_log = f"[{len(response_body)} bytes]"
            persist_request_log(
                request,
                status_code,
                response_body=body_to_log,
                processing_time=duration_ms,
                error_type=getattr(request.state, "error_type", None),
            )

        response.background = getattr(response, "background", None) or BackgroundTask(log_to_db)
        return response
