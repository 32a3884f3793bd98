"""
Structured logging for the service.

`configure_logging` wires structlog on top of the standard library logger so
uvicorn's own records and ours share one output. `RequestLoggingMiddleware`
tags every request with a transaction id and writes one access line per
request.
"""

from __future__ import annotations

import logging
import secrets
import sys
import time
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import Processor

TRANSACTION_ID_HEADER = "X-Request-Id"


def configure_logging(service_name: str, env: str, log_level: str = "INFO", log_format: str = "console") -> None:
    def add_service_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service_name", service_name)
        event_dict.setdefault("environment", env)
        return event_dict

    processors: list[Processor] = [
        merge_contextvars,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]
    if log_format.lower() == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors += [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=False)]

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def new_transaction_id() -> str:
    return f"tid_{secrets.token_hex(5)}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds a transaction id for the request and logs the outcome."""

    def __init__(self, app, logger_name: str = "access") -> None:
        super().__init__(app)
        self.log = structlog.get_logger(logger_name)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        transaction_id = request.headers.get(TRANSACTION_ID_HEADER) or new_transaction_id()
        clear_contextvars()
        bind_contextvars(transaction_id=transaction_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.log.exception("request failed", method=request.method, uri=str(request.url.path))
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers[TRANSACTION_ID_HEADER] = transaction_id
        self.log.info(
            "request served",
            method=request.method,
            uri=request.url.path,
            query=request.url.query,
            status=response.status_code,
            response_time_ms=elapsed_ms,
            user_agent=request.headers.get("user-agent"),
        )
        return response
