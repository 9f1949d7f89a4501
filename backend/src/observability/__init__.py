"""Observability: structured logging, request correlation, metrics and health checks."""

from .logging_config import configure_logging, get_logger
from .metrics import attachment_operations_total, auth_bypass_requests_total, auth_failures_total
from .request_id import get_request_id, set_request_id, generate_request_id
from .middleware import RequestIDMiddleware

__all__ = [
    "configure_logging",
    "get_logger",
    "attachment_operations_total",
    "auth_bypass_requests_total",
    "auth_failures_total",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    "RequestIDMiddleware",
]
