"""Request ID management for request correlation.

The id lives in a ContextVar so it follows the request across threadpool
hops and into every log record.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def accept_request_id(header_value: Optional[str]) -> str:
    """Reuse a client-supplied id when it is sane, otherwise mint one."""
    if header_value and len(header_value) <= MAX_REQUEST_ID_LENGTH and header_value.isprintable():
        return header_value
    return generate_request_id()
