"""Request ID logging context for tracing one inbound SMS across modules.

Every webhook call sets the provider's message SID (or a generated id) as
the current request id. ``RequestIdFilter`` copies it onto each log record
so the root formatter can print ``%(request_id)s``.

Usage:
    from tenant_intake.logging_context import set_request_id

    set_request_id("SM0123abcd")
    logger.info("Processing inbound")  # → [SM0123abcd] Processing inbound
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set the correlation ID for the current async context and return it."""
    value = request_id or f"REQ-{uuid.uuid4().hex[:8]}"
    _request_id.set(value)
    return value


def get_request_id() -> str:
    """Retrieve the current correlation ID."""
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Injects request_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def install_request_id_filter() -> None:
    """Attach ``RequestIdFilter`` to every root handler that lacks one."""
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
