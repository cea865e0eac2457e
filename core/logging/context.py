"""Per-request context shared between middleware, logging and error handling."""

import threading

_request_context = threading.local()


def set_request_id(request_id: str) -> None:
    """Bind the request ID to the current worker thread."""
    _request_context.request_id = request_id


def get_request_id() -> str | None:
    """Return the request ID bound to this thread, or None outside a request."""
    return getattr(_request_context, "request_id", None)


def clear_request_id() -> None:
    """Unbind the request ID once the response has been produced.

    Gunicorn reuses threads across requests, so a stale ID would otherwise
    leak into the next request's logs.
    """
    if hasattr(_request_context, "request_id"):
        delattr(_request_context, "request_id")
