"""Constants package for core application."""

from core.constants.email import (
    BATCH_SIZE,
    STATS_FETCH_LIMIT,
    STATS_TIERS,
    SUBSCRIPTION_FETCH_LIMIT,
)
from core.constants.http import (
    PROCESS_TIME_HEADER,
    REQUEST_ID_HEADER,
    SECURITY_HEADERS,
    SLOW_REQUEST_THRESHOLD,
)
from core.constants.uploads import (
    ALLOWED_DOCUMENT_TYPES,
    FEEDBACK_LINK_EXPIRY_SECONDS,
    FEEDBACK_PREFIX,
    MAX_UPLOAD_SIZE_BYTES,
    STATEMENT_PREFIX,
)

__all__ = [
    "ALLOWED_DOCUMENT_TYPES",
    "BATCH_SIZE",
    "FEEDBACK_LINK_EXPIRY_SECONDS",
    "FEEDBACK_PREFIX",
    "MAX_UPLOAD_SIZE_BYTES",
    "PROCESS_TIME_HEADER",
    "REQUEST_ID_HEADER",
    "SECURITY_HEADERS",
    "SLOW_REQUEST_THRESHOLD",
    "STATEMENT_PREFIX",
    "STATS_FETCH_LIMIT",
    "STATS_TIERS",
    "SUBSCRIPTION_FETCH_LIMIT",
]
