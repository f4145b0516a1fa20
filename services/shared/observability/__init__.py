"""
Shared observability helpers (telemetry, privacy utilities, etc.).

Service modules import from this package so transcripts and queries never reach
log output in clear text and every request carries a correlation id.
"""

from .privacy import hash_payload, redact_fields, text_fingerprint
from .telemetry import (
    CORRELATION_ID_HEADER,
    RequestContextToken,
    bind_request_context,
    ensure_request_id,
    install_request_context,
    reset_request_context,
    setup_telemetry,
)

__all__ = [
    "hash_payload",
    "redact_fields",
    "text_fingerprint",
    "CORRELATION_ID_HEADER",
    "RequestContextToken",
    "bind_request_context",
    "ensure_request_id",
    "install_request_context",
    "reset_request_context",
    "setup_telemetry",
]
