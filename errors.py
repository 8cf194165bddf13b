"""Relay error taxonomy. Each error knows the status and envelope it maps to."""
from typing import Optional

UPSTREAM_FAILED = "DeepSeek API call failed"


class RelayError(Exception):
    status_code = 500
    error = "Internal error"

    def __init__(self, details: Optional[str] = None, *, error: Optional[str] = None,
                 status_code: Optional[int] = None):
        super().__init__(details or error or self.error)
        self.details = details
        if error is not None:
            self.error = error
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(RelayError):
    """Bad method or missing/empty message. Never retried."""
    status_code = 400
    error = "Message is required"


class ConfigurationError(RelayError):
    """Credential missing. Operator-actionable."""
    status_code = 500
    error = "Server configuration error"


class UpstreamTransportError(RelayError):
    """Connection failure, non-200 status, or timeout."""
    status_code = 502
    error = UPSTREAM_FAILED


class UpstreamFormatError(RelayError):
    """Upstream body is not JSON or lacks choices[0].message.content."""
    status_code = 502
    error = UPSTREAM_FAILED
