from __future__ import annotations


class BitlyError(Exception):
    """Base client error."""

    kind = "error"


class UsageError(BitlyError):
    """A call was rejected before anything was sent."""

    kind = "usage"


class TransportError(BitlyError):
    """HTTP layer failure: non-200 status or a broken connection."""

    kind = "transport"
    timed_out = False

    def __init__(self, status_code: int | None, body: str | None = None, message: str | None = None):
        if message is None:
            message = f"HTTP {status_code}" if status_code is not None else "request failed"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RequestTimeout(TransportError):
    kind = "timeout"
    timed_out = True

    def __init__(self, message: str):
        super().__init__(None, None, message)


class ApiError(BitlyError):
    """The JSON envelope reported a non-200 status_code."""

    kind = "application"

    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class MalformedResponseError(ApiError):
    """HTTP 200 with a body that does not have the expected shape."""
