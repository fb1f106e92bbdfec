"""
Custom exceptions for the transport layer.

Every failure that can surface from a Google Maps Platform call is one of
these exceptions. Each carries an ErrorKind, which is the only input the
retry classifier looks at.
"""

from enum import Enum
from typing import Optional


TRANSIENT_API_STATUSES = frozenset({"UNKNOWN_ERROR", "UNKNOWN"})


class ErrorKind(Enum):
    """Failure taxonomy for a single HTTP attempt."""

    TRANSPORT = "transport"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"
    CLIENT_ERROR = "client_error"
    MALFORMED_RESPONSE = "malformed_response"
    APPLICATION_TRANSIENT = "application_transient"
    APPLICATION_PERMANENT = "application_permanent"
    INVALID_REQUEST = "invalid_request"


class GoogleMapsError(Exception):
    """Base class for all errors raised by this package."""

    kind = ErrorKind.INVALID_REQUEST


class InvalidRequestError(GoogleMapsError):
    """Raised when a request cannot be built or sent as specified."""

    kind = ErrorKind.INVALID_REQUEST


class TransportError(GoogleMapsError):
    """Raised when the HTTP exchange could not be established or completed."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class HttpStatusError(GoogleMapsError):
    """Raised when the server answers with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "", message: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.message = message
        text = f"HTTP {status_code}"
        if reason:
            text += f" {reason}"
        if message:
            text += f": {message}"
        super().__init__(text)


class ServerError(HttpStatusError):
    kind = ErrorKind.SERVER_ERROR


class RateLimitedError(HttpStatusError):
    kind = ErrorKind.RATE_LIMITED


class ClientError(HttpStatusError):
    kind = ErrorKind.CLIENT_ERROR


class MalformedResponseError(GoogleMapsError):
    """Raised when a response body does not have the expected shape."""

    kind = ErrorKind.MALFORMED_RESPONSE


class ApiStatusError(GoogleMapsError):
    """
    Raised when a well-formed response reports a non-success API status.

    The status is the string Google puts in the body: a legacy web service
    status such as ZERO_RESULTS, or a google.rpc status name such as
    INVALID_ARGUMENT for the newer APIs.
    """

    def __init__(self, status: str, message: Optional[str] = None, code: Optional[int] = None):
        self.status = status
        self.message = message
        self.code = code
        text = f"API status {status}"
        if message:
            text += f": {message}"
        super().__init__(text)

    @property
    def kind(self) -> ErrorKind:
        if self.status in TRANSIENT_API_STATUSES:
            return ErrorKind.APPLICATION_TRANSIENT
        return ErrorKind.APPLICATION_PERMANENT


def http_status_error(status_code: int, reason: str = "", message: str = "") -> HttpStatusError:
    """Build the HttpStatusError subclass matching a non-success status code."""
    if status_code == 429:
        return RateLimitedError(status_code, reason, message)
    if 500 <= status_code <= 599:
        return ServerError(status_code, reason, message)
    return ClientError(status_code, reason, message)
