"""Retool SDK exceptions for error handling."""
from __future__ import annotations

from typing import Optional


class RetoolError(Exception):
    """Base exception for all Retool SDK operations."""
    pass


class ConfigurationError(RetoolError):
    """Client construction failed - missing input or invalid option value."""
    pass


class SerializationError(RetoolError):
    """Request body could not be marshalled to JSON. The request was never sent."""
    pass


class RequestConstructionError(RetoolError):
    """The HTTP request could not be built (malformed URL, unsupported scheme)."""
    pass


class TransportError(RetoolError):
    """Network failure, refused connection or timeout while talking to the API."""
    pass


class DecodeError(RetoolError):
    """Response body is not a valid envelope for the expected payload.

    Attributes:
        status_code: HTTP status code of the undecodable response
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RetoolAPIError(RetoolError):
    """Failure reported by the API through an envelope with ``success: false``.

    ``str(error)`` is exactly the envelope message so callers can match on
    known server-side messages.

    Attributes:
        message: Envelope message, verbatim
        status_code: HTTP status code
        endpoint: URL of the failing request
    """

    def __init__(self, message: str, status_code: Optional[int] = None, endpoint: str = ""):
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class PaginationLimitExceeded(RetoolError):
    """A collection fetch ran past its page or time budget.

    Attributes:
        pages: Number of pages fetched before giving up
    """

    def __init__(self, message: str, pages: int):
        self.pages = pages
        super().__init__(message)


class ValidationError(RetoolError, ValueError):
    """Local input validation failed before any request was issued."""
    pass
