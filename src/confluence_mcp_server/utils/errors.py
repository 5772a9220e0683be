"""Confluence MCP Server Error Handling Utilities

Custom exception classes for Confluence attachment operations with
standardized error messages.
"""

from typing import Optional, Dict, Any


class ConfluenceError(Exception):
    """Base exception for all Confluence-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize Confluence error.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MalformedEndpointError(ConfluenceError):
    """Raised when an endpoint URL cannot be built.

    Examples:
    - Empty content or attachment identifier
    - Base URL without scheme or host

    Never sent over the wire.
    """

    pass


class UnrecognizedIDFormatError(ConfluenceError):
    """Raised when an attachment ID lacks the expected type prefix."""

    pass


class LocalIOError(ConfluenceError):
    """Raised when a local upload source cannot be opened or read."""

    pass


class DecodeError(ConfluenceError):
    """Raised when a response body does not match the expected JSON shape."""

    pass


class NotFoundError(ConfluenceError):
    """Raised when a well-formed response holds an empty result list."""

    pass


class TransportError(ConfluenceError):
    """Raised when the HTTP exchange fails.

    Covers network failures and every non-2xx status returned by Confluence.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, details)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Raised when credentials are rejected.

    Corresponds to HTTP 401 Unauthorized responses.
    """

    pass


class ForbiddenError(TransportError):
    """Raised when the user lacks permission for an operation.

    Corresponds to HTTP 403 Forbidden responses.
    """

    pass


class ConflictError(TransportError):
    """Raised when an upload conflicts with existing content.

    Corresponds to HTTP 409 Conflict responses.
    """

    pass


class RateLimitError(TransportError):
    """Raised when the API rate limit is exceeded.

    Corresponds to HTTP 429 Too Many Requests responses.
    """

    pass


class ServerError(TransportError):
    """Raised when Confluence returns a 5xx response."""

    pass


def handle_http_error(status_code: int, response_text: str) -> TransportError:
    """Convert HTTP error response to appropriate exception.

    Args:
        status_code: HTTP status code
        response_text: Response body text

    Returns:
        Appropriate TransportError subclass instance
    """
    error_map = {
        401: AuthenticationError,
        403: ForbiddenError,
        409: ConflictError,
        429: RateLimitError,
    }
    details = {"status_code": status_code, "response": response_text}

    if status_code in error_map:
        error_class = error_map[status_code]
        return error_class(
            f"HTTP {status_code}: {response_text}",
            details=details,
            status_code=status_code
        )

    if 500 <= status_code < 600:
        return ServerError(
            f"HTTP {status_code}: Server error - {response_text}",
            details=details,
            status_code=status_code
        )

    return TransportError(
        f"HTTP {status_code}: {response_text}",
        details=details,
        status_code=status_code
    )
