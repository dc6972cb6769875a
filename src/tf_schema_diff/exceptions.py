"""Custom exceptions for tf-schema-diff.

This module defines exception classes for the error conditions that can occur
while loading schema documents, configuring the tool, and talking to the
semantic oracle.
"""


class SchemaDiffError(Exception):
    """Base exception for all tf-schema-diff errors."""

    pass


class ConfigurationError(SchemaDiffError):
    """Raised when configuration is invalid or missing."""

    pass


class SchemaLoadError(SchemaDiffError):
    """Raised when an input schema document is unreadable or malformed."""

    def __init__(self, message: str, path: str | None = None):
        """Initialize schema load error.

        Args:
            message: Error message
            path: Path of the offending document, if known
        """
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ResourceNotFoundError(SchemaDiffError):
    """Raised when a named resource does not exist in a schema document."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"Resource '{resource}' not found in the after schema")


class OracleError(SchemaDiffError):
    """Base class for failures talking to the semantic oracle."""

    pass


class NetworkError(OracleError):
    """Raised when network-related errors occur (timeouts, connection failures)."""

    pass


class APIError(OracleError):
    """Raised when the oracle API answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None, response: dict | None = None):
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code
            response: API response body
        """
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with status code and response."""
        msg = self.message
        if self.status_code:
            msg = f"[{self.status_code}] {msg}"
        if self.response:
            msg = f"{msg}: {self.response}"
        return msg


class AuthenticationError(APIError):
    """Raised when the API key is rejected (401/403)."""

    pass


class RateLimitError(APIError):
    """Raised when the oracle rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: dict | None = None,
        retry_after: int | None = None,
    ):
        super().__init__(message, status_code, response)
        self.retry_after = retry_after


class ServerError(APIError):
    """Raised when the oracle returns a 5xx error (529 overloaded included)."""

    pass
