"""
Fitbit SDK error types.

Every failure surfaced by the SDK is a FitbitAPIError. Subclasses narrow
down where it happened: on the wire, or while mapping the JSON body.
"""

from typing import Optional


class FitbitAPIError(Exception):
    """
    Fitbit API failure.

    Raised directly for error-status responses, in which case the message
    is the raw response body.

    Attributes:
        status_code: HTTP status of the failed response, if one was received
        body: Raw response body, if one was received
        operation: Human-readable name of the SDK operation that failed
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.operation = operation


class TransportError(FitbitAPIError):
    """Network, TLS or OAuth signing failure. The original error is chained."""


class CredentialsNotFoundError(FitbitAPIError):
    """No stored OAuth credentials for the acting local user."""


class ResponseParseError(FitbitAPIError):
    """Response body could not be decoded into the expected record."""


class SchemaMismatchError(ResponseParseError):
    """A JSON field is missing or not of the documented type."""

    def __init__(
        self,
        field: str,
        message: str,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message, status_code, body, operation)
        self.field = field
