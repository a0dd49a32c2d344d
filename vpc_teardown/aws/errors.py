"""Provider error translation.

Collapses botocore exceptions into a single ProviderError carrying a flat
message for display and a categorized kind for callers that care.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from botocore.exceptions import ClientError, EndpointConnectionError


class ErrorKind(Enum):
    """Category of a provider failure."""

    NOT_FOUND = "not_found"
    DEPENDENCY_VIOLATION = "dependency_violation"
    THROTTLING = "throttling"
    AUTHORIZATION = "authorization"
    CONNECTION = "connection"
    OTHER = "other"


AUTHORIZATION_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedOperation",
    "AuthFailure",
    "OptInRequired",
    "InvalidClientTokenId",
    "ExpiredToken",
}

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
}


def classify_error_code(code: str) -> ErrorKind:
    """Map an AWS error code to an ErrorKind.

    Args:
        code: AWS error code (e.g., "DependencyViolation")

    Returns:
        Matching ErrorKind, OTHER when the code is not recognized
    """
    if code == "DependencyViolation":
        return ErrorKind.DEPENDENCY_VIOLATION
    if code.endswith("NotFound"):
        return ErrorKind.NOT_FOUND
    if code in THROTTLING_CODES:
        return ErrorKind.THROTTLING
    if code in AUTHORIZATION_CODES:
        return ErrorKind.AUTHORIZATION
    return ErrorKind.OTHER


class ProviderError(Exception):
    """A failed provider (EC2) API call.

    Attributes:
        code: AWS error code, or the exception class name for non-API errors
        message: Human-readable error text
        kind: Categorized error kind
        operation: API operation that failed (optional)
    """

    def __init__(
        self,
        code: str,
        message: str,
        kind: Optional[ErrorKind] = None,
        operation: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.kind = kind or classify_error_code(code)
        self.operation = operation
        super().__init__(str(self))

    def __str__(self) -> str:
        if not self.message:
            return self.code
        return f"{self.code}: {self.message}"

    @classmethod
    def from_exception(cls, error: Exception, operation: Optional[str] = None) -> "ProviderError":
        """Build a ProviderError from a botocore exception.

        Args:
            error: ClientError, BotoCoreError or other exception raised by boto3
            operation: API operation name (optional)

        Returns:
            Equivalent ProviderError
        """
        if isinstance(error, ClientError):
            error_code = error.response.get("Error", {}).get("Code", "Unknown")
            error_message = error.response.get("Error", {}).get("Message", str(error))
            return cls(
                code=error_code,
                message=error_message,
                operation=operation or error.operation_name,
            )

        if isinstance(error, EndpointConnectionError):
            return cls(
                code=type(error).__name__,
                message=str(error),
                kind=ErrorKind.CONNECTION,
                operation=operation,
            )

        # BotoCoreError and anything else raised below the API layer
        return cls(code=type(error).__name__, message=str(error), kind=ErrorKind.OTHER, operation=operation)
