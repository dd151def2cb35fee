"""
Error taxonomy for the Yildiz client.

Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes raised by the client."""

    # Network-level failures (DNS, refused connection, timeout)
    TRANSPORT_ERROR = "TRANSPORT_ERROR"

    # Status code contract
    STATUS_MISMATCH = "STATUS_MISMATCH"
    UNEXPECTED_STATUS = "UNEXPECTED_STATUS"


NO_ERROR_MESSAGE = "No error message present in body"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class YildizError(BaseModel):
    """
    Structured form of a client error.

    Lets callers log or forward a failure without holding on to the
    exception (and the response it references).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.STATUS_MISMATCH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether a caller may sensibly retry (the client never does)",
    )

    def to_exception(self) -> "YildizException":
        """Convert this error model to a raised exception."""
        return YildizException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class YildizException(Exception):
    """
    Base exception for all Yildiz client errors.

    This exception carries structured error information and can be
    converted to/from YildizError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "YILDIZ_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> YildizError:
        """Convert this exception to a YildizError model."""
        return YildizError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class TransportException(YildizException):
    """Raised when a request fails below HTTP (DNS, connect, timeout)."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        url: str | None = None,
        cause: BaseException | None = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSPORT_ERROR,
            details={
                "method": method,
                "url": url,
                "cause": type(cause).__name__ if cause is not None else None,
                "timed_out": timed_out,
            },
            retryable=True,
        )
        self.method = method
        self.url = url
        self.cause = cause
        self.timed_out = timed_out


class StatusMismatchException(YildizException):
    """Raised when the response status differs from the expected one."""

    def __init__(
        self,
        status_code: int,
        expected_status: int,
        server_message: str = NO_ERROR_MESSAGE,
        response: Any = None,
    ) -> None:
        super().__init__(
            message=(
                f"Response status code: {status_code} does not match "
                f"expected status code: {expected_status}. {server_message}."
            ),
            code=ErrorCodes.STATUS_MISMATCH,
            details={
                "status_code": status_code,
                "expected_status": expected_status,
                "server_message": server_message,
            },
        )
        self.status_code = status_code
        self.expected_status = expected_status
        self.server_message = server_message
        self.response = response


class UnexpectedStatusException(YildizException):
    """Raised by lookup operations for any status other than 200 or 404."""

    def __init__(self, status_code: int, response: Any = None) -> None:
        super().__init__(
            message=f"Unexpected status code: {status_code}.",
            code=ErrorCodes.UNEXPECTED_STATUS,
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.response = response
