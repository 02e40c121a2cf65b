"""Base error types shared by every SEAL layer.

Each failure carries an ``ErrorCode`` so the HTTP layer and the CLI can
report it the same way without inspecting exception classes.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes returned to API clients in the ``code`` field."""

    # Request errors (400 / 415)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_ENCODING = "INVALID_ENCODING"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"

    # Cryptographic failures (500)
    ENCRYPTION_FAILED = "ENCRYPTION_FAILED"
    DECRYPTION_FAILED = "DECRYPTION_FAILED"
    KEY_GENERATION_FAILED = "KEY_GENERATION_FAILED"
    INVALID_ENCRYPTION_KEY = "INVALID_ENCRYPTION_KEY"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Root of the SEAL error hierarchy.

    Attributes
    ----------
    message
        Text that is safe to return to a caller. Never contains key material.
    code
        The ``ErrorCode`` reported alongside the message.
    details
        Extra context for logs only.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """A request or argument was rejected before any cryptography ran."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UnsupportedMediaTypeError(ValidationError):
    """The request body was sent with a content type other than the expected one."""

    def __init__(self, expected: str) -> None:
        super().__init__(
            f"Content type must be {expected}",
            ErrorCode.UNSUPPORTED_MEDIA_TYPE,
            {"expected": expected},
        )
