"""Security domain exceptions.

Two families: request problems (missing input, bad encoding) which the
caller can fix, and cryptographic failures which carry a fixed message so
that responses never reveal why an operation failed.
"""

from typing import Any

from seal.domain.shared.exceptions import DomainException, ErrorCode, ValidationError


class SecurityDomainError(DomainException):
    """Base exception for security domain."""


class InvalidInputError(ValidationError, SecurityDomainError):
    """Raised when an operation receives no input."""

    def __init__(
        self,
        message: str = "Input is required",
        code: ErrorCode = ErrorCode.INVALID_INPUT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidEncodingError(ValidationError, SecurityDomainError):
    """Raised when ciphertext is not valid base64."""

    def __init__(
        self,
        message: str = "Ciphertext is not valid base64",
        code: ErrorCode = ErrorCode.INVALID_ENCODING,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EncryptionError(SecurityDomainError):
    """Raised when encryption fails."""

    def __init__(
        self,
        message: str = "Encryption failed",
        code: ErrorCode = ErrorCode.ENCRYPTION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AuthenticationError(SecurityDomainError):
    """Raised when a ciphertext cannot be opened.

    Covers a wrong key, tampered data, truncated input and structurally
    invalid envelopes with the same message.
    """

    def __init__(
        self,
        message: str = "Decryption failed",
        code: ErrorCode = ErrorCode.DECRYPTION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class KeyGenerationError(SecurityDomainError):
    """Raised when new key material cannot be generated or serialized."""

    def __init__(
        self,
        message: str = "Key generation failed",
        code: ErrorCode = ErrorCode.KEY_GENERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidEncryptionKeyError(SecurityDomainError):
    """Raised when encryption key is invalid or missing."""

    def __init__(
        self,
        message: str = "Encryption key is invalid",
        code: ErrorCode = ErrorCode.INVALID_ENCRYPTION_KEY,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class KeyFormatError(InvalidEncryptionKeyError):
    """Raised when a serialized key is not valid base64."""


class KeyDeserializationError(InvalidEncryptionKeyError):
    """Raised when decoded key bytes are not a valid AES-256-GCM keyset."""
