"""Security domain: key handling and authenticated encryption."""

from seal.domain.security.exceptions import (
    AuthenticationError,
    EncryptionError,
    InvalidEncodingError,
    InvalidEncryptionKeyError,
    InvalidInputError,
    KeyDeserializationError,
    KeyFormatError,
    KeyGenerationError,
    SecurityDomainError,
)
from seal.domain.security.services import CipherService

__all__ = [
    "AuthenticationError",
    "CipherService",
    "EncryptionError",
    "InvalidEncodingError",
    "InvalidEncryptionKeyError",
    "InvalidInputError",
    "KeyDeserializationError",
    "KeyFormatError",
    "KeyGenerationError",
    "SecurityDomainError",
]
