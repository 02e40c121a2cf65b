"""FastAPI dependency injection for the SEAL API.

Provides dependencies for:
- Application settings
- The process-wide key material (loaded once)
- The cipher service bound to that key
- text/plain request bodies
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from seal.domain.security.exceptions import InvalidInputError
from seal.domain.security.services import CipherService
from seal.domain.shared.exceptions import UnsupportedMediaTypeError, ValidationError
from seal.infrastructure.security import AesGcmCipherService, KeyMaterial
from seal_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"


# -----------------------------------------------------------------------------
# Key Material & Cipher Service (Singleton)
# -----------------------------------------------------------------------------


def load_key_material(settings: Settings) -> KeyMaterial:
    """
    Load key material from the encryption key in `settings`.

    Returns
    -------
    The loaded KeyMaterial

    Raises
    ------
    KeyFormatError
        If the configured key is empty or not valid base64
    KeyDeserializationError
        If the configured key is not an AES-256-GCM keyset
    """
    secret = settings.encryption_key
    key_material = KeyMaterial.load(secret.get_secret_value())
    logger.info("Encryption key loaded (key_id=%d)", key_material.key_id)
    return key_material


@lru_cache(maxsize=1)
def get_key_material() -> KeyMaterial:
    """Load the process-wide key material from application settings (singleton)."""
    return load_key_material(get_settings())


@lru_cache(maxsize=1)
def get_cipher_service() -> CipherService:
    """
    Get the cipher service bound to the configured key (singleton).

    The service holds no mutable state, so a single instance is shared
    across all requests and threads.
    """
    return AesGcmCipherService(get_key_material())


# -----------------------------------------------------------------------------
# Request Bodies
# -----------------------------------------------------------------------------


async def get_text_body(request: Request) -> str | None:
    """
    Read a text/plain request body.

    Returns
    -------
    The decoded body, or None if the request carried no body

    Raises
    ------
    UnsupportedMediaTypeError
        If the content type is not text/plain
    ValidationError
        If the body is not valid UTF-8
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != TEXT_PLAIN:
        raise UnsupportedMediaTypeError(TEXT_PLAIN)

    body = await request.body()
    if not body:
        return None

    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        msg = "Request body is not valid UTF-8"
        raise ValidationError(msg) from None


def require_text(text: Annotated[str | None, Depends(get_text_body)]) -> str:
    """Reject requests without a body."""
    if text is None:
        msg = "Request body is required"
        raise InvalidInputError(msg)
    return text


# -----------------------------------------------------------------------------
# Type Aliases for Cleaner Route Signatures
# -----------------------------------------------------------------------------

AppSettings = Annotated[Settings, Depends(get_settings)]
Cipher = Annotated[CipherService, Depends(get_cipher_service)]
TextBody = Annotated[str, Depends(require_text)]

# Usage in routes:
#   @router.post("/encrypt")
#   def encrypt(plaintext: TextBody, cipher: Cipher): ...
