"""Encryption router for encrypt, decrypt and key generation endpoints.

All endpoints exchange text/plain bodies. Errors are raised as domain
exceptions and converted by the centralized exception handlers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from seal.presentation.api.dependencies import AppSettings, Cipher, TextBody

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/encrypt",
    response_class=PlainTextResponse,
    summary="Encrypt text",
    responses={
        200: {"description": "Base64 ciphertext"},
        400: {"description": "Missing or malformed request body"},
        415: {"description": "Content type is not text/plain"},
        500: {"description": "Encryption failed"},
    },
)
def encrypt(
    plaintext: TextBody,
    cipher: Cipher,
    settings: AppSettings,
) -> str:
    """
    Encrypt a UTF-8 text body with AES-256-GCM.

    Every call uses a fresh nonce, so identical input yields different
    ciphertexts. The body is encrypted as sent unless TRIM_PLAINTEXT is
    enabled.
    """
    if settings.trim_plaintext:
        plaintext = plaintext.strip()
    return cipher.encrypt(plaintext)


@router.post(
    "/decrypt",
    response_class=PlainTextResponse,
    summary="Decrypt text",
    responses={
        200: {"description": "Decrypted plaintext"},
        400: {"description": "Missing body or ciphertext is not valid base64"},
        415: {"description": "Content type is not text/plain"},
        500: {"description": "Decryption failed"},
    },
)
def decrypt(
    ciphertext: TextBody,
    cipher: Cipher,
) -> str:
    """
    Decrypt a base64 ciphertext produced by the encrypt endpoint.

    Surrounding whitespace is ignored. Wrong keys, tampered data and
    truncated input all fail with the same response.
    """
    return cipher.decrypt(ciphertext.strip())


@router.post(
    "/key/generate",
    response_class=PlainTextResponse,
    summary="Generate a new key",
    responses={
        200: {"description": "Base64 encoded keyset"},
        500: {"description": "Key generation failed"},
    },
)
def generate_key(cipher: Cipher) -> str:
    """
    Generate a new AES-256-GCM keyset for provisioning another instance.

    The key used by this service is not changed.
    """
    key = cipher.generate_key()
    logger.info("Generated new keyset for provisioning")
    return key
