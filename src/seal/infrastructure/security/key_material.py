"""AES-256-GCM key material.

Envelope format: nonce(12) || ciphertext || tag(16)
"""

from __future__ import annotations

import base64
import logging
import os
import secrets
import struct

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from seal.domain.security.exceptions import KeyFormatError, KeyGenerationError
from seal.infrastructure.security.keyset import KEY_SIZES, KeyAlgorithm, Keyset

logger = logging.getLogger(__name__)


class KeyMaterial:
    """
    One AES-256-GCM key, ready for use as an AEAD primitive.

    Instances are immutable and safe to share between threads. Build them
    with generate() or load(); the raw key is only reachable through
    export().
    """

    NONCE_SIZE = 12  # 96-bit nonce (GCM standard)
    TAG_SIZE = 16

    __slots__ = ("_aead", "_keyset")

    def __init__(self, keyset: Keyset):
        if len(keyset.key) != KEY_SIZES[keyset.algorithm]:
            msg = f"Invalid key length for {keyset.algorithm.name}"
            raise ValueError(msg)
        self._keyset = keyset
        self._aead = AESGCM(keyset.key)

    def __repr__(self) -> str:
        return f"KeyMaterial(key_id={self.key_id}, algorithm={self.algorithm.name})"

    @property
    def key_id(self) -> int:
        return self._keyset.key_id

    @property
    def algorithm(self) -> KeyAlgorithm:
        return self._keyset.algorithm

    @classmethod
    def generate(cls) -> KeyMaterial:
        """Create new random key material."""
        try:
            key = AESGCM.generate_key(bit_length=256)
            key_id = secrets.randbelow(2**32 - 1) + 1
            material = cls(Keyset(key_id=key_id, key=key))
        except Exception as e:
            raise KeyGenerationError() from e

        logger.debug("Generated new key material (key_id=%d)", key_id)
        return material

    @classmethod
    def load(cls, serialized: str) -> KeyMaterial:
        """
        Load key material from a base64 encoded binary keyset.

        Raises
        ------
        KeyFormatError
            If the value is empty or not valid base64
        KeyDeserializationError
            If the decoded bytes are not a valid AES-256-GCM keyset
        """
        if not serialized or not serialized.strip():
            msg = "Encryption key is empty"
            raise KeyFormatError(msg)

        try:
            raw = base64.b64decode(serialized.strip(), validate=True)
        except ValueError:
            msg = "Encryption key is not valid base64"
            raise KeyFormatError(msg) from None

        return cls(Keyset.from_bytes(raw))

    def export(self) -> str:
        """Serialize to a base64 encoded binary keyset."""
        try:
            raw = self._keyset.to_bytes()
        except struct.error as e:
            raise KeyGenerationError() from e
        return base64.b64encode(raw).decode("ascii")

    def seal(self, plaintext: bytes, associated_data: bytes = b"") -> bytes:
        """
        Encrypt and authenticate with a fresh random nonce.

        Returns: nonce || ciphertext+tag
        """
        nonce = os.urandom(self.NONCE_SIZE)
        return nonce + self._aead.encrypt(nonce, plaintext, associated_data)

    def open(self, envelope: bytes, associated_data: bytes = b"") -> bytes:
        """
        Verify and decrypt an envelope produced by seal().

        Raises cryptography.exceptions.InvalidTag if the envelope is
        truncated, tampered with or sealed under another key.
        """
        if len(envelope) < self.NONCE_SIZE + self.TAG_SIZE:
            raise InvalidTag()
        nonce = envelope[: self.NONCE_SIZE]
        ct = envelope[self.NONCE_SIZE :]
        return self._aead.decrypt(nonce, ct, associated_data)
