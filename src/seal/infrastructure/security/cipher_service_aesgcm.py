"""AES-GCM cipher service implementation."""

import base64

from cryptography.exceptions import InvalidTag

from seal.domain.security.exceptions import (
    AuthenticationError,
    EncryptionError,
    InvalidEncodingError,
    InvalidInputError,
)
from seal.domain.security.services import CipherService
from seal.infrastructure.security.key_material import KeyMaterial


class AesGcmCipherService(CipherService):
    """AES-256-GCM cipher service bound to one key for its lifetime."""

    ASSOCIATED_DATA = b""

    def __init__(self, key_material: KeyMaterial):
        self._key_material = key_material

    def encrypt(self, plaintext: str | None) -> str:
        if plaintext is None:
            msg = "Plaintext is required"
            raise InvalidInputError(msg)

        try:
            envelope = self._key_material.seal(
                plaintext.encode("utf-8"),
                self.ASSOCIATED_DATA,
            )
        except Exception as e:
            raise EncryptionError() from e

        return base64.b64encode(envelope).decode("ascii")

    def decrypt(self, ciphertext: str | None) -> str:
        if ciphertext is None:
            msg = "Ciphertext is required"
            raise InvalidInputError(msg)

        try:
            envelope = base64.b64decode(ciphertext, validate=True)
        except ValueError:
            raise InvalidEncodingError() from None

        try:
            plaintext = self._key_material.open(envelope, self.ASSOCIATED_DATA)
            return plaintext.decode("utf-8")
        except (InvalidTag, ValueError) as e:
            raise AuthenticationError() from e

    def generate_key(self) -> str:
        return KeyMaterial.generate().export()
