"""Cipher service interface for the Security domain."""

from abc import ABC, abstractmethod


class CipherService(ABC):
    """Domain service interface for text encryption operations."""

    @abstractmethod
    def encrypt(self, plaintext: str | None) -> str:
        """
        Encrypt a plaintext string to a base64 ciphertext.

        Parameters
        ----------
        plaintext
            The text to encrypt

        Returns
        -------
        Base64 encoded ciphertext envelope

        Raises
        ------
        InvalidInputError
            If plaintext is None
        EncryptionError
            If encryption fails
        """

    @abstractmethod
    def decrypt(self, ciphertext: str | None) -> str:
        """
        Decrypt a base64 ciphertext back to plaintext.

        Parameters
        ----------
        ciphertext
            Base64 encoded ciphertext envelope

        Returns
        -------
        Decrypted plaintext string

        Raises
        ------
        InvalidInputError
            If ciphertext is None
        InvalidEncodingError
            If ciphertext is not valid base64
        AuthenticationError
            If the envelope cannot be opened (wrong key, tampered data)
        """

    @abstractmethod
    def generate_key(self) -> str:
        """
        Generate new, unrelated key material for provisioning.

        Does not affect the key this service is bound to.

        Returns
        -------
        Base64 encoded serialized keyset

        Raises
        ------
        KeyGenerationError
            If the key cannot be generated or serialized
        """
