"""Binary keyset format for symmetric AEAD keys.

A keyset carries one key together with the metadata needed to use it:

    magic      4 bytes   b"SEAL"
    version    u8        format version (1)
    algorithm  u8        KeyAlgorithm value
    key_id     u32       identifier of the key
    key_len    u16       length of the key bytes
    key        key_len bytes

All integers are big-endian. The encoded length must match exactly.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from seal.domain.security.exceptions import KeyDeserializationError

KEYSET_MAGIC = b"SEAL"
KEYSET_VERSION = 1

_HEADER = struct.Struct(">4sBBIH")


class KeyAlgorithm(IntEnum):
    """Algorithms a keyset may be bound to."""

    AES256_GCM = 1


KEY_SIZES: dict[KeyAlgorithm, int] = {
    KeyAlgorithm.AES256_GCM: 32,
}


@dataclass(frozen=True, repr=False)
class Keyset:
    """Single-key keyset. The key bytes never appear in repr()."""

    key_id: int
    key: bytes
    algorithm: KeyAlgorithm = KeyAlgorithm.AES256_GCM

    def __repr__(self) -> str:
        return (
            f"Keyset(key_id={self.key_id}, "
            f"algorithm={self.algorithm.name}, key=*****)"
        )

    def to_bytes(self) -> bytes:
        header = _HEADER.pack(
            KEYSET_MAGIC,
            KEYSET_VERSION,
            self.algorithm,
            self.key_id,
            len(self.key),
        )
        return header + self.key

    @classmethod
    def from_bytes(cls, data: bytes) -> Keyset:
        """
        Parse a binary keyset.

        Raises
        ------
        KeyDeserializationError
            If the data is not a complete, supported keyset
        """
        if len(data) < _HEADER.size:
            msg = "Keyset is truncated"
            raise KeyDeserializationError(msg)

        magic, version, algorithm_id, key_id, key_len = _HEADER.unpack_from(data)
        if magic != KEYSET_MAGIC:
            msg = "Data is not a SEAL keyset"
            raise KeyDeserializationError(msg)
        if version != KEYSET_VERSION:
            msg = f"Unsupported keyset version: {version}"
            raise KeyDeserializationError(msg)

        try:
            algorithm = KeyAlgorithm(algorithm_id)
        except ValueError:
            msg = f"Unsupported key algorithm: {algorithm_id}"
            raise KeyDeserializationError(msg) from None

        key = data[_HEADER.size :]
        if len(key) != key_len or key_len != KEY_SIZES[algorithm]:
            msg = f"Invalid key length for {algorithm.name}"
            raise KeyDeserializationError(msg)

        return cls(key_id=key_id, key=bytes(key), algorithm=algorithm)
