from seal.infrastructure.security.cipher_service_aesgcm import AesGcmCipherService
from seal.infrastructure.security.key_material import KeyMaterial
from seal.infrastructure.security.keyset import KeyAlgorithm, Keyset

__all__ = [
    "AesGcmCipherService",
    "KeyAlgorithm",
    "KeyMaterial",
    "Keyset",
]
