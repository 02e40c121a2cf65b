from seal.domain.security.services.cipher_service import CipherService

__all__ = ["CipherService"]
