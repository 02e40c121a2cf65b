from seal.presentation.api.routers.encryption import router as encryption_router

__all__ = [
    "encryption_router",
]
