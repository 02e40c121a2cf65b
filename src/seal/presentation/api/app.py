"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seal.domain.security.exceptions import InvalidEncryptionKeyError
from seal.domain.security.services import CipherService
from seal.infrastructure.security import AesGcmCipherService
from seal.presentation.api.dependencies import get_cipher_service, load_key_material
from seal.presentation.api.exception_handlers import setup_exception_handlers
from seal.presentation.api.routers import encryption_router
from seal_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging(level: str) -> None:
    """Configure application logging.

    Sets up logging for the seal application with:
    - Console output with timestamps and module names
    - Configurable log level for seal modules (LOG_LEVEL)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("seal").setLevel(log_level)
    logging.getLogger("seal_config").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Encryption",
        "description": """Authenticated encryption with AES-256-GCM.

**Endpoints:**
- `/encrypt` - text/plain in, base64 ciphertext out
- `/decrypt` - base64 ciphertext in, text/plain out
- `/key/generate` - new base64 keyset for provisioning another instance

**Security:**
- A fresh random nonce per encryption
- Tampered or foreign ciphertexts are rejected with a uniform error
- The service key is loaded once at startup and never exposed
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting SEAL API v%s...", API_VERSION)
    _load_encryption_key(app)
    yield

    # Shutdown
    logger.info("Shutting down SEAL API...")


def _load_encryption_key(app: FastAPI) -> None:
    """Load the service key before accepting requests.

    An unusable key is fatal: the process must not serve requests without it.
    """
    provider = app.dependency_overrides.get(get_cipher_service, get_cipher_service)
    try:
        provider()
    except InvalidEncryptionKeyError as e:
        logger.critical("Could not load encryption key: %s", e.message)
        raise SystemExit(1) from None

    logger.info("Cipher service ready")


def _bind_settings(app: FastAPI, settings: Settings) -> None:
    """Serve `app` from an explicit settings object instead of the environment.

    The key is still loaded lazily, so an unusable key stops startup in
    the lifespan exactly like a bad ENCRYPTION_KEY does.
    """

    @lru_cache(maxsize=1)
    def configured_cipher_service() -> CipherService:
        return AesGcmCipherService(load_key_material(settings))

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_cipher_service] = configured_cipher_service


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()

    v1_router.include_router(encryption_router, tags=["Encryption"])

    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Settings to serve from. When given, they replace the process
        configuration for this app, including the encryption key.

    Returns
    -------
    Configured FastAPI application instance.
    """
    bind_settings = settings is not None
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="**Authenticated encryption** (AES-256-GCM) as a service.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    if bind_settings:
        _bind_settings(app, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "encrypt": f"{API_V1_PREFIX}/encrypt",
                "decrypt": f"{API_V1_PREFIX}/decrypt",
                "generate_key": f"{API_V1_PREFIX}/key/generate",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
