"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests (domain, infrastructure, CLI)
    └── integration/
        └── api/           # HTTP tests through FastAPI's TestClient

The process-wide ENCRYPTION_KEY is taken from config/.env.dev (or
config/.env) when present, otherwise a throwaway key is generated so the
application module can be imported.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from seal.infrastructure.security import KeyMaterial
from seal_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

os.environ.setdefault("ENCRYPTION_KEY", KeyMaterial.generate().export())


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure settings are loaded fresh for the test session."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def key_material() -> KeyMaterial:
    """Fresh key material for a single test."""
    return KeyMaterial.generate()
