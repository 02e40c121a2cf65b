"""SEAL configuration.

Every field maps to an upper-case environment variable of the same name
(`ENCRYPTION_KEY`, `TRIM_PLAINTEXT`, `API_PORT`, ...). Real environment
variables take precedence over the .env file picked by
`_resolve_env_file_path`.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Return the nearest ancestor holding a config/ directory or a .git checkout."""
    here = Path(__file__).resolve().parent
    for parent in [here, *here.parents]:
        if (parent / "config").is_dir() or (parent / ".git").is_dir():
            return parent
    return Path(__file__).resolve().parents[2]


def _resolve_env_file_path() -> Path | None:
    """Pick the .env file to read, or None when there is none.

    SEAL_ENV_FILE wins when it names an existing file (relative paths are
    taken from the project root). Otherwise config/.env.dev is preferred
    over config/.env.
    """
    root = _find_project_root()

    explicit = os.environ.get("SEAL_ENV_FILE")
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = root / path
        if path.exists():
            return path

    for name in (".env.dev", ".env"):
        candidate = root / "config" / name
        if candidate.exists():
            return candidate

    return None


class Settings(BaseSettings):
    """Runtime configuration for the API server and the CLI.

    Only `encryption_key` is required; the process refuses to start
    without a usable keyset.
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required
    encryption_key: SecretStr  # Base64 binary keyset (see `seal keys generate`)

    # Application
    app_name: str = "SEAL"

    # Plaintext is encrypted byte-for-byte unless this is enabled.
    # Ciphertext input is always stripped of surrounding whitespace.
    trim_plaintext: bool = False

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed (secure default)

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return the process settings, read once and cached."""
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
