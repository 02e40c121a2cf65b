"""REST API presentation layer for SEAL.

This package provides a FastAPI-based REST API for the SEAL application.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── dependencies.py       # Dependency injection
    ├── exception_handlers.py # Domain exception to HTTP mapping
    └── routers/              # API route handlers
"""

from seal.presentation.api.app import create_app

__all__ = ["create_app"]
