# lexia/api/__init__.py
"""HTTP API (FastAPI)."""

from .app import create_app

__all__ = ["create_app"]
