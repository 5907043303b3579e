"""ASGI entry point: `uvicorn main:app` from the backend directory."""

from __future__ import annotations

from movie_api.main import app

__all__ = ["app"]
