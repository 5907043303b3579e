"""SQLAlchemy ORM models.

Importing this module registers all tables on Base.metadata.
"""

from __future__ import annotations

from movie_api.models.movie import Movie

__all__ = ["Movie"]
