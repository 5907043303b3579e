from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.core.validation import Validator
from movie_api.db.session import get_db
from movie_api.repositories.movie import MovieRepository
from movie_api.services.movie import MovieService
from movie_api.validators.movie import create_movie_validator, update_movie_validator


def get_movie_service(db: AsyncSession = Depends(get_db)) -> MovieService:
    return MovieService(MovieRepository(db))


def get_create_movie_validator(
    service: MovieService = Depends(get_movie_service),
) -> Validator:
    return create_movie_validator(service.movie_exists)


def get_update_movie_validator() -> Validator:
    return update_movie_validator()
