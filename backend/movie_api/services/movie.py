from __future__ import annotations

import datetime as dt
from collections.abc import Sequence

from movie_api.core.error_codes import MovieErrorCode
from movie_api.core.errors import DomainFault
from movie_api.models.movie import Movie
from movie_api.repositories.movie import MovieRepository


def normalize_to_utc(value: dt.datetime | None) -> dt.datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


class MovieService:
    """Movie business operations.

    Raises:
        DomainFault: 404 / MOVIE_NOT_FOUND when an id does not resolve.
    """

    def __init__(self, repository: MovieRepository) -> None:
        self.repository = repository

    async def _require(self, movie_id: int) -> Movie:
        movie = await self.repository.get(movie_id)
        if movie is None:
            raise DomainFault.from_code(MovieErrorCode.MOVIE_NOT_FOUND, status_code=404)
        return movie

    async def get_all_movies(self) -> Sequence[Movie]:
        return await self.repository.get_all()

    async def get_movie(self, movie_id: int) -> Movie:
        return await self._require(movie_id)

    async def create_movie(
        self, *, title: str, description: str, release_date: dt.datetime | None
    ) -> Movie:
        return await self.repository.create(
            title=title.strip(),
            description=description.strip(),
            release_date=normalize_to_utc(release_date),
        )

    async def update_movie(
        self,
        movie_id: int,
        *,
        title: str,
        description: str,
        release_date: dt.datetime | None,
    ) -> Movie:
        movie = await self._require(movie_id)
        return await self.repository.update(
            movie,
            title=title.strip(),
            description=description.strip(),
            release_date=normalize_to_utc(release_date),
        )

    async def delete_movie(self, movie_id: int) -> int:
        movie = await self._require(movie_id)
        await self.repository.delete(movie)
        return movie_id

    async def movie_exists(self, title: str, release_date: dt.datetime | None) -> bool:
        """Existence predicate used by create validation (natural key)."""
        return await self.repository.exists(title.strip(), normalize_to_utc(release_date))
