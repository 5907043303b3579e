from __future__ import annotations

import datetime as dt
from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.models.movie import Movie


class MovieRepository:
    """Data access for the movies table. No business rules here."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_all(self) -> Sequence[Movie]:
        rows = await self.db.execute(sa.select(Movie).order_by(Movie.id.asc()))
        return rows.scalars().all()

    async def get(self, movie_id: int) -> Movie | None:
        return (
            await self.db.execute(sa.select(Movie).where(Movie.id == movie_id))
        ).scalar_one_or_none()

    async def exists(self, title: str, release_date: dt.datetime | None) -> bool:
        stmt = (
            sa.select(Movie.id)
            .where(Movie.title == title, Movie.release_date == release_date)
            .limit(1)
        )
        return (await self.db.execute(stmt)).first() is not None

    async def create(
        self, *, title: str, description: str, release_date: dt.datetime | None
    ) -> Movie:
        movie = Movie(title=title, description=description, release_date=release_date)
        self.db.add(movie)
        await self.db.commit()
        await self.db.refresh(movie)
        return movie

    async def update(
        self,
        movie: Movie,
        *,
        title: str,
        description: str,
        release_date: dt.datetime | None,
    ) -> Movie:
        movie.title = title
        movie.description = description
        movie.release_date = release_date
        await self.db.commit()
        await self.db.refresh(movie)
        return movie

    async def delete(self, movie: Movie) -> None:
        await self.db.delete(movie)
        await self.db.commit()
