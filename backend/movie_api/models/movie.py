from __future__ import annotations

import datetime as dt

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from movie_api.db.base import Base, Timestamped


class Movie(Timestamped, Base):
    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    description: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    # Natural key together with title; null means "unknown".
    release_date: Mapped[dt.datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )

    __table_args__ = (sa.Index("ix_movies_title_release", "title", "release_date"),)
