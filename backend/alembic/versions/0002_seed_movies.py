"""Seed sample movies.

Revision ID: 0002_seed_movies
Revises: 0001_movies
Create Date: 2026-10-19

"""

from __future__ import annotations

import datetime as dt

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision = "0002_seed_movies"
down_revision = "0001_movies"
branch_labels = None
depends_on = None


SEED_MOVIES = [
    (
        "The Shawshank Redemption",
        "Two imprisoned men bond over years",
        dt.datetime(1994, 9, 23),
    ),
    (
        "The Godfather",
        "An organized crime dynasty's patriarch",
        dt.datetime(1972, 3, 24),
    ),
    ("The Dark Knight", "Batman faces the Joker", dt.datetime(2008, 7, 18)),
    (
        "Pulp Fiction",
        "Intertwined tales of crime in Los Angeles",
        dt.datetime(1994, 10, 14),
    ),
    (
        "Spirited Away",
        "A girl wanders into a world of spirits",
        dt.datetime(2001, 7, 20),
    ),
]


def upgrade() -> None:
    movies = sa.table(
        "movies",
        sa.column("title", sa.String),
        sa.column("description", sa.String),
        sa.column("release_date", sa.DateTime(timezone=True)),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("updated_at", sa.DateTime(timezone=True)),
    )
    now = dt.datetime.now(dt.timezone.utc)
    op.bulk_insert(
        movies,
        [
            {
                "title": title,
                "description": description,
                "release_date": release_date.replace(tzinfo=dt.timezone.utc),
                "created_at": now,
                "updated_at": now,
            }
            for title, description, release_date in SEED_MOVIES
        ],
    )


def downgrade() -> None:
    titles = [title for title, _, _ in SEED_MOVIES]
    op.execute(
        sa.text("DELETE FROM movies WHERE title IN :titles").bindparams(
            sa.bindparam("titles", value=titles, expanding=True)
        )
    )
