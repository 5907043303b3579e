from __future__ import annotations

import dataclasses
import datetime as dt
from collections.abc import Awaitable, Callable
from typing import Any

from movie_api.core.error_codes import MovieErrorCode
from movie_api.core.validation import (
    Existence,
    LengthBetween,
    Predicate,
    Presence,
    Rule,
    Validator,
)


TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 2
DESCRIPTION_MAX_LENGTH = 50

MovieExistsCheck = Callable[[str, dt.datetime | None], Awaitable[bool]]


@dataclasses.dataclass
class CreateMovieRequest:
    movie: Any | None


@dataclasses.dataclass
class UpdateMovieRequest:
    # Id may arrive in the URL, the body, or both.
    id: int | None
    movie: Any | None


def _field_rules(*, title_depends_on: tuple[str, ...] = ()) -> list[Rule]:
    return [
        LengthBetween(
            name="title_length",
            code=MovieErrorCode.TITLE_NOT_BETWEEN_2_AND_50_CHARACTERS,
            field="movie.title",
            min_length=TITLE_MIN_LENGTH,
            max_length=TITLE_MAX_LENGTH,
            depends_on=("title_present", *title_depends_on),
        ),
        Presence(
            name="description_present",
            code=MovieErrorCode.EMPTY_OR_NULL_MOVIE_DESCRIPTION,
            field="movie.description",
            depends_on=("movie_present",),
        ),
        LengthBetween(
            name="description_length",
            code=MovieErrorCode.DESCRIPTION_NOT_BETWEEN_2_AND_50_CHARACTERS,
            field="movie.description",
            min_length=DESCRIPTION_MIN_LENGTH,
            max_length=DESCRIPTION_MAX_LENGTH,
            depends_on=("description_present",),
        ),
    ]


def create_movie_validator(movie_exists: MovieExistsCheck) -> Validator:
    """Rules for POST /movies.

    The duplicate check needs a title, and a duplicate makes the title length
    moot, so `title_length` depends on both.
    """

    async def already_exists(request: CreateMovieRequest) -> bool:
        return await movie_exists(request.movie.title, request.movie.release_date)

    return Validator(
        [
            Presence(
                name="movie_present",
                code=MovieErrorCode.NULL_REQUEST_VIEW_MODEL,
                field="movie",
            ),
            Presence(
                name="title_present",
                code=MovieErrorCode.EMPTY_OR_NULL_MOVIE_TITLE,
                field="movie.title",
                depends_on=("movie_present",),
            ),
            Existence(
                name="movie_unique",
                code=MovieErrorCode.MOVIE_ALREADY_EXISTS,
                exists=already_exists,
                depends_on=("title_present",),
            ),
            *_field_rules(title_depends_on=("movie_unique",)),
        ]
    )


def _has_id_conflict(request: UpdateMovieRequest) -> bool:
    body_id = request.movie.id
    return request.id is not None and body_id is not None and request.id != body_id


def _has_an_id(request: UpdateMovieRequest) -> bool:
    return request.id is not None or request.movie.id is not None


def update_movie_validator() -> Validator:
    """Rules for PUT /movies/{id}."""
    return Validator(
        [
            Presence(
                name="movie_present",
                code=MovieErrorCode.NULL_REQUEST_VIEW_MODEL,
                field="movie",
            ),
            Predicate(
                name="id_consistent",
                code=MovieErrorCode.ID_CONFLICT,
                check=lambda request: not _has_id_conflict(request),
                depends_on=("movie_present",),
            ),
            Predicate(
                name="id_present",
                code=MovieErrorCode.EMPTY_OR_NULL_MOVIE_ID,
                check=_has_an_id,
                depends_on=("movie_present",),
            ),
            Presence(
                name="title_present",
                code=MovieErrorCode.EMPTY_OR_NULL_MOVIE_TITLE,
                field="movie.title",
                depends_on=("movie_present",),
            ),
            *_field_rules(),
        ]
    )
