from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel

from movie_api.api.deps import (
    get_create_movie_validator,
    get_movie_service,
    get_update_movie_validator,
)
from movie_api.core.error_codes import GeneralErrorCode, describe
from movie_api.core.errors import ApiResponse, FaultKind, NestedFault
from movie_api.core.validation import Validator
from movie_api.models.movie import Movie
from movie_api.services.movie import MovieService, normalize_to_utc
from movie_api.validators.movie import CreateMovieRequest, UpdateMovieRequest


router = APIRouter(prefix="/api/v1/movies", tags=["movies"])


def _isoformat_z(value: dt.datetime) -> str:
    s = value.isoformat()
    if s.endswith("+00:00"):
        return s.removesuffix("+00:00") + "Z"
    return s


class MovieView(BaseModel):
    id: int
    title: str
    description: str
    release_date: str | None = None


class CreateMovieViewModel(BaseModel):
    # Optional on purpose: emptiness is reported with coded errors by the
    # validator rather than by pydantic.
    title: str | None = None
    description: str | None = None
    release_date: dt.datetime | None = None


class MovieViewModel(BaseModel):
    id: int | None = None
    title: str | None = None
    description: str | None = None
    release_date: dt.datetime | None = None


def to_view(movie: Movie) -> MovieView:
    release_date = normalize_to_utc(movie.release_date)
    return MovieView(
        id=movie.id,
        title=movie.title,
        description=movie.description,
        release_date=_isoformat_z(release_date) if release_date is not None else None,
    )


@router.get("", response_model=ApiResponse[list[MovieView]])
async def list_movies(
    service: MovieService = Depends(get_movie_service),
) -> ApiResponse[list[MovieView]]:
    movies = await service.get_all_movies()
    return ApiResponse[list[MovieView]](data=[to_view(m) for m in movies])


@router.get("/{id}", response_model=ApiResponse[MovieView])
async def get_movie(
    id: int,
    service: MovieService = Depends(get_movie_service),
) -> ApiResponse[MovieView]:
    movie = await service.get_movie(id)
    return ApiResponse[MovieView](data=to_view(movie))


@router.post("", response_model=ApiResponse[MovieView], status_code=201)
async def create_movie(
    payload: CreateMovieViewModel | None = Body(default=None),
    service: MovieService = Depends(get_movie_service),
    validator: Validator = Depends(get_create_movie_validator),
) -> ApiResponse[MovieView]:
    await validator.assert_valid(CreateMovieRequest(movie=payload))

    movie = await service.create_movie(
        title=payload.title,
        description=payload.description,
        release_date=payload.release_date,
    )
    return ApiResponse[MovieView](data=to_view(movie))


@router.put("/{id}", response_model=ApiResponse[MovieView])
async def update_movie(
    id: int,
    payload: MovieViewModel | None = Body(default=None),
    service: MovieService = Depends(get_movie_service),
    validator: Validator = Depends(get_update_movie_validator),
) -> ApiResponse[MovieView]:
    await validator.assert_valid(UpdateMovieRequest(id=id, movie=payload))

    movie = await service.update_movie(
        id,
        title=payload.title,
        description=payload.description,
        release_date=payload.release_date,
    )
    return ApiResponse[MovieView](data=to_view(movie))


@router.delete("/{id}", status_code=204)
async def delete_movie(
    id: int,
    service: MovieService = Depends(get_movie_service),
) -> Response:
    await service.delete_movie(id)
    return Response(status_code=204)


sample_router = APIRouter(tags=["diagnostics"])


@sample_router.get("/SampleError")
async def sample_error() -> None:
    """Raise a handled security fault to exercise the error pipeline."""
    code = GeneralErrorCode.EXAMPLE_SECURITY_ISSUE
    raise NestedFault(
        code=code,
        description=describe(code),
        kind=FaultKind.SECURITY,
        status_code=413,
    )
