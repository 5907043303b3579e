from __future__ import annotations

import asyncio
import datetime as dt
from types import SimpleNamespace

import pytest

from movie_api.core.errors import ValidationFault
from movie_api.core.validation import (
    Existence,
    LengthBetween,
    Predicate,
    Presence,
    Validator,
)
from movie_api.validators.movie import (
    CreateMovieRequest,
    UpdateMovieRequest,
    create_movie_validator,
    update_movie_validator,
)


class FakeMovieService:
    """Existence predicate with a fixed answer; records its calls."""

    def __init__(self, exists: bool = False) -> None:
        self.exists = exists
        self.calls: list[tuple[str, dt.datetime | None]] = []

    async def movie_exists(self, title: str, release_date: dt.datetime | None) -> bool:
        self.calls.append((title, release_date))
        return self.exists


def _movie(**fields: object) -> SimpleNamespace:
    base: dict[str, object] = {
        "id": None,
        "title": "Heat",
        "description": "A heist thriller",
        "release_date": None,
    }
    base.update(fields)
    return SimpleNamespace(**base)


def _codes(validator: Validator, model: object) -> list[int]:
    return [e.code for e in asyncio.run(validator.validate(model))]


def test_valid_create_request_has_no_errors() -> None:
    service = FakeMovieService()
    v = create_movie_validator(service.movie_exists)
    assert _codes(v, CreateMovieRequest(movie=_movie())) == []
    assert service.calls == [("Heat", None)]


def test_missing_body_reports_only_null_model() -> None:
    service = FakeMovieService()
    v = create_movie_validator(service.movie_exists)
    assert _codes(v, CreateMovieRequest(movie=None)) == [40001]
    assert service.calls == []


def test_empty_title_and_description_in_field_order() -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    request = CreateMovieRequest(movie=_movie(title="", description="   "))
    assert _codes(v, request) == [40003, 40004]


def test_presence_failure_skips_length_rule() -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    assert _codes(v, CreateMovieRequest(movie=_movie(title=None))) == [40003]


def test_existence_check_skipped_without_title() -> None:
    service = FakeMovieService(exists=True)
    v = create_movie_validator(service.movie_exists)
    assert _codes(v, CreateMovieRequest(movie=_movie(title=""))) == [40003]
    assert service.calls == []


def test_duplicate_suppresses_title_length_error() -> None:
    v = create_movie_validator(FakeMovieService(exists=True).movie_exists)
    assert _codes(v, CreateMovieRequest(movie=_movie(title="A"))) == [40007]


@pytest.mark.parametrize(
    "title",
    ["d", "A great movie title that is very thrilling but sadly too long."],
)
def test_title_length_bounds(title: str) -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    assert _codes(v, CreateMovieRequest(movie=_movie(title=title))) == [40005]


@pytest.mark.parametrize(
    "description",
    ["d", "A great movie description that is very descriptive but sadly too long."],
)
def test_description_length_bounds(description: str) -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    request = CreateMovieRequest(movie=_movie(description=description))
    assert _codes(v, request) == [40006]


def test_independent_failures_are_all_reported() -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    request = CreateMovieRequest(movie=_movie(title="x", description=""))
    codes = _codes(v, request)
    assert codes == [40005, 40004]
    assert len(set(codes)) == len(codes)


def test_assert_valid_raises_single_fault() -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    with pytest.raises(ValidationFault) as info:
        asyncio.run(v.assert_valid(CreateMovieRequest(movie=_movie(title="", description=""))))
    assert info.value.status_code == 400
    assert [e.code for e in info.value.errors] == [40003, 40004]
    assert info.value.errors[0].message == "Movie Title cannot be null or empty"


def test_update_id_conflict() -> None:
    v = update_movie_validator()
    request = UpdateMovieRequest(id=1, movie=_movie(id=2))
    assert _codes(v, request) == [40901]


def test_update_id_from_body_only() -> None:
    v = update_movie_validator()
    assert _codes(v, UpdateMovieRequest(id=None, movie=_movie(id=3))) == []
    assert _codes(v, UpdateMovieRequest(id=None, movie=_movie(id=None))) == [40002]


def test_update_description_length_uses_description_code() -> None:
    v = update_movie_validator()
    request = UpdateMovieRequest(id=1, movie=_movie(description="x"))
    assert _codes(v, request) == [40006]


def test_rule_dependencies_must_be_declared_first() -> None:
    with pytest.raises(ValueError):
        Validator(
            [
                LengthBetween(name="len", code=40005, field="title", depends_on=("present",)),
                Presence(name="present", code=40003, field="title"),
            ]
        )


def test_rule_names_must_be_unique() -> None:
    with pytest.raises(ValueError):
        Validator(
            [
                Presence(name="p", code=40003, field="title"),
                Presence(name="p", code=40004, field="description"),
            ]
        )


def test_skipped_parent_skips_grandchildren() -> None:
    async def never_called(model: object) -> bool:
        raise AssertionError("existence check must not run")

    v = Validator(
        [
            Presence(name="body", code=40001),
            Predicate(name="positive", code=40002, check=lambda m: m.id > 0, depends_on=("body",)),
            Existence(name="unique", code=40007, exists=never_called, depends_on=("positive",)),
        ]
    )
    assert _codes(v, None) == [40001]
    assert _codes(v, SimpleNamespace(id=0)) == [40002]


def test_length_is_measured_without_padding() -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    padded = CreateMovieRequest(movie=_movie(title=" a ", description=" ok "))
    assert _codes(v, padded) == [40005]


def test_padding_does_not_count_against_max_length() -> None:
    v = create_movie_validator(FakeMovieService().movie_exists)
    padded = CreateMovieRequest(movie=_movie(title="  " + "t" * 50 + "  "))
    assert _codes(v, padded) == []
