from __future__ import annotations

import pytest

from movie_api.core.error_codes import (
    ErrorCodeDescriptor,
    ErrorCodeRegistry,
    GeneralErrorCode,
    MovieErrorCode,
    code_for_status,
    describe,
    registry,
)


def test_every_enum_code_is_registered_once() -> None:
    codes = [int(c) for c in GeneralErrorCode] + [int(c) for c in MovieErrorCode]
    assert len(codes) == len(set(codes))
    assert sorted(d.code for d in registry) == sorted(codes)
    assert len(registry) == len(codes)


def test_describe_movie_codes() -> None:
    assert describe(MovieErrorCode.EMPTY_OR_NULL_MOVIE_TITLE) == (
        "Movie Title cannot be null or empty"
    )
    assert describe(40007) == "Movie already exists"
    assert describe(40901) == "Id in URL does not match with id in body"
    assert describe(GeneralErrorCode.UNEXPECTED) == "An unexpected error occurred"


def test_unknown_code_raises() -> None:
    assert not registry.is_known(49999)
    with pytest.raises(KeyError):
        describe(49999)


def test_duplicate_registration_rejected() -> None:
    r = ErrorCodeRegistry([ErrorCodeDescriptor(40001, "first")])
    with pytest.raises(ValueError):
        r.register(ErrorCodeDescriptor(40001, "second"))
    assert r.describe(40001) == "first"


def test_codes_follow_http_class_layout() -> None:
    for descriptor in registry:
        assert 10000 <= descriptor.code <= 59999
        assert str(descriptor.code)[0] in {"4", "5"}


@pytest.mark.parametrize(
    ("status", "code"),
    [(400, 40000), (401, 40100), (404, 40400), (405, 40500), (418, 40000), (503, 50000)],
)
def test_code_for_status_stays_in_registry(status: int, code: int) -> None:
    assert code_for_status(status) == code
    assert registry.is_known(code_for_status(status))
