"""Error code catalog.

Codes are five digits laid out as `[http class][domain][sequence]`: the leading
digits carry the HTTP status family and the trailing digits number the condition
within its block. The registry does not check the layout; keep to it when adding
codes. Codes must be unique across the whole catalog.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable, Iterator


@dataclasses.dataclass(frozen=True, slots=True)
class ErrorCodeDescriptor:
    code: int
    description: str


class GeneralErrorCode(enum.IntEnum):
    BAD_REQUEST = 40000
    UNAUTHORIZED = 40100
    NOT_FOUND = 40400
    METHOD_NOT_ALLOWED = 40500
    EXAMPLE_SECURITY_ISSUE = 41300
    UNEXPECTED = 50000


class MovieErrorCode(enum.IntEnum):
    NULL_REQUEST_VIEW_MODEL = 40001
    EMPTY_OR_NULL_MOVIE_ID = 40002
    EMPTY_OR_NULL_MOVIE_TITLE = 40003
    EMPTY_OR_NULL_MOVIE_DESCRIPTION = 40004
    TITLE_NOT_BETWEEN_2_AND_50_CHARACTERS = 40005
    DESCRIPTION_NOT_BETWEEN_2_AND_50_CHARACTERS = 40006
    MOVIE_ALREADY_EXISTS = 40007
    MOVIE_NOT_FOUND = 40401
    ID_CONFLICT = 40901


# A sequence, not a dict, so a repeated code reaches register() and fails.
_DESCRIPTIONS: tuple[tuple[int, str], ...] = (
    (GeneralErrorCode.BAD_REQUEST, "Bad Request"),
    (GeneralErrorCode.UNAUTHORIZED, "Unauthorized"),
    (GeneralErrorCode.NOT_FOUND, "Resource not found"),
    (GeneralErrorCode.METHOD_NOT_ALLOWED, "Method not allowed"),
    (GeneralErrorCode.EXAMPLE_SECURITY_ISSUE, "This is an example security issue"),
    (GeneralErrorCode.UNEXPECTED, "An unexpected error occurred"),
    (MovieErrorCode.NULL_REQUEST_VIEW_MODEL, "Request model cannot be null"),
    (MovieErrorCode.EMPTY_OR_NULL_MOVIE_ID, "Movie Id cannot be null or empty"),
    (MovieErrorCode.EMPTY_OR_NULL_MOVIE_TITLE, "Movie Title cannot be null or empty"),
    (
        MovieErrorCode.EMPTY_OR_NULL_MOVIE_DESCRIPTION,
        "Movie Description cannot be null or empty",
    ),
    (
        MovieErrorCode.TITLE_NOT_BETWEEN_2_AND_50_CHARACTERS,
        "Movie Title should be between 2 and 50 characters",
    ),
    (
        MovieErrorCode.DESCRIPTION_NOT_BETWEEN_2_AND_50_CHARACTERS,
        "Movie Description should be between 2 and 50 characters",
    ),
    (MovieErrorCode.MOVIE_ALREADY_EXISTS, "Movie already exists"),
    (MovieErrorCode.MOVIE_NOT_FOUND, "Movie not found"),
    (MovieErrorCode.ID_CONFLICT, "Id in URL does not match with id in body"),
)


class ErrorCodeRegistry:
    """Code -> description lookup.

    Populated once at import; nothing mutates it while requests are served.
    """

    def __init__(self, descriptors: Iterable[ErrorCodeDescriptor] = ()) -> None:
        self._entries: dict[int, ErrorCodeDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: ErrorCodeDescriptor) -> None:
        code = int(descriptor.code)
        if code in self._entries:
            raise ValueError(f"error code {code} is already registered")
        self._entries[code] = ErrorCodeDescriptor(code, descriptor.description)

    def describe(self, code: int) -> str:
        return self._entries[int(code)].description

    def is_known(self, code: int) -> bool:
        return int(code) in self._entries

    def __iter__(self) -> Iterator[ErrorCodeDescriptor]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


registry = ErrorCodeRegistry(
    ErrorCodeDescriptor(code, description) for code, description in _DESCRIPTIONS
)


def describe(code: int) -> str:
    return registry.describe(code)


def code_for_status(status_code: int) -> int:
    """Registry code for a bare HTTP status, e.g. 404 -> 40400.

    Statuses without a block of their own fall back to 40000 or 50000.
    """
    code = status_code * 100
    if registry.is_known(code):
        return code
    if status_code >= 500:
        return int(GeneralErrorCode.UNEXPECTED)
    return int(GeneralErrorCode.BAD_REQUEST)
