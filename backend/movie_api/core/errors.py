from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from movie_api.core.error_codes import GeneralErrorCode, describe


T = TypeVar("T")


class ApiError(BaseModel):
    """One coded error in the response envelope."""

    model_config = ConfigDict(frozen=True)

    code: int
    message: str

    @classmethod
    def from_code(cls, code: int) -> ApiError:
        return cls(code=int(code), message=describe(code))


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every response body: `{"data": ..., "errors": [...]}`."""

    data: T | None = None
    errors: list[ApiError] = Field(default_factory=list)

    @classmethod
    def failure(cls, errors: Iterable[ApiError], data: Any = None) -> ApiResponse:
        return cls(data=data, errors=list(errors))


class FaultKind(str, enum.Enum):
    GENERAL = "General"
    SERVICE = "Service"
    VALIDATION = "Validation"
    WARNING = "Warning"
    AUTHENTICATION = "Authentication"
    SECURITY = "Security"


class Fault(Exception):
    """Base for the expected failure variants.

    Anything raised that is not a Fault is treated as unexpected.
    """


@dataclasses.dataclass(eq=False)
class ValidationFault(Fault):
    """Business-rule violations collected from one validation pass."""

    errors: list[ApiError]
    status_code: int = 400

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("ValidationFault requires at least one error")
        super().__init__("; ".join(f"{e.code}: {e.message}" for e in self.errors))


@dataclasses.dataclass(eq=False)
class DomainFault(Fault):
    """Expected business condition such as not-found or conflict."""

    errors: list[ApiError]
    status_code: int = 400
    payload: Any | None = None

    def __post_init__(self) -> None:
        super().__init__("; ".join(f"{e.code}: {e.message}" for e in self.errors))

    @classmethod
    def from_code(
        cls, code: int, *, status_code: int, payload: Any | None = None
    ) -> DomainFault:
        return cls(
            errors=[ApiError.from_code(code)], status_code=status_code, payload=payload
        )


@dataclasses.dataclass(eq=False)
class NestedFault(Fault):
    """A fault reported on behalf of other faults.

    With children, only the leaves reach the client; the wrapper's own
    code and description are used when there are none.
    """

    code: int
    description: str
    children: list[Fault] = dataclasses.field(default_factory=list)
    kind: FaultKind = FaultKind.GENERAL
    status_code: int = 400

    def __post_init__(self) -> None:
        for child in self.children:
            if not isinstance(child, Fault):
                raise TypeError(
                    f"NestedFault children must be faults, got {type(child).__name__}"
                )
        super().__init__(self.description)


def flatten(source: Fault | ApiError | Iterable[Fault | ApiError]) -> list[ApiError]:
    """Reduce a fault tree (or an already flat list) to its leaf errors.

    Leaves map to themselves, so `flatten(flatten(x)) == flatten(x)`.
    """
    if isinstance(source, ApiError):
        return [source]
    if isinstance(source, (ValidationFault, DomainFault)):
        return list(source.errors)
    if isinstance(source, NestedFault):
        if not source.children:
            return [ApiError(code=int(source.code), message=source.description)]
        leaves: list[ApiError] = []
        for child in source.children:
            leaves.extend(flatten(child))
        return leaves
    if isinstance(source, Fault):
        # A fault with no error list of its own reports like an unexpected one.
        return [ApiError.from_code(GeneralErrorCode.UNEXPECTED)]

    leaves = []
    for item in source:
        leaves.extend(flatten(item))
    return leaves


def fault_kinds(fault: NestedFault) -> list[str]:
    """Kind of each leaf, aligned with `flatten(fault)`; used for log lines."""
    if not fault.children:
        return [fault.kind.value]
    kinds: list[str] = []
    for child in fault.children:
        if isinstance(child, NestedFault):
            kinds.extend(fault_kinds(child))
        elif isinstance(child, ValidationFault):
            kinds.extend(FaultKind.VALIDATION.value for _ in child.errors)
        elif isinstance(child, DomainFault):
            kinds.extend(FaultKind.SERVICE.value for _ in child.errors)
        else:
            kinds.append(FaultKind.GENERAL.value)
    return kinds
