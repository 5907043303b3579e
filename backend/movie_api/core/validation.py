"""Rule-based request validation.

A `Validator` runs its rules in declaration order and collects every failure
into one `ValidationFault`. Rules may name parent rules in `depends_on`; a rule
whose parent failed (or was itself skipped) is skipped and never reports, so a
missing field yields one error instead of a presence error plus a length error.
"""

from __future__ import annotations

import dataclasses
import operator
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from movie_api.core.errors import ApiError, ValidationFault


def _getter(field: str | None) -> Callable[[Any], Any]:
    if field is None:
        return lambda model: model
    return operator.attrgetter(field)


@dataclasses.dataclass(frozen=True)
class Rule:
    name: str
    code: int
    depends_on: tuple[str, ...] = ()

    async def passes(self, model: Any) -> bool:
        raise NotImplementedError


@dataclasses.dataclass(frozen=True)
class Presence(Rule):
    """Fails on None, or on a string that is empty after stripping."""

    field: str | None = None

    async def passes(self, model: Any) -> bool:
        value = _getter(self.field)(model)
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        return True


@dataclasses.dataclass(frozen=True)
class LengthBetween(Rule):
    """Inclusive length bounds; strings are measured after stripping."""

    field: str | None = None
    min_length: int = 0
    max_length: int | None = None

    async def passes(self, model: Any) -> bool:
        value = _getter(self.field)(model)
        length = len(value.strip() if isinstance(value, str) else value)
        if length < self.min_length:
            return False
        return self.max_length is None or length <= self.max_length


@dataclasses.dataclass(frozen=True)
class Predicate(Rule):
    check: Callable[[Any], bool] = lambda model: True

    async def passes(self, model: Any) -> bool:
        return bool(self.check(model))


@dataclasses.dataclass(frozen=True)
class Existence(Rule):
    """Fails when the collaborator reports the entity already exists."""

    exists: Callable[[Any], Awaitable[bool]] | None = None

    async def passes(self, model: Any) -> bool:
        if self.exists is None:
            raise ValueError(f"rule {self.name!r} has no existence check")
        return not await self.exists(model)


class Validator:
    def __init__(self, rules: Sequence[Rule]) -> None:
        names = [rule.name for rule in rules]
        if len(set(names)) != len(names):
            raise ValueError("rule names must be unique")
        known: set[str] = set()
        for rule in rules:
            missing = [parent for parent in rule.depends_on if parent not in known]
            if missing:
                raise ValueError(
                    f"rule {rule.name!r} depends on rules not declared before it: "
                    f"{', '.join(missing)}"
                )
            known.add(rule.name)
        self.rules = tuple(rules)

    async def validate(self, model: Any) -> list[ApiError]:
        passed: set[str] = set()
        errors: list[ApiError] = []
        for rule in self.rules:
            if any(parent not in passed for parent in rule.depends_on):
                continue
            if await rule.passes(model):
                passed.add(rule.name)
            else:
                errors.append(ApiError.from_code(rule.code))
        return errors

    async def assert_valid(self, model: Any) -> None:
        errors = await self.validate(model)
        if errors:
            raise ValidationFault(errors=errors)
