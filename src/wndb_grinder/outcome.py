"""Outcome of a table lookup: a value, a recoverable or a fatal failure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from wndb_grinder.exceptions import CompatibilityViolation, MalformedInput


@dataclass(frozen=True, slots=True)
class Ok:
    """The lookup succeeded."""

    value: Any

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class Recoverable:
    """The value exists only outside the legacy rule set."""

    error: CompatibilityViolation

    @property
    def cause(self) -> str:
        return self.error.cause

    def unwrap(self) -> Any:
        raise self.error


@dataclass(frozen=True, slots=True)
class Fatal:
    """The rule tables have no entry for the value."""

    error: MalformedInput

    def unwrap(self) -> Any:
        raise self.error


Outcome = Union[Ok, Recoverable, Fatal]
